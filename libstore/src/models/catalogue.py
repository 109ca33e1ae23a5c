from typing import Iterable, List

from libstore.src.schema.items import Item


class Catalogue:
    """Ordered in-memory collection of catalogue items of any kind."""

    def __init__(self, items: Iterable[Item] = ()):
        self._items: List[Item] = list(items)

    def get_all_items(self) -> List[Item]:
        return list(self._items)

    def set_items(self, items: Iterable[Item]) -> None:
        self._items = list(items)

    def add(self, item: Item) -> None:
        self._items.append(item)

    def items_of_kind(self, kind: str) -> List[Item]:
        return [item for item in self._items if item.kind == kind]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)
