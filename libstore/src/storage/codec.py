"""
JSON codec for the catalogue document.

The document is one object with a fixed array field per item kind::

    {"audio": [...], "book": [...], "item": [...], "magazine": [...], "video": [...]}

Items are routed to their array by their ``kind`` tag. On load the arrays are
decoded in the same fixed order and concatenated, so relative order is kept
within a kind but not across kinds.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, Union

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from libstore.core.error_handling import DeserializationError, SerializationError
from libstore.core.logging import storage_event_logger
from libstore.core.settings import settings
from libstore.src.models.catalogue import Catalogue
from libstore.src.schema.items import (
    Audio,
    Book,
    Item,
    ItemKindEnum,
    Magazine,
    Miscellaneous,
    Video,
)

Document = Dict[str, List[Dict[str, Any]]]


@dataclass(frozen=True)
class KindDescriptor:
    field_name: str
    model: Type[Item]


KIND_DESCRIPTORS = (
    KindDescriptor(ItemKindEnum.audio.value, Audio),
    KindDescriptor(ItemKindEnum.book.value, Book),
    KindDescriptor(ItemKindEnum.item.value, Miscellaneous),
    KindDescriptor(ItemKindEnum.magazine.value, Magazine),
    KindDescriptor(ItemKindEnum.video.value, Video),
)

DOCUMENT_FIELDS = tuple(descriptor.field_name for descriptor in KIND_DESCRIPTORS)


class CatalogueCodec:
    """Encode a catalogue to the JSON document and decode it back.

    Args:
        indent: Indentation of the rendered document.
        strict_document: Raise on an absent kind field instead of reading it as empty.
        skip_invalid_items: Drop undecodable entries with a warning instead of failing.

    Unset arguments fall back to the service settings.
    """

    def __init__(
        self,
        indent: Optional[int] = None,
        strict_document: Optional[bool] = None,
        skip_invalid_items: Optional[bool] = None
    ):
        self.indent = settings.json_indent if indent is None else indent
        self.strict_document = (
            settings.strict_document if strict_document is None else strict_document
        )
        self.skip_invalid_items = (
            settings.skip_invalid_items if skip_invalid_items is None else skip_invalid_items
        )

    def encode_document(self, catalogue: Catalogue) -> Document:
        """Group the catalogue's items into the five kind arrays.

        Raises:
            SerializationError: If an item has no known kind, cannot be dumped,
                or would not decode back into its kind.
        """
        descriptors = {descriptor.field_name: descriptor for descriptor in KIND_DESCRIPTORS}
        buckets: Document = {field_name: [] for field_name in DOCUMENT_FIELDS}
        for item in catalogue.get_all_items():
            kind = getattr(item, "kind", None)
            if kind not in descriptors:
                raise SerializationError(
                    f"Cannot serialize catalogue entry of unknown kind: {kind!r}",
                    item=item
                )
            buckets[kind].append(self._encode_item(descriptors[kind], item))
        return buckets

    def render(self, document: Document) -> str:
        return json.dumps(document, indent=self.indent, ensure_ascii=False)

    def to_json(self, catalogue: Catalogue) -> str:
        return self.render(self.encode_document(catalogue))

    def from_json(self, text: Union[str, bytes]) -> List[Item]:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DeserializationError(
                f"Catalogue document is not valid JSON: {exc.msg} (line {exc.lineno})"
            ) from exc
        return self.decode_document(raw)

    def from_file(self, path: Union[str, Path]) -> List[Item]:
        # I/O errors propagate unchanged
        return self.from_json(Path(path).read_text(encoding="utf-8"))

    def decode_document(self, document: Any) -> List[Item]:
        """Decode every kind array of ``document`` into one list of items.

        Unknown top-level keys are ignored. An absent or null kind field reads
        as an empty array unless the codec is strict.

        Raises:
            DeserializationError: If the document is not an object of arrays,
                or an entry does not match its kind's schema.
        """
        if not isinstance(document, Mapping):
            raise DeserializationError(
                f"Catalogue document must be a JSON object, got {type(document).__name__}"
            )

        items: List[Item] = []
        for descriptor in KIND_DESCRIPTORS:
            name = descriptor.field_name
            entries = document.get(name)
            if entries is None:
                if self.strict_document:
                    raise DeserializationError(
                        f"Catalogue document is missing the '{name}' field",
                        missing_field=name
                    )
                storage_event_logger.missing_field(name)
                continue
            if not isinstance(entries, list):
                raise DeserializationError(
                    f"Catalogue field '{name}' must be an array, got {type(entries).__name__}",
                    kind=name
                )
            items.extend(self._decode_entries(descriptor, entries))
        return items

    def _encode_item(self, descriptor: KindDescriptor, item: Item) -> Dict[str, Any]:
        label = f"{descriptor.field_name} entry '{getattr(item, 'id', '?')}'"
        try:
            entry = item.model_dump(mode="json", exclude_none=True, warnings=False)
        except PydanticSerializationError as exc:
            raise SerializationError(f"Cannot serialize {label}: {exc}", item=item) from exc

        # The entry must decode back into its bucket's model, or the saved
        # document would not load
        try:
            descriptor.model.model_validate(entry)
        except ValidationError as exc:
            raise SerializationError(
                f"Cannot serialize {label}: {exc.error_count()} invalid field(s)",
                item=item
            ) from exc
        return entry

    def _decode_entries(self, descriptor: KindDescriptor, entries: List[Any]) -> List[Item]:
        decoded = []
        for index, entry in enumerate(entries):
            try:
                decoded.append(descriptor.model.model_validate(entry))
            except ValidationError as exc:
                if self.skip_invalid_items:
                    storage_event_logger.item_skipped(
                        descriptor.field_name, index, f"{exc.error_count()} validation error(s)"
                    )
                    continue
                raise DeserializationError(
                    f"Invalid {descriptor.field_name} entry at index {index}",
                    kind=descriptor.field_name,
                    index=index,
                    errors=exc.errors(include_url=False)
                ) from exc
        return decoded


def count_by_kind(document: Document) -> Dict[str, int]:
    return {name: len(document.get(name, [])) for name in DOCUMENT_FIELDS}
