"""Check the stored catalogue document"""
from libstore.core.settings import settings
from libstore.src.storage.codec import DOCUMENT_FIELDS
from libstore.src.storage.storage import Storage


def count_items():
    catalogue = Storage(settings.data_file).load()
    print(f'Total items in {settings.data_file}: {len(catalogue)}')
    for kind in DOCUMENT_FIELDS:
        items = catalogue.items_of_kind(kind)
        print(f'  {kind}: {len(items)}')
        for item in items[:5]:
            print(f'    {item.id}: {item.title} ({item.status})')

count_items()
