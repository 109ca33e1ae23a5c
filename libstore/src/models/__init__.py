"""
Models package for the catalogue service.
Exports the in-memory catalogue and its item kinds.
"""

from libstore.src.models.catalogue import Catalogue
from libstore.src.schema.items import Audio, Book, Item, Magazine, Miscellaneous, Video

__all__ = ["Catalogue", "Item", "Audio", "Book", "Magazine", "Miscellaneous", "Video"]
