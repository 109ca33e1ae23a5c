from typing import Annotated, Any
from fastapi import APIRouter, Body, Depends, HTTPException

from libstore.core.error_handling import CorruptCatalogueError, DeserializationError
from libstore.core.logging import audit_logger
from libstore.core.settings import settings
from libstore.src.models.catalogue import Catalogue
from libstore.src.storage.codec import DOCUMENT_FIELDS
from libstore.src.storage.storage import Storage

router = APIRouter()


def get_storage() -> Storage:
    return Storage(settings.data_file)


StorageDep = Annotated[Storage, Depends(get_storage)]


def _load_stored(storage: Storage) -> Catalogue:
    try:
        return storage.load()
    except DeserializationError as exc:
        raise CorruptCatalogueError(f"Stored catalogue is unreadable: {exc.detail}", exc) from exc


# Storage does blocking file I/O, so these routes are plain `def`

@router.get("/")
def export_catalogue(storage: StorageDep):
    """
    Return the stored catalogue as its persisted document.

    The response has one array per item kind, in the fixed order
    audio, book, item, magazine, video.
    """
    catalogue = _load_stored(storage)
    return storage.codec.encode_document(catalogue)


@router.get("/{kind}s")
def get_items(kind: str, storage: StorageDep):
    if kind not in DOCUMENT_FIELDS:
        raise HTTPException(status_code=400, detail="Invalid item kind")
    catalogue = _load_stored(storage)
    return storage.codec.encode_document(catalogue)[kind]


@router.put("/")
def import_catalogue(storage: StorageDep, document: Annotated[Any, Body()]):
    """
    Replace the stored catalogue with the given document.

    Raises:
        DeserializationError: 422 if the document or one of its entries
            cannot be decoded. Nothing is written in that case.
    """
    items = storage.codec.decode_document(document)
    counts = storage.save(Catalogue(items))

    audit_logger.info(
        "Catalogue replaced",
        extra={
            "event_type": "catalogue_import",
            "path": str(storage.path),
            "counts": counts,
            "item_count": len(items),
        }
    )
    return {"status": "saved", "counts": counts, "item_count": len(items)}
