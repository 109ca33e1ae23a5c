import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from libstore.core.logging import storage_event_logger
from libstore.src.models.catalogue import Catalogue
from libstore.src.storage.codec import CatalogueCodec, count_by_kind


class Storage:
    """Reads and writes the catalogue document at a fixed path."""

    def __init__(self, path: Union[str, Path], codec: Optional[CatalogueCodec] = None):
        self.path = Path(path)
        self.codec = codec or CatalogueCodec()

    def load(self) -> Catalogue:
        """Load the catalogue, or an empty one if nothing was saved yet.

        Raises:
            DeserializationError: If the stored document cannot be decoded.
            OSError: If the file exists but cannot be read.
        """
        if not self.path.exists():
            return Catalogue()

        items = self.codec.from_file(self.path)
        storage_event_logger.catalogue_loaded(str(self.path), len(items))
        return Catalogue(items)

    def save(self, catalogue: Catalogue) -> dict:
        """Write the catalogue and return the number of entries per kind."""
        document = self.codec.encode_document(catalogue)
        text = self.codec.render(document)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._replace_file(text)

        counts = count_by_kind(document)
        storage_event_logger.catalogue_saved(str(self.path), counts)
        return counts

    def _replace_file(self, text: str) -> None:
        # A failed write leaves the previous document in place
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
