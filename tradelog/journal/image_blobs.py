"""
Image blob ownership for trade entries.

The journal store never touches blobs. Whoever deletes an entry or clears its
image must call release()/delete() here; whoever attaches an image calls save()
before handing the entry to the store.
"""

from __future__ import annotations

import os
from typing import Optional

from tradelog.journal.journal_models import TradeEntry
from tradelog.store.codec import atomic_write_bytes
from tradelog.utils.exceptions import BlobError
from tradelog.utils.logger import get_logger

logger = get_logger(__name__)

IMAGE_EXTENSION = ".jpg"


class ImageBlobStore:
    def __init__(self, directory: str):
        self._directory = directory
        os.makedirs(directory, exist_ok=True)

    @property
    def directory(self) -> str:
        return self._directory

    @staticmethod
    def filename_for(entry: TradeEntry) -> str:
        return f"{entry.id}{IMAGE_EXTENSION}"

    def path_for(self, filename: str) -> str:
        # Blob names are bare file names relative to the data directory.
        return os.path.join(self._directory, os.path.basename(filename))

    def exists(self, filename: str) -> bool:
        return os.path.isfile(self.path_for(filename))

    def load(self, entry: TradeEntry) -> Optional[bytes]:
        if not entry.image_path or not self.exists(entry.image_path):
            return None
        with open(self.path_for(entry.image_path), "rb") as f:
            return f.read()

    def save(self, entry: TradeEntry, data: bytes) -> str:
        """Write (or overwrite) the entry's blob and return its file name."""
        filename = entry.image_path or self.filename_for(entry)
        path = self.path_for(filename)
        try:
            atomic_write_bytes(path, data)
        except OSError as e:
            logger.error("blob_save_failed", entry_id=entry.id, path=path, error=str(e))
            raise BlobError(f"Failed to save image: {e}", path)
        logger.info("blob_saved", entry_id=entry.id, filename=filename, size=len(data))
        return filename

    def delete(self, filename: str) -> bool:
        """Remove a blob. A missing file is not an error; returns whether one was removed."""
        path = self.path_for(filename)
        if not os.path.isfile(path):
            return False
        try:
            os.remove(path)
        except OSError as e:
            logger.error("blob_delete_failed", path=path, error=str(e))
            raise BlobError(f"Failed to delete image: {e}", path)
        logger.info("blob_deleted", filename=filename)
        return True

    def release(self, entry: TradeEntry) -> bool:
        """Drop the blob owned by a deleted entry."""
        if not entry.image_path:
            return False
        return self.delete(entry.image_path)
