"""
Journal service — the front end's single entry point for trade entries.

Owns what the store deliberately does not: the save gate on drafts and the
image blob lifecycle (write before add/update, delete on remove or clear).
"""

from __future__ import annotations

from dataclasses import replace
from datetime import tzinfo
from typing import List, Optional

from tradelog.journal.image_blobs import ImageBlobStore
from tradelog.journal.journal_models import TradeEntry
from tradelog.journal.journal_store import TradeJournalStore
from tradelog.store.calendar import DayLike
from tradelog.store.record_store import StoreResult
from tradelog.utils.exceptions import BlobError, DraftValidationError
from tradelog.utils.logger import get_logger

logger = get_logger(__name__)


class JournalService:
    def __init__(self, store: TradeJournalStore, blobs: ImageBlobStore):
        self._store = store
        self._blobs = blobs

    @property
    def store(self) -> TradeJournalStore:
        return self._store

    @staticmethod
    def can_save(draft: TradeEntry) -> bool:
        return bool(draft.analysis.strip())

    def _require_saveable(self, draft: TradeEntry) -> None:
        if not self.can_save(draft):
            raise DraftValidationError("Analysis is required before saving", field="analysis")

    def save_new(self, draft: TradeEntry, image_data: Optional[bytes] = None) -> StoreResult:
        """Validate, store the screenshot (if any) under the entry's id, then add."""
        self._require_saveable(draft)
        entry = draft
        if image_data is not None:
            try:
                entry = replace(draft, image_path=self._blobs.save(draft, image_data))
            except BlobError as e:
                # Entry is still saved, just without its screenshot.
                logger.warning("entry_saved_without_image", entry_id=draft.id, error=e.message)
        return self._store.add(entry)

    def save_changes(self, original: TradeEntry, draft: TradeEntry,
                     image_data: Optional[bytes] = None) -> StoreResult:
        """
        Apply an edit. New image data replaces the blob; a draft whose
        image_path was cleared drops the original's blob.
        """
        self._require_saveable(draft)
        entry = draft
        if image_data is not None:
            target = draft if draft.image_path else replace(draft, image_path=original.image_path)
            try:
                entry = replace(draft, image_path=self._blobs.save(target, image_data))
            except BlobError as e:
                logger.warning("entry_updated_without_image", entry_id=draft.id, error=e.message)
        elif draft.image_path is None and original.image_path:
            # Failed blob delete leaves an orphan file; the edit still goes through.
            try:
                self._blobs.delete(original.image_path)
            except BlobError as e:
                logger.warning("blob_left_behind", entry_id=original.id, error=e.message)
        return self._store.update(entry)

    def remove(self, entry: TradeEntry) -> StoreResult:
        result = self._store.delete(entry)
        if result.changed:
            try:
                self._blobs.release(entry)
            except BlobError as e:
                logger.warning("blob_left_behind", entry_id=entry.id, error=e.message)
        return result

    def remove_all_on(self, day: DayLike, tz: Optional[tzinfo] = None) -> List[StoreResult]:
        return [self.remove(entry) for entry in self._store.entries_on(day, tz)]
