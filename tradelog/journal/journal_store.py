"""
Journal Storage — trade entries in a single JSON file
======================================================

Thin configuration of the generic RecordStore. Image blobs live in the same
directory as the JSON file but are owned by ImageBlobStore, not by this store.
"""

from __future__ import annotations

import os
from typing import List, Optional

from tradelog.journal.journal_models import TRADE_ENTRY_CODEC, TradeEntry
from tradelog.store.record_store import RecordStore

DEFAULT_JOURNAL_FILE = "journal_entries.json"


class TradeJournalStore(RecordStore[TradeEntry]):
    """Trade journal entries, newest trade first."""

    def __init__(self, path: Optional[str] = None, *, directory: Optional[str] = None,
                 autoload: bool = True):
        if path is None:
            path = os.path.join(directory or ".", DEFAULT_JOURNAL_FILE)
        super().__init__(path, TRADE_ENTRY_CODEC, autoload=autoload)

    @property
    def directory(self) -> str:
        return os.path.dirname(os.path.abspath(self.path))

    def entries_with_images(self) -> List[TradeEntry]:
        return [e for e in self.entries if e.image_path]
