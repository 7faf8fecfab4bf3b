"""
Ledger service — turns raw form input into ledger entries.

Amounts arrive as text plus a payout/expense toggle; the sign comes from the
toggle, never from the text.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, List, Optional

from tradelog.ledger.ledger_models import LedgerEntry, LedgerEntryKind
from tradelog.ledger.ledger_store import LedgerStore
from tradelog.store.calendar import local_now
from tradelog.store.record_store import StoreResult
from tradelog.utils.exceptions import DraftValidationError


class LedgerService:
    def __init__(self, store: LedgerStore):
        self._store = store

    @property
    def store(self) -> LedgerStore:
        return self._store

    @staticmethod
    def can_submit(amount_text: str) -> bool:
        return bool(amount_text.strip())

    def add_from_input(self, amount_text: str, kind: LedgerEntryKind, note: str = "",
                       date: Optional[datetime] = None) -> StoreResult:
        try:
            raw = float(amount_text.strip())
        except ValueError:
            raise DraftValidationError(f"Amount {amount_text!r} is not a number", field="amount")
        if not math.isfinite(raw):
            raise DraftValidationError(f"Amount {amount_text!r} is not a number", field="amount")
        entry = LedgerEntry(
            date=date or local_now(),
            amount=kind.signed(raw),
            note=note.strip(),
        )
        return self._store.add(entry)

    def delete_at(self, offsets: Iterable[int]) -> List[StoreResult]:
        """Delete by position in the collection as it stands before the call."""
        snapshot = self._store.entries
        positions = sorted(set(offsets))
        for i in positions:
            if not 0 <= i < len(snapshot):
                raise IndexError(f"Ledger offset {i} out of range")
        return [self._store.delete(snapshot[i]) for i in positions]
