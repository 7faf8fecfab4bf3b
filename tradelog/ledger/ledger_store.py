"""P&L ledger storage — ad-hoc payouts and expenses in one JSON file."""

from __future__ import annotations

import os
from typing import Optional

from tradelog.ledger.ledger_models import LEDGER_ENTRY_CODEC, LedgerEntry
from tradelog.store.record_store import RecordStore

DEFAULT_LEDGER_FILE = "pnl_entries.json"


class LedgerStore(RecordStore[LedgerEntry]):

    def __init__(self, path: Optional[str] = None, *, directory: Optional[str] = None,
                 autoload: bool = True):
        if path is None:
            path = os.path.join(directory or ".", DEFAULT_LEDGER_FILE)
        super().__init__(path, LEDGER_ENTRY_CODEC, autoload=autoload)

    def running_total(self) -> float:
        """Sum of every amount currently in the ledger. Never cached."""
        return float(sum(e.amount for e in self.entries))
