"""
Ledger Data Models
==================

LedgerEntry — one ad-hoc P&L line: a signed amount, a note, a date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict

from tradelog.store.calendar import as_aware, local_now
from tradelog.store.codec import RecordCodec, format_timestamp, parse_timestamp, text_field
from tradelog.store.record_store import new_record_id
from tradelog.utils.exceptions import RecordDecodeError


class LedgerEntryKind(str, Enum):
    PAYOUT = "payout"
    EXPENSE = "expense"

    def signed(self, amount: float) -> float:
        return abs(amount) if self == LedgerEntryKind.PAYOUT else -abs(amount)


@dataclass
class LedgerEntry:
    id: str = field(default_factory=new_record_id)
    date: datetime = field(default_factory=local_now)
    amount: float = 0.0             # + payout, - expense
    note: str = ""
    created_at: datetime = field(default_factory=local_now)

    def __post_init__(self):
        self.date = as_aware(self.date)
        self.created_at = as_aware(self.created_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": format_timestamp(self.date),
            "amount": float(self.amount),
            "note": self.note,
            "createdAt": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LedgerEntry":
        try:
            amount = d["amount"]
            if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                raise RecordDecodeError(f"Invalid amount {amount!r}")
            return cls(
                id=text_field(d, "id"),
                date=parse_timestamp(d["date"]),
                amount=float(amount),
                note=text_field(d, "note"),
                created_at=parse_timestamp(d["createdAt"]),
            )
        except KeyError as e:
            raise RecordDecodeError(f"Missing key {e.args[0]!r}")


LEDGER_ENTRY_CODEC: RecordCodec[LedgerEntry] = RecordCodec(
    to_dict=LedgerEntry.to_dict,
    from_dict=LedgerEntry.from_dict,
)
