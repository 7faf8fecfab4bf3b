"""
Journal Analytics — totals and display hints over free-text P/L fields
======================================================================

P/L, points and prices are stored as typed by the user ("$1,250", "-40.5").
Numbers are extracted by stripping everything except digits, '.' and '-';
anything that still fails to parse counts as zero.
"""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import datetime, tzinfo
from typing import Dict, Iterable, Optional

from tradelog.journal.journal_models import TradeEntry, WinLossState
from tradelog.journal.journal_store import TradeJournalStore
from tradelog.store.calendar import DayLike, start_of_day

_NON_NUMERIC = re.compile(r"[^0-9.\-]")

POSITIVE = "positive"
NEGATIVE = "negative"
WARNING = "warning"


def _parse(value: str) -> Optional[float]:
    cleaned = _NON_NUMERIC.sub("", value or "")
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_amount(value: str) -> float:
    return _parse(value) or 0.0


def entry_amount(entry: TradeEntry) -> Optional[float]:
    """Parsed P/L, or None when the field holds no usable number."""
    return _parse(entry.profit_loss)


def outcome_tone(state: WinLossState) -> str:
    if state == WinLossState.WIN:
        return POSITIVE
    if state == WinLossState.LOSS:
        return NEGATIVE
    return WARNING


def amount_tone(amount: float) -> str:
    return POSITIVE if amount >= 0 else NEGATIVE


class JournalAnalytics:
    def __init__(self, store: TradeJournalStore):
        self._store = store

    def day_total(self, day: DayLike, tz: Optional[tzinfo] = None) -> float:
        return sum(parse_amount(e.profit_loss) for e in self._store.entries_on(day, tz))

    def daily_totals(self, tz: Optional[tzinfo] = None) -> Dict[datetime, float]:
        totals: Dict[datetime, float] = defaultdict(float)
        for entry in self._store.entries:
            totals[start_of_day(entry.date, tz)] += parse_amount(entry.profit_loss)
        return dict(totals)

    def win_loss_counts(self, entries: Optional[Iterable[TradeEntry]] = None) -> Dict[str, int]:
        counts = {state.value: 0 for state in WinLossState}
        for entry in (self._store.entries if entries is None else entries):
            counts[entry.win_loss.value] += 1
        return counts
