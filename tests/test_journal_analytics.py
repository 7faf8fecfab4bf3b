"""P/L parsing, day totals and display tones."""

from __future__ import annotations

from datetime import date

import pytest

from conftest import at, make_trade
from tradelog.journal.journal_analytics import (
    NEGATIVE,
    POSITIVE,
    WARNING,
    JournalAnalytics,
    amount_tone,
    entry_amount,
    outcome_tone,
    parse_amount,
)
from tradelog.journal.journal_models import WinLossState


@pytest.mark.parametrize("text, expected", [
    ("250", 250.0),
    ("$1,250.50", 1250.50),
    ("-40", -40.0),
    ("$-12.5", -12.5),
    ("+30 pts", 30.0),
    ("", 0.0),
    ("n/a", 0.0),
    ("-", 0.0),
    ("1.2.3", 0.0),
])
def test_parse_amount(text, expected):
    assert parse_amount(text) == pytest.approx(expected)


def test_entry_amount_none_when_unparsable():
    assert entry_amount(make_trade(profit_loss="")) is None
    assert entry_amount(make_trade(profit_loss="$-75")) == -75.0


def test_outcome_tone():
    assert outcome_tone(WinLossState.WIN) == POSITIVE
    assert outcome_tone(WinLossState.LOSS) == NEGATIVE
    assert outcome_tone(WinLossState.BREAKEVEN) == WARNING


def test_amount_tone():
    assert amount_tone(0) == POSITIVE
    assert amount_tone(-0.01) == NEGATIVE


class TestJournalAnalytics:

    @pytest.fixture
    def analytics(self, journal_store):
        journal_store.add(make_trade(date=at(2024, 1, 10, 9), profit_loss="$200",
                                     win_loss=WinLossState.WIN))
        journal_store.add(make_trade(date=at(2024, 1, 10, 14), profit_loss="-50",
                                     win_loss=WinLossState.LOSS))
        journal_store.add(make_trade(date=at(2024, 1, 11, 10), profit_loss="oops",
                                     win_loss=WinLossState.BREAKEVEN))
        return JournalAnalytics(journal_store)

    def test_day_total(self, analytics, tz):
        assert analytics.day_total(date(2024, 1, 10), tz) == pytest.approx(150.0)
        assert analytics.day_total(date(2024, 1, 11), tz) == 0.0
        assert analytics.day_total(date(2024, 1, 12), tz) == 0.0

    def test_daily_totals(self, analytics, tz):
        totals = analytics.daily_totals(tz)
        assert totals == {
            at(2024, 1, 10, 0): pytest.approx(150.0),
            at(2024, 1, 11, 0): 0.0,
        }

    def test_win_loss_counts(self, analytics, journal_store, tz):
        assert analytics.win_loss_counts() == {"WIN": 1, "LOSS": 1, "BE": 1}
        day = journal_store.entries_on(date(2024, 1, 10), tz)
        assert analytics.win_loss_counts(day) == {"WIN": 1, "LOSS": 1, "BE": 0}
