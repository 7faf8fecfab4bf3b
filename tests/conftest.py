"""
Shared fixtures for store, journal and ledger tests.

All stores write under pytest's tmp_path. Day-boundary tests use a fixed
UTC-5 offset so they do not depend on the machine's timezone.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from tradelog.journal.image_blobs import ImageBlobStore
from tradelog.journal.journal_models import TradeEntry, WinLossState
from tradelog.journal.journal_service import JournalService
from tradelog.journal.journal_store import TradeJournalStore
from tradelog.ledger.ledger_models import LedgerEntry
from tradelog.ledger.ledger_service import LedgerService
from tradelog.ledger.ledger_store import LedgerStore

NEW_YORK_WINTER = timezone(timedelta(hours=-5))


def at(year: int, month: int, day: int, hour: int = 12, minute: int = 0,
       tz: timezone = NEW_YORK_WINTER) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=tz)


_ids = itertools.count(1)


def make_trade(**overrides: Any) -> TradeEntry:
    fields = {
        "id": f"TRADE-{next(_ids):04d}",
        "date": at(2024, 1, 10),
        "pair": "MNQ",
        "win_loss": WinLossState.WIN,
        "profit_loss": "$250",
        "analysis": "Clean break of the opening range",
        "created_at": at(2024, 1, 10, 16),
    }
    fields.update(overrides)
    return TradeEntry(**fields)


def make_ledger(**overrides: Any) -> LedgerEntry:
    fields = {
        "id": f"LEDGER-{next(_ids):04d}",
        "date": at(2024, 1, 10),
        "amount": 100.0,
        "note": "",
        "created_at": at(2024, 1, 10, 16),
    }
    fields.update(overrides)
    return LedgerEntry(**fields)


# ─────────────────────────────────────────────────────────
# Pytest Fixtures
# ─────────────────────────────────────────────────────────

@pytest.fixture
def tz() -> timezone:
    return NEW_YORK_WINTER


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "documents"
    path.mkdir()
    return path


@pytest.fixture
def journal_path(data_dir) -> str:
    return str(data_dir / "journal_entries.json")


@pytest.fixture
def ledger_path(data_dir) -> str:
    return str(data_dir / "pnl_entries.json")


@pytest.fixture
def journal_store(journal_path) -> TradeJournalStore:
    return TradeJournalStore(journal_path)


@pytest.fixture
def ledger_store(ledger_path) -> LedgerStore:
    return LedgerStore(ledger_path)


@pytest.fixture
def blobs(journal_store) -> ImageBlobStore:
    return ImageBlobStore(journal_store.directory)


@pytest.fixture
def journal_service(journal_store, blobs) -> JournalService:
    return JournalService(journal_store, blobs)


@pytest.fixture
def ledger_service(ledger_store) -> LedgerService:
    return LedgerService(ledger_store)
