"""
Trade Journal
=============

Architecture:
  journal_models.py    — TradeEntry and its enums
  journal_store.py     — JSON-file-backed store (generic RecordStore)
  image_blobs.py       — screenshot files owned per entry
  journal_service.py   — save gate + blob lifecycle around the store
  journal_analytics.py — P/L parsing, day totals, outcome tones
"""

from tradelog.journal.journal_models import (
    EntryModel,
    EntryTimeframe,
    TradeBias,
    TradeEntry,
    TradeRating,
    WinLossState,
)

from tradelog.journal.journal_store import TradeJournalStore
from tradelog.journal.image_blobs import ImageBlobStore
from tradelog.journal.journal_service import JournalService
from tradelog.journal.journal_analytics import JournalAnalytics

__all__ = [
    # Models
    "TradeEntry", "TradeBias", "EntryModel", "EntryTimeframe", "WinLossState", "TradeRating",
    # Engines
    "TradeJournalStore", "ImageBlobStore", "JournalService", "JournalAnalytics",
]
