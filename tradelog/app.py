from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tradelog.journal.image_blobs import ImageBlobStore
from tradelog.journal.journal_analytics import JournalAnalytics
from tradelog.journal.journal_service import JournalService
from tradelog.journal.journal_store import TradeJournalStore
from tradelog.ledger.ledger_service import LedgerService
from tradelog.ledger.ledger_store import LedgerStore
from tradelog.utils.config import Settings, get_settings
from tradelog.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class TradeLogApp:
    settings: Settings
    journal: TradeJournalStore
    ledger: LedgerStore
    blobs: ImageBlobStore
    journal_service: JournalService
    ledger_service: LedgerService
    analytics: JournalAnalytics


def create_app(settings: Optional[Settings] = None, *, configure_logging: bool = True) -> TradeLogApp:
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    journal = TradeJournalStore(settings.journal_path)
    ledger = LedgerStore(settings.ledger_path)
    blobs = ImageBlobStore(journal.directory)

    logger.info("app_started", data_dir=settings.resolve_data_dir(),
                journal_entries=len(journal), ledger_entries=len(ledger))

    return TradeLogApp(
        settings=settings,
        journal=journal,
        ledger=ledger,
        blobs=blobs,
        journal_service=JournalService(journal, blobs),
        ledger_service=LedgerService(ledger),
        analytics=JournalAnalytics(journal),
    )
