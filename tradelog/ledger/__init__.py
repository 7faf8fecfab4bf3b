from tradelog.ledger.ledger_models import LedgerEntry, LedgerEntryKind
from tradelog.ledger.ledger_service import LedgerService
from tradelog.ledger.ledger_store import LedgerStore

__all__ = ["LedgerEntry", "LedgerEntryKind", "LedgerService", "LedgerStore"]
