"""
Record Store Engine — JSON-file-backed in-memory collection
============================================================

One generic engine serves every record type. Each instance owns:
  - an in-memory list kept sorted by occurrence date, newest first
  - a single backing JSON file, fully rewritten on every mutation
  - a list of subscribers notified after each state change

Mutations never raise. Every operation returns a StoreResult; a failed
persist leaves the mutation in memory and marks the store dirty until a
later write (or flush()) succeeds.
"""

from __future__ import annotations

import os
import threading
import uuid
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from tradelog.store.calendar import DayLike, local_day, start_of_day
from tradelog.store.codec import RecordCodec, atomic_write_text
from tradelog.utils.exceptions import RecordDecodeError, RecordPersistError, TradeLogError
from tradelog.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a store operation."""
    operation: str
    ok: bool = True
    changed: bool = False
    error: Optional[TradeLogError] = None

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_error(self) -> "StoreResult":
        if self.error is not None:
            raise self.error
        return self


@dataclass(frozen=True)
class StoreEvent:
    """Delivered to subscribers after a state change."""
    operation: str
    record_id: Optional[str]
    count: int
    persisted: bool


Subscriber = Callable[["RecordStore[Any]", StoreEvent], None]


def new_record_id() -> str:
    return str(uuid.uuid4()).upper()


def _default_key(record: Any) -> str:
    return record.id


def _default_sort_key(record: Any) -> datetime:
    return record.date


class RecordStore(Generic[T]):
    """
    Authoritative collection for one record type, mirrored to one JSON file.
    Thread-safe: one lock per instance around mutate-then-persist.
    """

    def __init__(
        self,
        path: str,
        codec: RecordCodec[T],
        *,
        key: Callable[[T], str] = _default_key,
        sort_key: Callable[[T], datetime] = _default_sort_key,
        autoload: bool = True,
    ):
        self._path = path
        self._codec = codec
        self._key = key
        self._sort_key = sort_key
        self._records: List[T] = []
        self._snapshot: Tuple[T, ...] = ()
        self._subscribers: List[Subscriber] = []
        self._lock = threading.RLock()
        self._dirty = False
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        if autoload:
            self.load()

    # ─── STATE ACCESS ──────────────────────────────────────────

    @property
    def path(self) -> str:
        return self._path

    @property
    def entries(self) -> Tuple[T, ...]:
        return self._snapshot

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def __len__(self) -> int:
        return len(self._snapshot)

    def __iter__(self) -> Iterator[T]:
        return iter(self._snapshot)

    def get(self, record_id: str) -> Optional[T]:
        for record in self._snapshot:
            if self._key(record) == record_id:
                return record
        return None

    # ─── SUBSCRIPTIONS ─────────────────────────────────────────

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change listener. Returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(self, event)
            except Exception as e:
                logger.error("subscriber_failed", path=self._path,
                             operation=event.operation, error=str(e))

    # ─── LOAD / PERSIST ────────────────────────────────────────

    def load(self) -> StoreResult:
        """Replace the collection with the file's contents; empty when absent or corrupt."""
        error: Optional[TradeLogError] = None
        with self._lock:
            self._records = []
            if os.path.exists(self._path):
                try:
                    with open(self._path, "r", encoding="utf-8") as f:
                        self._records = self._codec.decode(f.read())
                except RecordDecodeError as e:
                    e.path = self._path
                    error = e
                except (OSError, UnicodeDecodeError) as e:
                    error = RecordDecodeError(f"Unreadable file: {e}", self._path)
            if error is not None:
                # Corrupt file stays on disk until the next successful write.
                logger.error("store_decode_failed", path=self._path, error=error.message)
                self._records = []
            self._sort()
            self._dirty = False
            self._snapshot = tuple(self._records)
            count = len(self._records)

        if error is None:
            logger.info("store_loaded", path=self._path, count=count)
        self._notify(StoreEvent("load", None, count, error is None))
        return StoreResult("load", ok=error is None, changed=count > 0, error=error)

    def flush(self) -> StoreResult:
        """Rewrite the backing file from memory; clears the dirty flag on success."""
        with self._lock:
            error = self._persist()
        return StoreResult("flush", ok=error is None, changed=False, error=error)

    def _persist(self) -> Optional[RecordPersistError]:
        try:
            atomic_write_text(self._path, self._codec.encode(self._records))
        except (OSError, TypeError, ValueError) as e:
            self._dirty = True
            logger.error("store_persist_failed", path=self._path,
                         count=len(self._records), error=str(e))
            return RecordPersistError(f"Failed to write records: {e}", self._path)
        self._dirty = False
        return None

    def _sort(self) -> None:
        self._records.sort(key=self._sort_key, reverse=True)

    def _commit(self, operation: str, record_id: Optional[str]) -> Tuple[StoreResult, StoreEvent]:
        """Sort, persist, publish snapshot. Called with the lock held."""
        self._sort()
        error = self._persist()
        self._snapshot = tuple(self._records)
        event = StoreEvent(operation, record_id, len(self._records), error is None)
        return StoreResult(operation, ok=error is None, changed=True, error=error), event

    # ─── MUTATIONS ─────────────────────────────────────────────

    def add(self, record: T) -> StoreResult:
        record_id = self._key(record)
        with self._lock:
            if any(self._key(r) == record_id for r in self._records):
                logger.warning("duplicate_record_id", path=self._path, record_id=record_id)
            self._records.append(record)
            result, event = self._commit("add", record_id)
        self._notify(event)
        return result

    def update(self, record: T) -> StoreResult:
        """Replace the first record with the same id. Unknown id is a no-op."""
        record_id = self._key(record)
        with self._lock:
            index = next((i for i, r in enumerate(self._records) if self._key(r) == record_id), None)
            if index is None:
                logger.debug("update_skipped", path=self._path, record_id=record_id)
                return StoreResult("update", ok=True, changed=False)
            self._records[index] = record
            result, event = self._commit("update", record_id)
        self._notify(event)
        return result

    def delete(self, record: Union[T, str]) -> StoreResult:
        """Remove every record with the given id. Unknown id is a no-op."""
        record_id = record if isinstance(record, str) else self._key(record)
        with self._lock:
            kept = [r for r in self._records if self._key(r) != record_id]
            if len(kept) == len(self._records):
                logger.debug("delete_skipped", path=self._path, record_id=record_id)
                return StoreResult("delete", ok=True, changed=False)
            self._records = kept
            result, event = self._commit("delete", record_id)
        self._notify(event)
        return result

    # ─── QUERIES ───────────────────────────────────────────────

    def entries_on(self, day: DayLike, tz: Optional[tzinfo] = None) -> List[T]:
        """Records whose date falls on the same local calendar day as ``day``."""
        target = local_day(day, tz)
        return [r for r in self._snapshot if local_day(self._sort_key(r), tz) == target]

    def entries_grouped_by_day(self, tz: Optional[tzinfo] = None) -> Dict[datetime, List[T]]:
        """Buckets keyed by each record's local start of day."""
        groups: Dict[datetime, List[T]] = defaultdict(list)
        for record in self._snapshot:
            groups[start_of_day(self._sort_key(record), tz)].append(record)
        return dict(groups)
