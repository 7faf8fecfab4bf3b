"""
JSON codec for record files
===========================

One canonical on-disk shape for every store:
  - a single UTF-8 JSON array, pretty-printed, keys sorted
  - every timestamp as ISO-8601 UTC text with a ``Z`` suffix
  - whole-file atomic replace (temp file + fsync + os.replace)
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from tradelog.utils.exceptions import RecordDecodeError

T = TypeVar("T")


def format_timestamp(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.astimezone()
    # Non-zero microseconds are written as fractional seconds. Readers limited
    # to whole-second ISO-8601 (e.g. Foundation's .iso8601 strategy) reject those.
    text = dt.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str) or not value:
        raise RecordDecodeError(f"Expected ISO-8601 text, got {value!r}")
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise RecordDecodeError(f"Invalid ISO-8601 timestamp {value!r}: {e}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def text_field(d: Dict[str, Any], key: str) -> str:
    value = d[key]
    if not isinstance(value, str):
        raise RecordDecodeError(f"Expected text for {key!r}, got {value!r}")
    return value


def optional_text_field(d: Dict[str, Any], key: str) -> Optional[str]:
    if d.get(key) is None:
        return None
    return text_field(d, key)


def int_field(d: Dict[str, Any], key: str) -> int:
    value = d[key]
    # bool is an int subclass; true/false is not a count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordDecodeError(f"Expected an integer for {key!r}, got {value!r}")
    return value


def encode_records(records: Iterable[dict]) -> str:
    return json.dumps(list(records), indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def decode_records(text: str, from_dict: Callable[[dict], T]) -> List[T]:
    """Decode a whole file; one bad element fails the file."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordDecodeError(f"Malformed JSON: {e}")
    if not isinstance(raw, list):
        raise RecordDecodeError(f"Expected a JSON array, got {type(raw).__name__}")
    records = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise RecordDecodeError(f"Element {i} is not an object")
        try:
            records.append(from_dict(item))
        except RecordDecodeError as e:
            raise RecordDecodeError(f"Element {i}: {e.message}")
        except (KeyError, TypeError, ValueError) as e:
            raise RecordDecodeError(f"Element {i}: {type(e).__name__}: {e}")
    return records


def _atomic_write(path: str, payload: bytes) -> None:
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    # Temp file must live on the same filesystem for os.replace to be atomic.
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=os.path.basename(path), dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def atomic_write_text(path: str, text: str) -> None:
    _atomic_write(path, text.encode("utf-8"))


def atomic_write_bytes(path: str, data: bytes) -> None:
    _atomic_write(path, data)


@dataclass(frozen=True)
class RecordCodec(Generic[T]):
    """Binds a record type's dict adapters to the file format."""
    to_dict: Callable[[T], dict]
    from_dict: Callable[[dict], T]

    def encode(self, records: Iterable[T]) -> str:
        return encode_records(self.to_dict(r) for r in records)

    def decode(self, text: str) -> List[T]:
        return decode_records(text, self.from_dict)
