from tradelog.store.codec import RecordCodec
from tradelog.store.record_store import RecordStore, StoreEvent, StoreResult

__all__ = ["RecordCodec", "RecordStore", "StoreEvent", "StoreResult"]
