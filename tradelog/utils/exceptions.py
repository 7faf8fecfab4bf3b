from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    DECODE = "decode"
    PERSIST = "persist"
    BLOB = "blob"
    VALIDATION = "validation"
    SYSTEM = "system"


class TradeLogError(Exception):
    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        path: Optional[str] = None,
    ) -> None:
        self.message = message
        self.category = category
        self.path = path
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.category.value}] {self.message}"]
        if self.path:
            parts.append(f"Path: {self.path}")
        return " | ".join(parts)


class RecordDecodeError(TradeLogError):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message, ErrorCategory.DECODE, path)


class RecordPersistError(TradeLogError):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message, ErrorCategory.PERSIST, path)


class BlobError(TradeLogError):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message, ErrorCategory.BLOB, path)


class DraftValidationError(TradeLogError):
    def __init__(self, message: str, field: str = "") -> None:
        self.field = field
        super().__init__(message, ErrorCategory.VALIDATION)
