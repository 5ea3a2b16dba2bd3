"""
Tagged result returned by every storage-touching service call.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    PERSISTENCE = "persistence"


class ServiceResult(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, error: str) -> "ServiceResult":
        return cls(success=False, error=error, error_kind=kind)
