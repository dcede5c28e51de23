from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Accept ISO8601 (with/without 'Z'), a bare date, UNIX seconds/ms, or datetime.
    Returns aware UTC datetime or None if invalid.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # treat large numbers as ms
        ts = float(value) / 1000.0 if value > 1e12 else float(value)
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

    return None


def format_timestamp(value: datetime) -> str:
    """UTC, second precision, trailing 'Z' (the shape stored in the tables)."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class WriteResult(BaseModel, Generic[T]):
    """{data, error} pair returned by every write path."""

    data: Optional[T] = None
    error: Optional[str] = None
    # the targeted row does not exist
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any = None) -> "WriteResult":
        return cls(data=data)

    @classmethod
    def failure(cls, error: Any) -> "WriteResult":
        return cls(error=str(error) or error.__class__.__name__)

    @classmethod
    def missing(cls, message: str) -> "WriteResult":
        return cls(error=message, not_found=True)
