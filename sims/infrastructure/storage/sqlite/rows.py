"""Column parsing helpers shared by the SQLite stores."""

import json
from datetime import date, datetime
from typing import Any


def parse_date(value: str | None, default: date | None = None) -> date | None:
    """Parse an ISO date column, falling back to default on bad data."""
    if value:
        try:
            return date.fromisoformat(value[:10])
        except (ValueError, TypeError):
            pass
    return default


def parse_datetime(value: str | None) -> datetime:
    """Parse an ISO timestamp column; unreadable values become now()."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()


def load_json(value: str | None, default: Any) -> Any:
    if value:
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            pass
    return default


def to_iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
