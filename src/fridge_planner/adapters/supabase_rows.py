"""Conversions between domain values and Supabase row values."""

from datetime import date, datetime
from uuid import UUID


def to_row(payload: dict[str, object]) -> dict[str, object]:
    """Serialize domain values into JSON-friendly column values."""
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, UUID):
            row[key] = str(value)
        elif isinstance(value, date):
            row[key] = value.isoformat()
        else:
            row[key] = value
    return row


def parse_date(raw: object) -> date | None:
    """Parse a date column, accepting full timestamps."""
    if isinstance(raw, str) and raw:
        return date.fromisoformat(raw[:10])
    return None


def parse_datetime(raw: object) -> datetime | None:
    """Parse a timestamp column."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
