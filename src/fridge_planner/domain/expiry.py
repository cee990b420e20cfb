"""Expiry date arithmetic and urgency bands."""

import math
from collections.abc import Callable, Iterable
from datetime import date, datetime
from enum import StrEnum
from typing import TypeVar

URGENT_WITHIN_DAYS = 3
SOON_WITHIN_DAYS = 7

_SECONDS_PER_DAY = 86400

T = TypeVar("T")


class ExpiryBand(StrEnum):
    """Urgency classification for a D-day value."""

    EXPIRED = "expired"
    TODAY = "today"
    URGENT = "urgent"
    SOON = "soon"
    SAFE = "safe"


def parse_expiry(value: str | date) -> date:
    """Parse a calendar date, raising ValueError on anything else."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10]) if "T" in value else date.fromisoformat(value)


def days_until(expiry: str | date, today: date | None = None) -> int:
    """Return the signed day offset from today to the expiry date.

    Both sides are calendar days, so the offset is
    ``ceil((expiry - today) / 1 day)``: 0 is today, negative is expired.
    The relation is one-directional; swapping arguments negates the count.
    """
    expiry_day = parse_expiry(expiry)
    reference = today or date.today()
    delta = datetime.combine(expiry_day, datetime.min.time()) - datetime.combine(
        reference, datetime.min.time()
    )
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def classify(dday: int) -> ExpiryBand:
    """Classify a D-day value into an urgency band."""
    if dday < 0:
        return ExpiryBand.EXPIRED
    if dday == 0:
        return ExpiryBand.TODAY
    if dday <= URGENT_WITHIN_DAYS:
        return ExpiryBand.URGENT
    if dday <= SOON_WITHIN_DAYS:
        return ExpiryBand.SOON
    return ExpiryBand.SAFE


def dday_label(dday: int) -> str:
    """Return the badge label shown for a D-day value."""
    if dday < 0:
        return f"D+{abs(dday)}"
    if dday == 0:
        return "D-Day"
    return f"D-{dday}"


def is_near_expiry(dday: int | None) -> bool:
    """Return True when a D-day value should be flagged in prompts."""
    return dday is not None and dday <= URGENT_WITHIN_DAYS


def sort_by_urgency(
    items: Iterable[T], expiry_of: Callable[[T], str | date], today: date | None = None
) -> list[T]:
    """Sort items ascending by D-day, most urgent first."""
    reference = today or date.today()
    return sorted(items, key=lambda item: days_until(expiry_of(item), reference))
