"""Time helpers shared by the history, insights and recommendation code.

Convention: a naive ``datetime`` is local wall-clock time. The "local date"
of an aware datetime is its date in the machine's local timezone.
"""

from __future__ import annotations

from datetime import date, datetime


def resolve_now(now: datetime | None = None) -> datetime:
    """Return *now*, or the current local time as an aware datetime."""
    return now if now is not None else datetime.now().astimezone()


def ensure_aware(dt: datetime) -> datetime:
    """Attach the local timezone if *dt* is naive."""
    if dt.tzinfo is None:
        return dt.astimezone()
    return dt


def local_date(now: datetime) -> date:
    if now.tzinfo is None:
        return now.date()
    return now.astimezone().date()


def to_millis(dt: datetime) -> int:
    """Epoch milliseconds for *dt*."""
    return int(dt.timestamp() * 1000)


def date_key(day: date) -> str:
    """``YYYY-MM-DD`` key used in history entries and calendars."""
    return day.isoformat()
