"""Temporal resolver: current/next lookup, day filtering, duration text."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from pytz import timezone, utc

from panchangclock.i18n import t
from panchangclock.models import Interval, ResolvedState

_MONTHS = (
    "jan", "feb", "mar", "apr", "may", "jun",
    "jul", "aug", "sep", "oct", "nov", "dec",
)


def as_utc(instant: datetime) -> datetime:
    """Normalize an aware datetime to UTC. Naive datetimes are rejected."""
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError(f"Naive datetime is not comparable: {instant!r}")
    return instant.astimezone(utc)


def resolve(intervals: Sequence[Interval], now: datetime) -> ResolvedState:
    """Find the interval containing ``now``, the one after it, and time left.

    Intervals are half-open ``[start, end)``, so a boundary instant belongs to
    the interval starting there. When nothing contains ``now``, ``next`` is
    the first interval starting after it.

    Args:
        intervals: One category's intervals, in chronological order.
        now: Aware query instant.

    Returns:
        ResolvedState. All fields None for an empty sequence.
    """
    now = as_utc(now)
    for i, interval in enumerate(intervals):
        if interval.contains(now):
            following = intervals[i + 1] if i + 1 < len(intervals) else None
            return ResolvedState(
                current=interval, next=following, remaining=interval.end - now
            )

    upcoming = next((iv for iv in intervals if iv.start > now), None)
    return ResolvedState(current=None, next=upcoming, remaining=None)


def civil_date(instant: datetime, zone: str) -> date:
    """Calendar date of an instant as observed in zone."""
    return as_utc(instant).astimezone(timezone(zone)).date()


def windows_on_date(
    intervals: Sequence[Interval], day: date, zone: str
) -> tuple[Interval, ...]:
    """All intervals whose start falls on civil date ``day`` in ``zone``, in order."""
    return tuple(iv for iv in intervals if civil_date(iv.start, zone) == day)


def format_remaining(remaining: timedelta | None, lang: str = "en") -> str:
    """Render time left as "<H> hours <M> minutes remaining".

    The hour clause is omitted when zero. None or a non-positive duration
    yields the "no time remaining" sentinel. Minutes are floored.
    """
    if remaining is None or remaining <= timedelta(0):
        return t("no_time_remaining", lang)
    total_minutes = int(remaining.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return t("remaining_m", lang).format(minutes=minutes)
    return t("remaining_hm", lang).format(hours=hours, minutes=minutes)


def format_civil(instant: datetime, zone: str) -> str:
    """Format as "YYYY-mon-DD HH:MM" in zone, e.g. "2025-dec-05 11:26"."""
    local = as_utc(instant).astimezone(timezone(zone))
    return (
        f"{local.year:04d}-{_MONTHS[local.month - 1]}-{local.day:02d} "
        f"{local.hour:02d}:{local.minute:02d}"
    )
