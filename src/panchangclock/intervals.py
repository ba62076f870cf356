"""Interval parser. Turns section lines into ordered UTC intervals."""

import logging
import re
from collections.abc import Iterable

from pytz import timezone

from panchangclock.extract import extract_category
from panchangclock.models import Category, CivilTime, Interval

logger = logging.getLogger(__name__)

_STAMP = r"(\d{4})[/-](\d{1,2})[/-](\d{1,2})\s+(\d{1,2}):(\d{2})(?::\d{2})?"
_RECORD_RE = re.compile(
    rf"^(?P<name>[^:]+):\s*{_STAMP}\s+to\s+{_STAMP}\s*$",
    re.IGNORECASE,
)
_DIVIDER_RE = re.compile(r"^=+$")


def _civil(fields: tuple[str, ...], zone: str) -> CivilTime:
    year, month, day, hour, minute = (int(f) for f in fields)
    return CivilTime(year, month, day, hour, minute, zone)


def parse_line(line: str, reference_zone: str) -> Interval | None:
    """Parse one record line. Returns None for anything that is not a valid record."""
    line = line.strip()
    if not line or _DIVIDER_RE.match(line) or line.startswith("Next "):
        return None
    match = _RECORD_RE.match(line)
    if match is None:
        logger.debug("Dropping unparseable line: %r", line)
        return None

    groups = match.groups()
    name = groups[0].strip()
    try:
        start = _civil(groups[1:6], reference_zone).to_instant()
        end = _civil(groups[6:11], reference_zone).to_instant()
    except (ValueError, OverflowError):
        logger.debug("Dropping line with invalid timestamp: %r", line)
        return None
    if not name or end <= start:
        logger.debug("Dropping empty or inverted record: %r", line)
        return None
    return Interval(name=name, start=start, end=end)


def parse_intervals(
    raw_lines: Iterable[str], reference_zone: str
) -> tuple[Interval, ...]:
    """Parse a section's lines into intervals, in textual order.

    Timestamps are wall-clock readings in ``reference_zone`` and are converted
    once to UTC with that zone's rules for each date. Malformed lines are
    skipped. The result is not re-sorted.

    Args:
        raw_lines: Lines of one section, as returned by the extraction layer.
        reference_zone: IANA zone the file's timestamps are written in.

    Returns:
        Tuple of Interval objects.

    Raises:
        pytz.UnknownTimeZoneError: If reference_zone is not a known zone.
    """
    timezone(reference_zone)  # fail fast on a bad zone, before any line is read
    intervals: list[Interval] = []
    for line in raw_lines:
        interval = parse_line(line, reference_zone)
        if interval is not None:
            intervals.append(interval)
    return tuple(intervals)


def parse_almanac(
    text: str, reference_zone: str
) -> dict[Category, tuple[Interval, ...]]:
    """Extract and parse every category from a full almanac text.

    Absent sections map to an empty tuple.
    """
    almanac = {
        category: parse_intervals(extract_category(text, category), reference_zone)
        for category in Category
    }
    logger.debug(
        "Parsed almanac (%s): %s",
        reference_zone,
        {c.name: len(v) for c, v in almanac.items()},
    )
    return almanac
