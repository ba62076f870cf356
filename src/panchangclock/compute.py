"""Pipeline layer: fetch each almanac once, parse, and resolve per city."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime

import httpx
from pytz import UnknownTimeZoneError, timezone

from panchangclock.intervals import parse_almanac
from panchangclock.models import (
    PERIODIC_CATEGORIES,
    WINDOW_CATEGORIES,
    Category,
    City,
    CityReport,
    Interval,
    PeriodView,
    Source,
    SourceStatus,
    WindowView,
)
from panchangclock.resolve import as_utc, civil_date, resolve, windows_on_date
from panchangclock.sources import SourceUnavailableError, SourcingPolicy, fetch_text

logger = logging.getLogger(__name__)

Almanac = Mapping[Category, tuple[Interval, ...]]


def detect_home_city(
    cities: Sequence[City], browser_zone: str | None, now: datetime
) -> City:
    """Pick the city whose UTC offset at ``now`` is closest to the browser's.

    Ties go to the earlier city. An unknown or missing zone yields the
    first city.
    """
    if not cities:
        raise ValueError("No cities configured")
    if not browser_zone:
        return cities[0]
    try:
        browser_offset = as_utc(now).astimezone(timezone(browser_zone)).utcoffset()
    except UnknownTimeZoneError:
        logger.debug("Unknown browser zone %r", browser_zone)
        return cities[0]

    def distance(city: City) -> float:
        offset = as_utc(now).astimezone(timezone(city.time_zone)).utcoffset()
        return abs((offset - browser_offset).total_seconds())

    return min(cities, key=distance)


def build_report(
    city: City,
    now: datetime,
    periodic: Almanac,
    windows: Almanac,
    day: date | None = None,
    is_home: bool = False,
) -> CityReport:
    """Assemble the display record for one city.

    Periodic categories are resolved at ``now``; inauspicious windows are
    filtered to ``day`` (default: the city's own civil date at ``now``) and
    compared in the city's zone.
    """
    now = as_utc(now)
    if day is None:
        day = civil_date(now, city.time_zone)
    periods = tuple(
        PeriodView(category=c, state=resolve(periodic.get(c, ()), now))
        for c in PERIODIC_CATEGORIES
    )
    window_views = tuple(
        WindowView(
            category=c,
            day=day,
            windows=windows_on_date(windows.get(c, ()), day, city.time_zone),
        )
        for c in WINDOW_CATEGORIES
    )
    return CityReport(
        city=city,
        status=SourceStatus.OK,
        now=now,
        periods=periods,
        windows=window_views,
        is_home=is_home,
    )


async def load_almanac(
    source: Source,
    timeout: float = 10,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Almanac:
    """Fetch and parse one source. Owns its result until returned.

    Raises:
        SourceUnavailableError: If the text cannot be retrieved.
    """
    text = await fetch_text(source.location, timeout=timeout, transport=transport)
    return parse_almanac(text, source.reference_zone)


async def run_async(
    cities: Sequence[City],
    policy: SourcingPolicy,
    now: datetime,
    *,
    home: City | None = None,
    timeout: float = 10,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[CityReport, ...]:
    """Run one full tick: every distinct source is fetched once, concurrently.

    Args:
        cities: Cities to report on, in display order.
        policy: Which source feeds which city.
        now: Aware query instant, normalized to UTC once for the whole tick.
        home: City to mark as "you are here".
        timeout: HTTP timeout in seconds.
        transport: Optional httpx transport.

    Returns:
        One CityReport per city, in the order given. A city whose source
        failed gets status UNAVAILABLE and no periods/windows.
    """
    now = as_utc(now)
    needed: dict[Source, None] = {}
    for city in cities:
        needed[policy.periodic_source(city)] = None
        needed[policy.window_source(city)] = None
    sources = list(needed)

    results = await asyncio.gather(
        *(load_almanac(s, timeout=timeout, transport=transport) for s in sources),
        return_exceptions=True,
    )
    loaded: dict[Source, Almanac] = {}
    failures: dict[Source, str] = {}
    for source, result in zip(sources, results):
        if isinstance(result, SourceUnavailableError):
            logger.warning("%s", result)
            failures[source] = str(result)
        elif isinstance(result, Exception):
            logger.error("Could not read %s: %r", source.location, result)
            failures[source] = f"Failed to read {source.location}: {result}"
        elif isinstance(result, BaseException):
            raise result
        else:
            loaded[source] = result
    logger.info("Loaded %d/%d almanac sources", len(loaded), len(sources))

    reports: list[CityReport] = []
    for city in cities:
        is_home = home is not None and city == home
        periodic_src = policy.periodic_source(city)
        window_src = policy.window_source(city)
        error = failures.get(periodic_src) or failures.get(window_src)
        if error is not None:
            reports.append(
                CityReport(
                    city=city,
                    status=SourceStatus.UNAVAILABLE,
                    now=now,
                    error=error,
                    is_home=is_home,
                )
            )
            continue
        reports.append(
            build_report(
                city, now, loaded[periodic_src], loaded[window_src], is_home=is_home
            )
        )
    return tuple(reports)


def run(
    cities: Sequence[City],
    policy: SourcingPolicy,
    now: datetime,
    *,
    home: City | None = None,
    timeout: float = 10,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[CityReport, ...]:
    """Top-level entry point: synchronous wrapper around run_async."""
    return asyncio.run(
        run_async(
            cities, policy, now, home=home, timeout=timeout, transport=transport
        )
    )
