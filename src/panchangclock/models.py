"""Data model definitions. Explicit boundaries between parse, resolve, and render layers."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from pytz import timezone, utc


class Category(Enum):
    """Almanac section kinds. Value = header label alternates, preferred first."""

    TITHI = ("Thithi", "Tithi")
    NAKSHATRA = ("Nakshatram", "Nakshatra")
    YOGAM = ("Yogam", "Yoga")
    KARANAM = ("Karanam", "Karana")
    RAHUKALA = ("Rahukala", "Rahukalam", "Rahu Kalam")
    YAMAGANDA = ("Yamaganda", "Yamagandam")
    DURMUHURTHA = ("Durmuhurtha", "Durmuhurtham")
    VARJYAM = ("Varjyam",)

    @property
    def labels(self) -> tuple[str, ...]:
        """Header spellings in priority order (first match wins)."""
        return self.value

    @property
    def is_periodic(self) -> bool:
        return self in PERIODIC_CATEGORIES


PERIODIC_CATEGORIES: tuple[Category, ...] = (
    Category.TITHI,
    Category.NAKSHATRA,
    Category.YOGAM,
    Category.KARANAM,
)
WINDOW_CATEGORIES: tuple[Category, ...] = (
    Category.RAHUKALA,
    Category.YAMAGANDA,
    Category.DURMUHURTHA,
    Category.VARJYAM,
)


class SourceStatus(Enum):
    OK = "ok"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class City:
    """A named civil-time zone and the almanac file written for it."""

    name: str  # "Chennai"
    time_zone: str  # IANA zone ("Asia/Kolkata")
    source_file: str  # File name relative to the source root


@dataclass(frozen=True)
class Source:
    """Where an almanac text lives and which zone its wall-clock values use."""

    location: str  # Filesystem path or http(s) URL
    reference_zone: str  # IANA zone the timestamps are written in


@dataclass(frozen=True)
class CivilTime:
    """A wall-clock reading in a named zone. Not yet an instant."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    zone: str  # IANA zone name

    def to_instant(self) -> datetime:
        """Convert to an aware UTC datetime using the zone's rules at that date.

        Raises:
            ValueError: If the fields do not form a valid calendar reading.
            pytz.UnknownTimeZoneError: If the zone name is unknown.
        """
        naive = datetime(self.year, self.month, self.day, self.hour, self.minute)
        tz = timezone(self.zone)
        # is_dst=False: an ambiguous fall-back reading takes the standard-time offset
        local = tz.normalize(tz.localize(naive, is_dst=False))
        return local.astimezone(utc)


@dataclass(frozen=True)
class Interval:
    """A named period. start/end are aware UTC datetimes, start < end."""

    name: str  # "Prathama", "Rahukala", "Aswini/Bharani"
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        """Half-open membership: [start, end)."""
        return self.start <= instant < self.end


@dataclass(frozen=True)
class ResolvedState:
    """Current/next/remaining for one category at one instant."""

    current: Interval | None = None
    next: Interval | None = None
    remaining: timedelta | None = None


@dataclass(frozen=True)
class PeriodView:
    category: Category
    state: ResolvedState


@dataclass(frozen=True)
class WindowView:
    category: Category
    day: date  # Civil date the windows were filtered for
    windows: tuple[Interval, ...]


@dataclass(frozen=True)
class CityReport:
    """The sole input to renderers. Fully resolved state for one city."""

    city: City
    status: SourceStatus
    now: datetime  # Query instant (aware, UTC)
    periods: tuple[PeriodView, ...] = ()
    windows: tuple[WindowView, ...] = ()
    error: str | None = None
    is_home: bool = False  # "You are here" marker
