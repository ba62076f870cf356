"""Deployment configuration: cities, sourcing topology and refresh cadence."""

import math
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from pytz import UnknownTimeZoneError, timezone

from panchangclock.models import City
from panchangclock.sources import PerCitySource, SharedSource, SourcingPolicy, SplitSource

_ROOT = Path(__file__).parent.parent.parent

DEFAULT_CITIES: tuple[City, ...] = (
    City("Portland", "America/Los_Angeles", "panchangam_Portland.txt"),
    City("Boston", "America/New_York", "panchangam_Boston.txt"),
    City("Chennai", "Asia/Kolkata", "panchangam_Chennai.txt"),
)

POLICIES = ("shared", "per_city", "split")


class ConfigError(Exception):
    """Invalid deployment configuration."""


def find_city(cities: Sequence[City], name: str) -> City:
    """Case-insensitive lookup by city name."""
    for city in cities:
        if city.name.lower() == name.strip().lower():
            return city
    raise ConfigError(f"Unknown city: {name}")


@dataclass(frozen=True)
class Settings:
    cities: tuple[City, ...]
    source_root: str  # Directory or base URL
    sourcing: str  # One of POLICIES
    reference_city: City | None  # None: use the detected home city
    refresh_seconds: int
    timeout: float
    lang: str
    log_level: str

    def policy(self, home: City | None = None) -> SourcingPolicy:
        """Build the sourcing policy; shared files come from the reference city."""
        if self.sourcing == "per_city":
            return PerCitySource(self.source_root)
        reference = self.reference_city or home or self.cities[0]
        if self.sourcing == "shared":
            return SharedSource(self.source_root, reference)
        return SplitSource(self.source_root, reference)


def _number(environ: Mapping[str, str], key: str, default: str) -> float:
    raw = environ.get(key, default)
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise ConfigError(f"{key} must be finite, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {raw!r}")
    return value


def load_settings(
    environ: Mapping[str, str] = os.environ,
    cities: tuple[City, ...] = DEFAULT_CITIES,
) -> Settings:
    """Read settings from environment variables.

    Args:
        environ: Variable mapping (os.environ by default; load .env first).
        cities: Cities to display.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: On an unknown policy or city, bad zone, or bad number.
    """
    if not cities:
        raise ConfigError("At least one city is required")
    for city in cities:
        try:
            timezone(city.time_zone)
        except UnknownTimeZoneError:
            raise ConfigError(
                f"Unknown time zone for {city.name}: {city.time_zone}"
            ) from None

    sourcing = environ.get("PANCHANGAM_SOURCING", "split").strip().lower()
    if sourcing not in POLICIES:
        raise ConfigError(
            f"PANCHANGAM_SOURCING must be one of {POLICIES}, got {sourcing!r}"
        )

    reference_city: City | None = None
    reference_name = environ.get("PANCHANGAM_REFERENCE_CITY")
    if reference_name:
        reference_city = find_city(cities, reference_name)

    return Settings(
        cities=cities,
        source_root=environ.get("PANCHANGAM_SOURCE_ROOT") or str(_ROOT / "resources"),
        sourcing=sourcing,
        reference_city=reference_city,
        refresh_seconds=max(
            1, int(_number(environ, "PANCHANGAM_REFRESH_SECONDS", "60"))
        ),
        timeout=_number(environ, "PANCHANGAM_TIMEOUT", "10"),
        lang=environ.get("PANCHANGAM_LANG", "en"),
        log_level=environ.get("PANCHANGAM_LOG_LEVEL", "WARNING").upper(),
    )
