from datetime import datetime
from pathlib import Path

import pytest
from pytz import timezone, utc

from panchangclock.models import Interval

RESOURCES = Path(__file__).parent.parent / "resources"


def at(stamp: str, zone: str = "UTC") -> datetime:
    """Aware UTC instant for a "YYYY/MM/DD HH:MM" wall-clock reading in zone."""
    naive = datetime.strptime(stamp, "%Y/%m/%d %H:%M")
    return timezone(zone).localize(naive).astimezone(utc)


def iv(name: str, start: str, end: str, zone: str = "UTC") -> Interval:
    return Interval(name=name, start=at(start, zone), end=at(end, zone))


@pytest.fixture
def resources_dir() -> Path:
    return RESOURCES


@pytest.fixture
def chennai_text() -> str:
    return (RESOURCES / "panchangam_Chennai.txt").read_text(encoding="utf-8")
