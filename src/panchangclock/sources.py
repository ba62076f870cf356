"""Sourcing policies and almanac text retrieval (filesystem or HTTP)."""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from panchangclock.models import City, Source

logger = logging.getLogger(__name__)


class SourceUnavailableError(Exception):
    """Almanac text could not be retrieved."""


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def join_location(root: str, file_name: str) -> str:
    """Place file_name under root, which is either a directory or a base URL."""
    if is_url(root):
        return f"{root.rstrip('/')}/{file_name}"
    return str(Path(root) / file_name)


class SourcingPolicy(ABC):
    """Decides which almanac text feeds which city.

    The parser and resolver are identical in every topology; only the
    mapping from city to Source differs.
    """

    def __init__(self, root: str) -> None:
        self.root = root

    def city_source(self, city: City) -> Source:
        """A city's own file, written in its own zone."""
        return Source(join_location(self.root, city.source_file), city.time_zone)

    @abstractmethod
    def periodic_source(self, city: City) -> Source:
        """Source for Tithi/Nakshatra/Yogam/Karanam as seen from city."""

    @abstractmethod
    def window_source(self, city: City) -> Source:
        """Source for the inauspicious windows of city."""


class SharedSource(SourcingPolicy):
    """One file for all cities and all categories."""

    def __init__(self, root: str, reference: City) -> None:
        super().__init__(root)
        self.reference = reference

    def periodic_source(self, city: City) -> Source:
        return self.city_source(self.reference)

    def window_source(self, city: City) -> Source:
        return self.city_source(self.reference)


class PerCitySource(SourcingPolicy):
    """Each city reads everything from its own file."""

    def periodic_source(self, city: City) -> Source:
        return self.city_source(city)

    def window_source(self, city: City) -> Source:
        return self.city_source(city)


class SplitSource(SourcingPolicy):
    """Periodic categories from one shared file, windows from each city's file."""

    def __init__(self, root: str, reference: City) -> None:
        super().__init__(root)
        self.reference = reference

    def periodic_source(self, city: City) -> Source:
        return self.city_source(self.reference)

    def window_source(self, city: City) -> Source:
        return self.city_source(city)


async def _fetch_http(
    location: str, timeout: float, transport: httpx.AsyncBaseTransport | None
) -> str:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        resp = await client.get(location)
        resp.raise_for_status()
        return resp.text


async def fetch_text(
    location: str,
    timeout: float = 10,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Read almanac text from a path or an http(s) URL.

    Args:
        location: Filesystem path or URL.
        timeout: HTTP timeout in seconds.
        transport: Optional httpx transport (tests inject httpx.MockTransport).

    Returns:
        The decoded text.

    Raises:
        SourceUnavailableError: On HTTP error status, transport failure,
            missing/unreadable file, or undecodable content.
    """
    try:
        if is_url(location):
            return await _fetch_http(location, timeout, transport)
        return await asyncio.to_thread(Path(location).read_text, encoding="utf-8")
    except httpx.HTTPStatusError as e:
        raise SourceUnavailableError(
            f"Failed to load {location}: HTTP {e.response.status_code}"
        ) from e
    except (httpx.HTTPError, OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(f"Failed to load {location}: {e}") from e
