"""Client for the endoflife.date Python release-cycle feed.

Strategy:
1. Serve the cached catalog while it is younger than the cache TTL
2. Otherwise fetch the feed, retrying with exponential backoff (1s, 2s, 4s...)
3. Validate the payload before replacing the cache

The cache belongs to a single client instance. Sleeping and the current time
are injected so the retry loop and cache expiry can be tested without real
waits.
"""

import threading
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional, Sequence, Tuple

import requests

from ..exceptions import CatalogError, FetchExhaustedError
from ..http_client import create_session
from ..logging_config import logger
from .._constraints.comparator import is_version_at_least
from .fallback import get_fallback_versions
from .models import CatalogEntry
from .schema import validate_feed

ENDOFLIFE_API_URL = "https://endoflife.date/api/python.json"
DEFAULT_TIMEOUT = 6  # seconds
DEFAULT_MAX_RETRIES = 2
DEFAULT_CACHE_TTL = timedelta(hours=1)

# Oldest release line ever reported as supported
MINIMUM_SUPPORTED_VERSION = "3.9"

Catalog = Tuple[CatalogEntry, ...]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CatalogCache:
    """Most recently fetched catalog and the time it was fetched."""

    catalog: Optional[Catalog] = None
    fetched_at: Optional[datetime] = None

    def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
        """Check if the cached catalog can be served without a refetch."""
        if self.catalog is None or self.fetched_at is None:
            return False
        return now - self.fetched_at < ttl

    def store(self, catalog: Catalog, now: datetime) -> None:
        self.catalog = catalog
        self.fetched_at = now


def find_entry(cycle: str, catalog: Sequence[CatalogEntry]) -> Optional[CatalogEntry]:
    """Return the first entry for a cycle, or None."""
    for entry in catalog:
        if entry.cycle == cycle:
            return entry
    return None


def describe_eol(entry: CatalogEntry, today: date) -> str:
    """
    Render an entry's EOL marker for display.

    Args:
        entry: Catalog entry to describe
        today: Reference date

    Returns:
        "EOL since <date>", "EOL (no date recorded)", "supported until <date>"
        or "supported"
    """
    eol = entry.eol
    if eol.kind == "date":
        eol_date = eol.parsed_date
        if eol_date is None:
            return "supported"
        if today >= eol_date:
            return f"EOL since {eol.raw}"
        return f"supported until {eol.raw}"
    if eol.kind == "flag" and eol.flag:
        return "EOL (no date recorded)"
    return "supported"


class EOLCatalogClient:
    """
    Fetches and caches Python end-of-life data.

    Example:
        client = EOLCatalogClient()
        client.supported_versions()  # ["3.14", "3.13", "3.12", "3.11", "3.10"]
    """

    def __init__(
        self,
        feed_url: str = ENDOFLIFE_API_URL,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = _utcnow,
        cache_ttl: timedelta = DEFAULT_CACHE_TTL,
    ):
        """
        Initialize the client.

        Args:
            feed_url: Endpoint returning the release-cycle JSON array
            timeout: Per-attempt HTTP timeout in seconds (default: 6)
            max_retries: Retries after the first attempt (default: 2)
            session: Optional requests.Session; one with default headers is created otherwise
            sleep: Called with the backoff delay in seconds between attempts
            clock: Returns the current time (timezone-aware)
            cache_ttl: How long a fetched catalog is served from cache
        """
        if max_retries is not None and max_retries < 0:
            raise ValueError("max_retries must not be negative")

        self.feed_url = feed_url
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.max_retries = DEFAULT_MAX_RETRIES if max_retries is None else max_retries
        self.cache_ttl = cache_ttl
        self.cache = CatalogCache()
        self._session = session or create_session()
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()

    def fetch(self) -> Catalog:
        """
        Return the release-cycle catalog, from cache when still fresh.

        Returns:
            Catalog entries in feed order

        Raises:
            FetchExhaustedError: If every attempt failed
        """
        with self._lock:
            if self.cache.is_fresh(self._clock(), self.cache_ttl):
                logger.debug("Cache hit (EOL feed)")
                return self.cache.catalog

            attempts = self.max_retries + 1
            last_error: Optional[Exception] = None
            for attempt in range(attempts):
                if attempt > 0:
                    backoff = 2 ** (attempt - 1)
                    logger.debug(f"Retrying EOL feed in {backoff}s (attempt {attempt + 1}/{attempts})")
                    self._sleep(backoff)

                try:
                    catalog = self._fetch_once()
                except CatalogError as e:
                    logger.warning(f"EOL feed attempt {attempt + 1}/{attempts} failed: {e}")
                    last_error = e
                    continue

                self.cache.store(catalog, self._clock())
                logger.debug(f"Fetched {len(catalog)} release cycles from {self.feed_url}")
                return catalog

            raise FetchExhaustedError(attempts, last_error) from last_error

    def _fetch_once(self) -> Catalog:
        """Perform a single request against the feed."""
        try:
            response = self._session.get(self.feed_url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise CatalogError(f"HTTP request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"HTTP request failed: {e}") from e

        if response.status_code != 200:
            raise CatalogError(f"HTTP {response.status_code}: {response.reason}")

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogError(f"failed to parse JSON: {e}") from e

        validate_feed(data)
        return tuple(CatalogEntry.from_dict(item) for item in data)

    def is_eol(self, cycle: str, catalog: Sequence[CatalogEntry]) -> Tuple[bool, str]:
        """
        Check whether a release line is end-of-life.

        Unknown cycles and unparsable dates are reported as not EOL.

        Args:
            cycle: Release line, e.g. "3.8"
            catalog: Catalog to look the cycle up in

        Returns:
            (True, eol_date) when the EOL date has been reached,
            (True, "true") when the feed flags the cycle EOL without a date,
            (False, "") otherwise
        """
        entry = find_entry(cycle, catalog)
        if entry is None:
            return False, ""

        eol = entry.eol
        if eol.kind == "date":
            eol_date = eol.parsed_date
            if eol_date is None:
                logger.debug(f"Unparsable EOL date for {cycle}: {eol.raw!r}, assuming supported")
                return False, ""
            if self._clock().date() >= eol_date:
                return True, eol.raw
            return False, ""

        if eol.kind == "flag" and eol.flag:
            return True, "true"

        return False, ""

    def supported_versions(self, minimum: str = MINIMUM_SUPPORTED_VERSION) -> List[str]:
        """
        List release lines that are at least `minimum` and not EOL.

        Args:
            minimum: Oldest release line to consider

        Returns:
            Cycles in feed order (the feed lists newest first)

        Raises:
            FetchExhaustedError: If the feed could not be fetched
        """
        catalog = self.fetch()
        supported = []
        for entry in catalog:
            if not is_version_at_least(entry.cycle, minimum):
                continue
            is_eol, _ = self.is_eol(entry.cycle, catalog)
            if not is_eol:
                supported.append(entry.cycle)
        return supported

    def today(self) -> date:
        """Current date according to the injected clock."""
        return self._clock().date()

    @staticmethod
    def fallback_versions() -> List[str]:
        """Hand-maintained list used when the feed is unavailable."""
        return get_fallback_versions()
