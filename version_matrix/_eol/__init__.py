"""End-of-life catalog for Python release lines (endoflife.date)."""

from .client import (
    DEFAULT_CACHE_TTL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    ENDOFLIFE_API_URL,
    MINIMUM_SUPPORTED_VERSION,
    Catalog,
    CatalogCache,
    EOLCatalogClient,
    describe_eol,
    find_entry,
)
from .fallback import FALLBACK_LAST_REVIEWED, FALLBACK_VERSIONS, get_fallback_versions
from .models import CatalogEntry, LifecycleField, parse_feed_date
from .schema import FEED_SCHEMA, validate_feed

__all__ = [
    "DEFAULT_CACHE_TTL",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "ENDOFLIFE_API_URL",
    "FALLBACK_LAST_REVIEWED",
    "FALLBACK_VERSIONS",
    "FEED_SCHEMA",
    "MINIMUM_SUPPORTED_VERSION",
    "Catalog",
    "CatalogCache",
    "CatalogEntry",
    "EOLCatalogClient",
    "LifecycleField",
    "describe_eol",
    "find_entry",
    "get_fallback_versions",
    "parse_feed_date",
    "validate_feed",
]
