"""Data model for the endoflife.date release-cycle feed.

The feed's `eol` and `support` fields are polymorphic. A date string means
"unsupported from this date", `true` means "already unsupported, no date
recorded" and `false` (or a missing field) means "not known to be
unsupported". LifecycleField keeps all three cases apart.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Literal, Optional

LifecycleKind = Literal["unknown", "date", "flag"]

FEED_DATE_FORMAT = "%Y-%m-%d"


def parse_feed_date(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD feed date, returning None when it does not parse."""
    if not value:
        return None
    try:
        return datetime.strptime(value, FEED_DATE_FORMAT).date()
    except ValueError:
        return None


def parse_lts(value: Any) -> bool:
    """
    Interpret the feed's `lts` field.

    Booleans are taken as-is. A string is either a spelled-out boolean or
    the date the cycle became LTS, which counts as true.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() not in ("", "false")
    return False


@dataclass(frozen=True)
class LifecycleField:
    """
    Tagged variant for the feed's date-or-boolean fields.

    Attributes:
        kind: "date" for a date string, "flag" for a boolean, "unknown" otherwise
        raw: The date string as published (kind "date" only)
        flag: The boolean value (kind "flag" only)
    """

    kind: LifecycleKind
    raw: Optional[str] = None
    flag: Optional[bool] = None

    @classmethod
    def unknown(cls) -> "LifecycleField":
        return cls(kind="unknown")

    @classmethod
    def from_date(cls, value: str) -> "LifecycleField":
        return cls(kind="date", raw=value)

    @classmethod
    def from_flag(cls, value: bool) -> "LifecycleField":
        return cls(kind="flag", flag=value)

    @classmethod
    def from_feed(cls, value: Any) -> "LifecycleField":
        """Build the variant from a raw JSON value."""
        if isinstance(value, bool):
            return cls.from_flag(value)
        if isinstance(value, str):
            return cls.from_date(value)
        return cls.unknown()

    @property
    def parsed_date(self) -> Optional[date]:
        """Parsed date for kind "date"; None for other kinds or unparsable strings."""
        if self.kind != "date":
            return None
        return parse_feed_date(self.raw)


@dataclass(frozen=True)
class CatalogEntry:
    """
    One runtime release line as published by the feed.

    Attributes:
        cycle: Release line identifier, e.g. "3.11"
        release_date: First release date of the cycle
        eol: End-of-life marker
        latest_patch: Latest patch release, e.g. "3.11.9"
        latest_release_date: Date of the latest patch release
        is_lts: Long-term-support flag
        support: End of active support marker
    """

    cycle: str
    release_date: Optional[str] = None
    eol: LifecycleField = LifecycleField.unknown()
    latest_patch: Optional[str] = None
    latest_release_date: Optional[str] = None
    is_lts: bool = False
    support: LifecycleField = LifecycleField.unknown()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        """Build an entry from one object of the feed's JSON array."""
        return cls(
            cycle=str(data.get("cycle", "")),
            release_date=data.get("releaseDate"),
            eol=LifecycleField.from_feed(data.get("eol")),
            latest_patch=data.get("latest"),
            latest_release_date=data.get("latestReleaseDate"),
            is_lts=parse_lts(data.get("lts")),
            support=LifecycleField.from_feed(data.get("support")),
        )
