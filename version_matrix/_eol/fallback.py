"""Hand-maintained fallback list of supported Python release lines.

Used when the endoflife.date feed is unreachable or when running offline.
Nothing here is derived at runtime: the list goes stale as new releases ship
and old ones reach end-of-life, so it has to be reviewed by hand whenever a
Python release cycle starts or ends.
"""

from typing import List

# Last reviewed against https://endoflife.date/python
FALLBACK_LAST_REVIEWED = "2025-10-07"

FALLBACK_VERSIONS = ("3.9", "3.10", "3.11", "3.12", "3.13", "3.14")


def get_fallback_versions() -> List[str]:
    """Return the fallback list, ascending. A fresh list on every call."""
    return list(FALLBACK_VERSIONS)
