"""Compute the Python support matrix for a project.

The matrix is the intersection of:
1. the versions allowed by the project's requires-python expression, and
2. the release lines endoflife.date reports as still supported.

The feed is best-effort: when it cannot be reached the hand-maintained
fallback list is used instead. Constraint errors are never swallowed since
they point at a broken manifest.

Usage:
    from version_matrix.matrix import build_support_matrix, compute_support_matrix

    compute_support_matrix(">=3.10", EOLCatalogClient())  # ["3.10", "3.11", ...]
"""

import json
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Protocol, Sequence, Tuple

from ._constraints import parse_constraints, resolve_versions, version_key
from ._eol import get_fallback_versions
from .exceptions import VersionMatrixError
from .logging_config import logger

MatrixSource = Literal["endoflife.date", "fallback"]

MATRIX_KEY = "python-version"


class SupportedVersionsProvider(Protocol):
    """Anything that can list supported release lines (EOLCatalogClient in practice)."""

    def supported_versions(self) -> List[str]: ...

    def fallback_versions(self) -> List[str]: ...


@dataclass
class SupportMatrix:
    """
    Result of a support matrix resolution.

    Attributes:
        versions: Ascending, duplicate-free "major.minor" versions
        requires_python: The expression the matrix was computed from
        source: Where the candidate versions came from
        candidates: The candidate list the constraints were applied to
    """

    versions: List[str]
    requires_python: str
    source: MatrixSource
    candidates: List[str] = field(default_factory=list)

    @property
    def build_version(self) -> Optional[str]:
        """Newest version in the matrix, the recommended single build interpreter."""
        return self.versions[-1] if self.versions else None

    @property
    def matrix_json(self) -> str:
        """GitHub Actions strategy matrix, e.g. {"python-version": ["3.11", "3.12"]}."""
        return json.dumps({MATRIX_KEY: self.versions})

    @property
    def used_fallback(self) -> bool:
        return self.source == "fallback"


def sort_versions(versions: Sequence[str]) -> List[str]:
    """Sort "major.minor" versions ascending and drop duplicates."""
    return sorted(set(versions), key=version_key)


def _get_candidates(feed_client: SupportedVersionsProvider, offline: bool) -> Tuple[List[str], MatrixSource]:
    """Get candidate versions from the feed, falling back to the static list."""
    if offline:
        logger.info("Offline mode: using fallback Python versions")
        return sort_versions(feed_client.fallback_versions()), "fallback"

    try:
        supported = feed_client.supported_versions()
    except VersionMatrixError as e:
        logger.warning(f"Could not fetch Python EOL data, using fallback versions: {e}")
        return sort_versions(feed_client.fallback_versions()), "fallback"

    if not supported:
        # An empty list would only turn into a NoCandidates error downstream
        logger.warning("EOL feed reported no supported Python versions, using fallback versions")
        return sort_versions(feed_client.fallback_versions()), "fallback"

    return sort_versions(supported), "endoflife.date"


def build_support_matrix(
    requires_python: str,
    feed_client: Optional[SupportedVersionsProvider] = None,
    offline: bool = False,
) -> SupportMatrix:
    """
    Resolve the support matrix for a requires-python expression.

    Args:
        requires_python: Constraint expression from the project manifest
        feed_client: Source of supported versions; the fallback list is used when None
        offline: Skip the feed and use the fallback list

    Returns:
        SupportMatrix with the resolved versions and where they came from

    Raises:
        EmptyConstraintError, MalformedConstraintError, NoConstraintsFoundError:
            If the expression is invalid
        NoMatchError: If no supported version satisfies the expression
    """
    # Parse first so a bad manifest fails before any network traffic
    parse_constraints(requires_python)

    if feed_client is None:
        candidates, source = sort_versions(get_fallback_versions()), "fallback"
    else:
        candidates, source = _get_candidates(feed_client, offline)

    versions = resolve_versions(requires_python, candidates)
    logger.info(f"Python support matrix for '{requires_python}': {', '.join(versions)} (source: {source})")

    return SupportMatrix(
        versions=versions,
        requires_python=requires_python,
        source=source,
        candidates=candidates,
    )


def compute_support_matrix(requires_python: str, feed_client: SupportedVersionsProvider) -> List[str]:
    """
    Resolve the support matrix as a plain list of versions.

    Args:
        requires_python: Constraint expression from the project manifest
        feed_client: Source of supported versions

    Returns:
        Ascending list of "major.minor" versions
    """
    return build_support_matrix(requires_python, feed_client).versions
