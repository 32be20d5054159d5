"""Constraint parsing, normalization and resolution.

Usage:
    from version_matrix._constraints import resolve_versions

    resolve_versions("^3.10", ["3.9", "3.10", "3.11"])  # ["3.10", "3.11"]
"""

from .comparator import (
    compare_versions,
    is_version_at_least,
    parse_major_minor,
    same_major,
    same_major_minor,
    version_key,
)
from .grammar import parse_constraints, parse_expression, parse_segment
from .models import Constraint, Operator
from .normalizer import normalize_constraint, normalize_token
from .resolver import filter_versions, matches_all_constraints, matches_constraint, resolve_versions

__all__ = [
    "Constraint",
    "Operator",
    "compare_versions",
    "filter_versions",
    "is_version_at_least",
    "matches_all_constraints",
    "matches_constraint",
    "normalize_constraint",
    "normalize_token",
    "parse_constraints",
    "parse_expression",
    "parse_major_minor",
    "parse_segment",
    "resolve_versions",
    "same_major",
    "same_major_minor",
    "version_key",
]
