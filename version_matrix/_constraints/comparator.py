"""Patch-insensitive ordering of "major.minor" version identifiers.

Versions are compared as integer pairs, so "3.9" sorts before "3.10".
Callers must pass values that already passed the constraint grammar; a
malformed version raises ValueError.
"""

from typing import Tuple


def parse_major_minor(version: str) -> Tuple[int, int]:
    """
    Split a version string into its (major, minor) integers.

    Any patch component is ignored.

    Raises:
        ValueError: If the string has no dot or a non-numeric component
    """
    parts = version.strip().split(".")
    if len(parts) < 2:
        raise ValueError(f"not a major.minor version: {version!r}")
    return int(parts[0]), int(parts[1])


def version_key(version: str) -> Tuple[int, int]:
    """Sort key for "major.minor" strings."""
    return parse_major_minor(version)


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two version strings.

    Returns:
        -1 if v1 < v2, 0 if v1 == v2, 1 if v1 > v2
    """
    left = parse_major_minor(v1)
    right = parse_major_minor(v2)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def same_major(v1: str, v2: str) -> bool:
    """Check if two versions share the major component."""
    return parse_major_minor(v1)[0] == parse_major_minor(v2)[0]


def same_major_minor(v1: str, v2: str) -> bool:
    """Check if two versions share major and minor components."""
    return parse_major_minor(v1) == parse_major_minor(v2)


def is_version_at_least(version: str, minimum: str) -> bool:
    """
    Check if version >= minimum, treating unparsable input as False.

    Feed cycles are not validated by the grammar, so this is the safe
    entry point for filtering them.
    """
    try:
        return parse_major_minor(version) >= parse_major_minor(minimum)
    except ValueError:
        return False
