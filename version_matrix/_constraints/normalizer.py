"""Rewrite ecosystem-specific constraint shorthand into primitive comparisons.

The normalizer works token by token on a comma-separated expression. Each
token is rewritten by the first matching rule:

    !=X.Y[.Z]      -> !=X.Y              (exclusions are never expanded)
    ^X.Y[.Z]       -> >=X.Y,<(X+1).0     (Poetry caret)
    ~=X.Y[.Z]      -> >=X.Y,<X.(Y+1)     (PEP 440 compatible release)
    ==X.Y.*        -> >=X.Y,<X.(Y+1)     (wildcard)
    <op>X.Y[.Z]    -> <op>X.Y            (patch digit dropped)

Tokens matching none of these are returned unchanged (apart from a
best-effort patch strip) so that the grammar can reject them with the
offending segment in the error.
"""

import re
from typing import List

_NUMBER = r"(\d+)\.(\d+)"

_EXCLUSION_RE = re.compile(rf"^!=\s*{_NUMBER}(?:\.\d+)?$", re.ASCII)
_CARET_RE = re.compile(rf"^\^\s*{_NUMBER}(?:\.\d+)?$", re.ASCII)
_COMPATIBLE_RE = re.compile(rf"^~=\s*{_NUMBER}(?:\.\d+)?$", re.ASCII)
_WILDCARD_RE = re.compile(rf"^==\s*{_NUMBER}\.\*$", re.ASCII)
_COMPARISON_RE = re.compile(rf"^(>=|<=|==|>|<)\s*{_NUMBER}(?:\.\d+)?$", re.ASCII)

# Residual patch strip for tokens no rule recognised: "<3.13.0 x" -> "<3.13 x"
_PATCH_RE = re.compile(r"([<>=!~^]+)\s*(\d+\.\d+)\.\d+(?![\d.])", re.ASCII)


def _range(major: int, minor: int, upper_major: int, upper_minor: int) -> str:
    return f">={major}.{minor},<{upper_major}.{upper_minor}"


def normalize_token(token: str) -> str:
    """
    Normalize a single comma-free constraint token.

    Args:
        token: One constraint, e.g. "^3.10" or ">= 3.11.2"

    Returns:
        The rewritten token, possibly containing a comma when a shorthand
        expands to a range
    """
    token = token.strip()
    if not token:
        return token

    match = _EXCLUSION_RE.match(token)
    if match:
        return f"!={match.group(1)}.{match.group(2)}"

    match = _CARET_RE.match(token)
    if match:
        major, minor = int(match.group(1)), int(match.group(2))
        return _range(major, minor, major + 1, 0)

    match = _COMPATIBLE_RE.match(token)
    if match:
        major, minor = int(match.group(1)), int(match.group(2))
        return _range(major, minor, major, minor + 1)

    match = _WILDCARD_RE.match(token)
    if match:
        major, minor = int(match.group(1)), int(match.group(2))
        return _range(major, minor, major, minor + 1)

    match = _COMPARISON_RE.match(token)
    if match:
        return f"{match.group(1)}{match.group(2)}.{match.group(3)}"

    return _PATCH_RE.sub(r"\1\2", token)


def normalize_constraint(constraint: str) -> str:
    """
    Normalize a full constraint expression.

    Surrounding whitespace is trimmed and whitespace around commas is
    dropped. Empty segments are kept so that an expression made only of
    commas is still reported as such by the grammar.

    Args:
        constraint: Raw expression, e.g. "^3.10" or ">=3.10.1, <4"

    Returns:
        Expression made of primitive comparisons joined by commas

    Examples:
        >>> normalize_constraint("^3.10")
        '>=3.10,<4.0'
        >>> normalize_constraint("==3.10.*")
        '>=3.10,<3.11'
    """
    constraint = constraint.strip()
    tokens: List[str] = [normalize_token(token) for token in constraint.split(",")]
    return ",".join(tokens)
