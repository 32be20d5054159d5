"""Filter candidate versions against a list of constraints."""

from typing import Callable, Dict, List, Sequence

from ..exceptions import EmptyConstraintError, NoCandidatesError, NoMatchError
from ..logging_config import logger
from .comparator import compare_versions, same_major, same_major_minor
from .grammar import parse_constraints
from .models import Constraint, Operator

_MATCHERS: Dict[Operator, Callable[[str, str], bool]] = {
    Operator.GE: lambda version, bound: compare_versions(version, bound) >= 0,
    Operator.GT: lambda version, bound: compare_versions(version, bound) > 0,
    Operator.LE: lambda version, bound: compare_versions(version, bound) <= 0,
    Operator.LT: lambda version, bound: compare_versions(version, bound) < 0,
    Operator.EQ: lambda version, bound: compare_versions(version, bound) == 0,
    Operator.NE: lambda version, bound: compare_versions(version, bound) != 0,
    # Compatible release: at least the bound, same major.minor
    Operator.COMPATIBLE: lambda version, bound: (
        compare_versions(version, bound) >= 0 and same_major_minor(version, bound)
    ),
    # Poetry caret: at least the bound, same major
    Operator.CARET: lambda version, bound: compare_versions(version, bound) >= 0 and same_major(version, bound),
}


def matches_constraint(version: str, constraint: Constraint) -> bool:
    """Check if a version satisfies a single constraint."""
    return _MATCHERS[constraint.operator](version, constraint.version)


def matches_all_constraints(version: str, constraints: Sequence[Constraint]) -> bool:
    """Check if a version satisfies every constraint."""
    return all(matches_constraint(version, constraint) for constraint in constraints)


def filter_versions(versions: Sequence[str], constraints: Sequence[Constraint]) -> List[str]:
    """
    Keep the versions that satisfy all constraints.

    Args:
        versions: Candidate "major.minor" versions, in the order to report them
        constraints: Parsed constraints (logical AND)

    Returns:
        Matching versions in input order; all versions when no constraints are given
    """
    if not constraints:
        return list(versions)
    return [version for version in versions if matches_all_constraints(version, constraints)]


def resolve_versions(requires_python: str, supported_versions: Sequence[str]) -> List[str]:
    """
    Resolve the versions allowed by a requires-python expression.

    Args:
        requires_python: Constraint expression, any supported dialect
        supported_versions: Candidate versions, expected in ascending order

    Returns:
        The matching candidates, order preserved

    Raises:
        EmptyConstraintError: If requires_python is empty
        NoCandidatesError: If supported_versions is empty
        MalformedConstraintError: If a segment of the expression is invalid
        NoConstraintsFoundError: If the expression holds only commas/whitespace
        NoMatchError: If no candidate satisfies the constraints
    """
    if requires_python == "":
        raise EmptyConstraintError("requires-python constraint is empty")

    if not supported_versions:
        raise NoCandidatesError()

    constraints = parse_constraints(requires_python)
    logger.debug(f"Parsed '{requires_python}' into: {', '.join(str(c) for c in constraints)}")

    filtered = filter_versions(supported_versions, constraints)
    if not filtered:
        raise NoMatchError(requires_python)

    return filtered
