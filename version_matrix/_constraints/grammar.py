"""Constraint expression grammar.

    expression := segment ("," segment)*
    segment    := operator WS* version
    operator   := ">=" | ">" | "<=" | "<" | "==" | "!=" | "~=" | "^"
    version    := DIGITS "." DIGITS ("." DIGITS)?

Empty segments are skipped. Patch digits are accepted but dropped, so a
parsed Constraint always carries a bare "major.minor".
"""

import string
from typing import List, Optional, Tuple

from ..exceptions import EmptyConstraintError, MalformedConstraintError, NoConstraintsFoundError
from .models import OPERATOR_TABLE, Constraint, Operator
from .normalizer import normalize_constraint


class _SegmentScanner:
    """Cursor over one trimmed segment."""

    def __init__(self, segment: str):
        self.segment = segment
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.segment)

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.segment[self.pos].isspace():
            self.pos += 1

    def read_operator(self) -> Optional[Operator]:
        for operator in OPERATOR_TABLE:
            if self.segment.startswith(operator.value, self.pos):
                self.pos += len(operator.value)
                return operator
        return None

    def read_digits(self) -> Optional[str]:
        start = self.pos
        while not self.at_end() and self.segment[self.pos] in string.digits:
            self.pos += 1
        if self.pos == start:
            return None
        return self.segment[start : self.pos]

    def read_char(self, char: str) -> bool:
        if not self.at_end() and self.segment[self.pos] == char:
            self.pos += 1
            return True
        return False


def _read_version(scanner: _SegmentScanner) -> Tuple[str, str]:
    major = scanner.read_digits()
    if major is None:
        raise MalformedConstraintError(scanner.segment, "expected a version number")
    if not scanner.read_char("."):
        raise MalformedConstraintError(scanner.segment, "expected major.minor")
    minor = scanner.read_digits()
    if minor is None:
        raise MalformedConstraintError(scanner.segment, "expected a minor version")
    if scanner.read_char("."):
        if scanner.read_digits() is None:
            raise MalformedConstraintError(scanner.segment, "expected a patch version")
    return major, minor


def parse_segment(segment: str) -> Constraint:
    """
    Parse a single constraint such as ">=3.10" or "!=3.11".

    Args:
        segment: One trimmed, comma-free segment

    Returns:
        The parsed Constraint with any patch digit removed

    Raises:
        MalformedConstraintError: If the segment does not match the grammar
    """
    scanner = _SegmentScanner(segment)
    operator = scanner.read_operator()
    if operator is None:
        raise MalformedConstraintError(segment, "unknown operator")
    scanner.skip_whitespace()
    major, minor = _read_version(scanner)
    if not scanner.at_end():
        raise MalformedConstraintError(segment, "unexpected trailing characters")
    # int() drops leading zeros so "3.09" and "3.9" compare and print alike
    return Constraint(operator=operator, version=f"{int(major)}.{int(minor)}")


def _parse_segments(expression: str) -> List[Constraint]:
    constraints: List[Constraint] = []
    for part in expression.split(","):
        part = part.strip()
        if not part:
            continue
        constraints.append(parse_segment(part))

    if not constraints:
        raise NoConstraintsFoundError()
    return constraints


def parse_expression(expression: str) -> List[Constraint]:
    """
    Parse an already-normalized expression into constraints.

    Args:
        expression: Comma-separated constraints

    Returns:
        Constraints in input order

    Raises:
        EmptyConstraintError: If the expression is empty
        MalformedConstraintError: If a segment does not match the grammar
        NoConstraintsFoundError: If the expression holds only commas/whitespace
    """
    if expression == "":
        raise EmptyConstraintError()
    return _parse_segments(expression)


def parse_constraints(requires_python: str) -> List[Constraint]:
    """
    Normalize and parse a requires-python style expression.

    Examples: ">=3.10", ">=3.10,<3.14", "~=3.10", "^3.10", "==3.11.*"

    Raises:
        EmptyConstraintError: If the expression is empty
        MalformedConstraintError: If a segment does not match the grammar
        NoConstraintsFoundError: If the expression holds only commas/whitespace
    """
    if requires_python == "":
        raise EmptyConstraintError()
    return _parse_segments(normalize_constraint(requires_python))
