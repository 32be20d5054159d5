"""Data model for parsed version constraints."""

from dataclasses import dataclass
from enum import Enum


class Operator(str, Enum):
    """Comparison operators accepted by the constraint grammar."""

    GE = ">="
    GT = ">"
    LE = "<="
    LT = "<"
    EQ = "=="
    NE = "!="
    COMPATIBLE = "~="
    CARET = "^"


# Longest spelling first so ">=" is never read as ">" followed by "=".
OPERATOR_TABLE = sorted(Operator, key=lambda op: len(op.value), reverse=True)


@dataclass(frozen=True)
class Constraint:
    """
    A single atomic version requirement.

    Attributes:
        operator: Comparison operator
        version: Bare "major.minor" version, never with a patch digit
    """

    operator: Operator
    version: str

    def __str__(self) -> str:
        return f"{self.operator.value}{self.version}"
