"""Custom exceptions for version-matrix-action."""

from typing import Optional


class VersionMatrixError(Exception):
    """Base exception for all version-matrix operations."""


class ConfigurationError(VersionMatrixError):
    """Raised when configuration validation fails."""


class ConstraintError(VersionMatrixError):
    """Base class for errors in a constraint expression."""


class EmptyConstraintError(ConstraintError):
    """Raised when the constraint expression is an empty string."""

    def __init__(self, message: str = "empty constraint string"):
        super().__init__(message)


class MalformedConstraintError(ConstraintError):
    """Raised when a comma-separated segment does not match the grammar."""

    def __init__(self, segment: str, reason: Optional[str] = None):
        self.segment = segment
        message = f"invalid constraint format: '{segment}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class NoConstraintsFoundError(ConstraintError):
    """Raised when the expression holds only commas and whitespace."""

    def __init__(self, message: str = "no valid constraints found"):
        super().__init__(message)


class NoCandidatesError(VersionMatrixError):
    """Raised when there are no candidate versions to filter."""

    def __init__(self, message: str = "no supported versions available"):
        super().__init__(message)


class NoMatchError(VersionMatrixError):
    """Raised when the constraints exclude every candidate version."""

    def __init__(self, constraint: str):
        self.constraint = constraint
        super().__init__(f"no versions match the constraint '{constraint}'")


class CatalogError(VersionMatrixError):
    """Raised when a single attempt to fetch the EOL feed fails."""


class FetchExhaustedError(CatalogError):
    """Raised when every attempt to fetch the EOL feed has failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        self.attempts = attempts
        self.last_error = last_error
        message = f"failed to fetch EOL data after {attempts} attempt(s)"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message)
