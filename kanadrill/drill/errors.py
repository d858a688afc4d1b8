"""
Errors raised by the drill engine.

All errors propagate synchronously to the caller; nothing is retried.
"""

from typing import Any, Optional


class DrillError(Exception):
    """Base class for drill engine errors."""


class EmptySelection(DrillError):
    """A practice set resolved to zero entries."""

    def __init__(self, message: str = "Selection resolved to an empty practice set"):
        super().__init__(message)


class InvalidState(DrillError):
    """
    An operation was called while the engine is in the wrong state.

    This is a sequencing defect in the caller, not a user error.
    """

    def __init__(self, operation: str, state: Any, expected: Optional[str] = None):
        self.operation = operation
        self.state = state
        self.expected = expected
        message = f"{operation}() is not valid in state {state!r}"
        if expected:
            message += f" (requires {expected})"
        super().__init__(message)


class NotFound(DrillError, KeyError):
    """Catalog lookup of an unknown symbol."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(symbol)

    def __str__(self) -> str:
        return f"Symbol not in catalog: {self.symbol!r}"


class CatalogError(DrillError, ValueError):
    """Malformed catalog data."""
