"""Exception types raised by the triangulator."""
from __future__ import annotations

__all__ = ['DelaunayError', 'EmptyInputError', 'CoincidentPointsError']


class DelaunayError(ValueError):
    """Base class for triangulation errors."""


class EmptyInputError(DelaunayError):
    """Raised when a triangulation is requested for zero points."""

    def __init__(self, message: str = "no vertices"):
        super().__init__(message)


class CoincidentPointsError(DelaunayError):
    """Raised when a triangle is too degenerate for a circumcenter solve.

    The insertion engine catches this and closes the triangle; it only
    reaches callers who use the geometry helpers directly.
    """

    def __init__(self, message: str = "coincident points"):
        super().__init__(message)
