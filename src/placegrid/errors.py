"""errors.py

Typed failures raised by the grid codec.

All of them derive from :class:`ValueError`, so callers that already guard
codec calls with ``except ValueError`` keep working.
"""


class GridCodeError(ValueError):
    """Base class for every error raised by :mod:`placegrid`."""


class InvalidGridCodeError(GridCodeError):
    """A string is not a well-formed ``XXXX-YYYY-ZZ`` grid code."""


class CoordinateOutOfRangeError(GridCodeError):
    """Latitude or longitude outside the WGS-84 ranges (or not finite)."""


class RadiusOutOfRangeError(GridCodeError):
    """Search radius is negative, not finite, or too large to enumerate."""
