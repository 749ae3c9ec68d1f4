"""
Error taxonomy for holoscribe.

Every failure the core can report is a HoloError, so callers at the edges
(CLI, web backend) can catch one type and still tell the kinds apart.
"""


class HoloError(ValueError):
    """Base class for all holoscribe failures."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class InvalidMeshError(HoloError):
    """A face references too few vertices or an index outside the vertex list."""


class MalformedInputError(HoloError):
    """Drawing source cannot be parsed, or has no top-level svg element."""


class EmptyInputError(HoloError):
    """There are no points or circles to process."""


class InvalidDurationError(HoloError):
    """Animation duration is not a positive number."""


class DegenerateGeometryError(HoloError):
    """Zero radius circle, or light source sitting on the circle centre."""
