"""Exception hierarchy for ndgeom.

Every error derives from :class:`NDGeomError`, which is itself a
``ValueError`` so callers that guard geometry calls with ``except
ValueError`` keep working.
"""


class NDGeomError(ValueError):
    """Base exception for ndgeom kernel errors."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class DimensionMismatch(NDGeomError):
    """Operand shapes disagree (vector lengths, matrix sizes)."""
    pass


class NotSquareError(NDGeomError):
    """Operation requires a square matrix."""
    pass


class InvalidIndex(NDGeomError):
    """Axis or plane index out of range, duplicated, or misordered."""
    pass


class InvalidDimension(NDGeomError):
    """Dimension is not a usable size (e.g. rotation below 2D)."""
    pass


class InvalidPlaneName(NDGeomError):
    """Plane identifier cannot be parsed or does not exist in the space."""
    pass


class DegenerateVector(NDGeomError):
    """Vector magnitude too small to normalize."""
    pass


class SingularHomogeneous(NDGeomError):
    """Trailing homogeneous coordinate is too close to zero."""
    pass


class BufferTooSmall(NDGeomError):
    """Caller-supplied output buffer cannot hold the result."""
    pass
