# core/errors.py


class RayTracingError(Exception):
    """
    Base class for every error raised by the engine.
    """


class DegenerateGeometryError(RayTracingError, ValueError):
    """
    Raised at construction time for geometry that cannot exist: coincident or
    collinear points, non-planar or non-convex polygons, non-positive sizes.
    """


class DegenerateVectorError(DegenerateGeometryError):
    """
    Raised when an operation would produce a zero-length vector.
    """


class InvalidSampleCountError(RayTracingError, ValueError):
    """
    Raised when a sample count is not a perfect square.
    """


class InvalidConfigurationError(RayTracingError, ValueError):
    """
    Raised when a camera configuration is incomplete or inconsistent.
    """
