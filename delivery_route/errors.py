"""Exceptions raised by the delivery route solvers."""


class RouteError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(RouteError, ValueError):
    """Rejected run parameters or input geometry, raised before any run starts."""


class CoordinateFileError(RouteError):
    """A coordinate or tour file could not be read or parsed."""
