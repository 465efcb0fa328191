"""Exceptions raised by wireflow.

Routing itself never raises for bad edges; it returns a RouteFailure. These
exceptions cover reading layout input and building configuration.
"""


class WireflowError(Exception):
    """Base class for all wireflow errors."""

    pass


class LayoutParseError(WireflowError):
    """Raised when a layout result cannot be read into a box tree."""

    pass


class ConfigError(WireflowError, ValueError):
    """Raised when a routing option has an invalid value."""

    pass
