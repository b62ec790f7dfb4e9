"""Exception types raised by Class Atlas."""

from __future__ import annotations


class AtlasError(Exception):
    """Base class for all Class Atlas errors."""


class ConfigurationError(AtlasError, ValueError):
    """Raised when an unknown diagram option is set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Invalid option name "{name}"')


class TypeNotFoundError(AtlasError, LookupError):
    """Raised when a type or extension module is not known."""

    def __init__(self, name: str, what: str = "type") -> None:
        self.name = name
        self.what = what
        super().__init__(f"Unknown {what}: {name!r}")


class DefaultValueError(AtlasError):
    """Raised when a parameter default value cannot be evaluated."""

    def __init__(self, parameter: str, reason: str = "") -> None:
        self.parameter = parameter
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot evaluate default value of parameter {parameter!r}{detail}")


class RenderError(AtlasError):
    """Raised when the Graphviz backend fails to produce output."""
