"""Exception types raised by tonescale."""

__all__ = ["TonescaleError", "InvalidFormat", "UnknownConfiguration"]


class TonescaleError(Exception):
    """Base class for tonescale errors."""


class InvalidFormat(TonescaleError, ValueError):
    """A color string could not be parsed."""


class UnknownConfiguration(TonescaleError, LookupError):
    """A scale configuration is not registered."""
