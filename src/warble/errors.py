"""Warble exception hierarchy.

Route misses are not errors (the router answers them with a fixed 404),
so the hierarchy only covers setup and configuration problems.
"""


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when engine configuration is invalid.

    Examples: an unparsable ``run()`` address, or a CLI import string
    that does not resolve to an Engine.
    """
