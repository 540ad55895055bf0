"""
Errors raised by libraildriver.

Everything derives from :class:`RailDriverError`.  Only
:class:`NotConnectedError` comes from channel access; the other two are
raised while finding and loading the DLL or reading configuration.
"""


class RailDriverError(Exception):
    """Base exception for all RailDriver errors."""


class NotConnectedError(RailDriverError):
    """Raised when a channel is accessed while the context is not active."""


class LibraryError(RailDriverError):
    """Raised when the RailDriver DLL cannot be located, loaded, or used."""


class ConfigError(RailDriverError):
    """Raised when configuration is malformed or names an unknown channel."""
