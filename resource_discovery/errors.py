"""Exceptions raised by resource discovery.

Only usage errors raise. Missing directories, archives or properties are
reported as empty results, never as exceptions.
"""


class DiscoveryError(Exception):
    """Base class for resource discovery errors."""


class InvalidSourceListError(DiscoveryError, ValueError):
    """Raised when an aggregate source is built from a missing source list."""


class SettingsError(DiscoveryError):
    """Raised when a discovery settings file cannot be parsed or validated."""

    def __init__(self, path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")
