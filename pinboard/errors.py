"""Exception types raised by Pinboard components."""


class PinboardError(Exception):
    """Base class for all Pinboard errors."""


class StorageError(PinboardError):
    """A key-value backend failed to read or write."""
