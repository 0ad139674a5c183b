"""Custom exceptions for Status Store."""


class StatusStoreError(Exception):
    """Base exception for Status Store errors (database unavailable or failing)."""


class StoredValueError(StatusStoreError):
    """A stored value could not be decoded into the expected shape."""
