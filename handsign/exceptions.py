"""
Custom exceptions for the hand sign package.
"""


class HandSignError(Exception):
    """Base exception for hand sign errors."""
    pass


class MalformedPayload(HandSignError, ValueError):
    """Raised when a snapshot cannot be parsed or fails validation."""
    pass


class StorageError(HandSignError):
    """Raised when the persisted snapshot cannot be read, written or erased."""
    pass
