"""
Exception types for recipient registry reconciliation.
"""


class InvalidEventError(Exception):
    """Raised when a raw registry event cannot be decoded into a recipient."""
    pass


class InvalidMetadataError(InvalidEventError):
    """Raised when a recipient's metadata blob is not a JSON object."""
    pass


class InvalidTransitionError(Exception):
    """Raised when no handler is registered for an event type."""
    pass


class StoreError(Exception):
    """Raised when recipient store operations fail."""
    pass


class ProviderError(Exception):
    """Raised when the node/provider fails to return registry events."""
    pass
