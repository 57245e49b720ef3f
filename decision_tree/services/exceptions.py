"""
Service Layer Exceptions

Custom exceptions for the TreeService and the repositories it reads from.
"""


class TreeNotFoundError(ValueError):
    """Raised when no definition exists for a tree identifier."""
    pass


class TreeNotOpenError(Exception):
    """Raised when an event is dispatched to a tree that was never opened."""
    pass
