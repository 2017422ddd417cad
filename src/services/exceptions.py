"""
Service-level exceptions.

This module contains exceptions that can be raised by the cycle engine
and the storage collaborators.
"""

class CycleError(Exception):
    """Base exception for cycle calculation errors."""
    pass

class InvalidProfile(CycleError):
    """Raised when cycle parameters break the profile invariants."""
    pass

class InvalidDate(CycleError):
    """Raised when a query date is missing or cannot be parsed."""
    pass

class RepositoryError(Exception):
    """Raised when user or session data cannot be read or written."""
    pass
