"""
Service-level exceptions.

The statistics and prediction services never raise on user data; these
exceptions cover the persistence side of the tracker.
"""

class TrackerError(Exception):
    """Base exception for tracker service errors."""
    pass

class StateStoreError(TrackerError):
    """Raised when tracker state cannot be read from or written to storage."""
    pass
