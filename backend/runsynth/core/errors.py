"""Error types raised by the activity pipeline."""


class ActivityError(Exception):
    """Base error for activity synthesis and encoding."""


class InvalidInput(ActivityError):
    """Raised when a request is missing a start time, has too few points, etc."""


class DegenerateRoute(ActivityError):
    """Raised when the route distance resolves to zero."""

    def __init__(self, message: str = "route distance is zero; draw a longer route"):
        super().__init__(message)


class EncodingFailure(ActivityError):
    """Raised when the FIT buffer cannot be built."""
