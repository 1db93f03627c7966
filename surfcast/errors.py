# ABOUTME: Exception hierarchy shared by the scoring core and the orchestration layer
# ABOUTME: Core functions raise these for malformed input; orchestration catches upstream ones


class SurfcastError(Exception):
    """Base exception for surfcast errors."""
    pass


class InvalidObservationError(SurfcastError, ValueError):
    """Raised when a height, period, direction or score is outside its valid range."""
    pass


class UnknownSpotError(SurfcastError, KeyError):
    """Raised when a spot id is not in the spot table."""
    pass


class UpstreamDataError(SurfcastError):
    """Raised when the marine/weather API returns a payload we can't use."""
    pass
