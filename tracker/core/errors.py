"""Error taxonomy for the finance tracker."""


class TrackerError(Exception):
    """Base class for all finance tracker errors."""


class ValidationError(TrackerError):
    """Malformed transaction input or backend payload; never enters the store."""


class TransportError(TrackerError):
    """The backend could not be reached or answered with an unusable response."""


class InvariantViolation(TrackerError):
    """Aggregation received data that should have been rejected at insertion."""
