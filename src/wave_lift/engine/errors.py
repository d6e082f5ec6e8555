"""Engine error types."""


class InvalidState(ValueError):
    """Raised when the engine is handed an out-of-range cycle position.

    This is always a caller bug; values are never clamped into range.
    """
