class ConfigurationError(ValueError):
    """
    Raised when the campaign configuration can't be scheduled:
    unknown service names, malformed week counts, unknown sale process.
    """


class InvalidIntervalError(ValueError):
    """Raised for an event or booking whose end is before its start."""
