class SchedulerError(Exception):
    """Base exception for all scheduler-related errors."""
    pass


class ConfigurationError(SchedulerError):
    """Raised when there are issues with the configuration."""
    pass


class StoreError(SchedulerError):
    """Raised when a stored collection cannot be read or written."""
    pass


class ExportError(SchedulerError):
    """Raised when schedule export fails."""
    pass
