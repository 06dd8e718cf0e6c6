class CompensationError(Exception):
    """Base class for every error raised by the compensation logic."""


class ProjectionRangeError(CompensationError, IndexError):
    """
    A requested year lies outside the configured growth or vesting schedule.
    Callers must treat the affected year as unavailable, never as zero.
    """

    def __init__(self, field: str, year: int, length: int):
        self.field = field
        self.year = year
        self.length = length
        super().__init__(
            f"Year index {year} is out of range for {field} (covers {length} year(s))"
        )


class ConfigurationError(CompensationError, ValueError):
    """Malformed package or tax-rate input rejected at the boundary."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)
