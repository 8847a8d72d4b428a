"""
Exceptions raised by the workshop scheduler.

All input problems derive from ValidationError, which is also a
ValueError so callers that only care about "bad input" can catch that.
"""

from typing import Any, Optional


class SchedulingError(Exception):
    """Base exception for all scheduler errors."""


class ValidationError(SchedulingError, ValueError):
    """
    Raised when input cannot be scheduled.

    Attributes:
        row: 1-based input row that failed, or None when the error is
            not tied to a row (e.g. the machine count)
    """

    def __init__(self, message: str, row: Optional[int] = None):
        self.row = row
        if row is not None:
            message = f"Invalid input in row {row}: {message}"
        super().__init__(message)


class ParseError(ValidationError):
    """A raw field could not be converted to an integer."""

    def __init__(self, field: str, value: Any, row: Optional[int] = None):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be an integer, got {value!r}", row)


class InvalidDuration(ValidationError):
    """Duration was parsed but is not positive."""

    def __init__(self, duration: int, row: Optional[int] = None):
        self.duration = duration
        super().__init__(f"duration must be positive, got {duration}", row)


class InvalidName(ValidationError):
    """Job name is empty."""

    def __init__(self, row: Optional[int] = None):
        super().__init__("name must not be empty", row)


class InvalidMachineCount(ValidationError):
    """Machine count is not a positive integer."""

    def __init__(self, machine_count: Any):
        self.machine_count = machine_count
        super().__init__(
            f"machine count must be a positive integer, got {machine_count!r}"
        )
