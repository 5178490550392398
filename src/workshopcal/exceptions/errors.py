"""Exception hierarchy for workshopcal."""

from typing import Optional


class WorkshopCalendarError(Exception):
    """Base class for all workshopcal errors."""


class DatasetLoadError(WorkshopCalendarError):
    """Raised when the workshop dataset cannot be read or has the wrong shape."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} ({path})"
        super().__init__(message)


class InvalidOfferingError(WorkshopCalendarError):
    """Raised when an offering has unusable scheduling data."""

    def __init__(self, offering_id: str, reason: str):
        self.offering_id = offering_id
        self.reason = reason
        super().__init__(f"Invalid offering '{offering_id}': {reason}")


class CalendarRenderError(WorkshopCalendarError):
    """Raised when a generated document fails the structural check."""
