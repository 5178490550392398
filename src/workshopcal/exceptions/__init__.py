"""Custom exceptions for workshopcal."""

from workshopcal.exceptions.errors import (
    WorkshopCalendarError,
    DatasetLoadError,
    InvalidOfferingError,
    CalendarRenderError,
)

__all__ = [
    "WorkshopCalendarError",
    "DatasetLoadError",
    "InvalidOfferingError",
    "CalendarRenderError",
]
