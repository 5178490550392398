"""
workshopcal - Workshop Catalogue Calendar Generator

Turns a workshop catalogue dataset into iCalendar documents and
"add to calendar" links for Google, Outlook, Office 365 and Yahoo.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from workshopcal.config.settings import CalendarConfig, load_config
from workshopcal.exceptions.errors import (
    WorkshopCalendarError,
    DatasetLoadError,
    InvalidOfferingError,
    CalendarRenderError,
)
from workshopcal.core.models import Dataset, EventRecord, Offering, Workshop
from workshopcal.core.dataset import load_dataset
from workshopcal.core.filtering import WorkshopFilter, filter_workshops, sort_workshops
from workshopcal.core.event_builder import event_from_offering, events_for_workshops
from workshopcal.core.ics_builder import build_ics_for_workshops, render_document
from workshopcal.core.calendar_links import CalendarLinks, generate_links
from workshopcal.batch import generate_calendar_files

__all__ = [
    # Version
    "__version__",
    # Config
    "CalendarConfig",
    "load_config",
    # Exceptions
    "WorkshopCalendarError",
    "DatasetLoadError",
    "InvalidOfferingError",
    "CalendarRenderError",
    # Core
    "Dataset",
    "EventRecord",
    "Offering",
    "Workshop",
    "load_dataset",
    "WorkshopFilter",
    "filter_workshops",
    "sort_workshops",
    "event_from_offering",
    "events_for_workshops",
    "build_ics_for_workshops",
    "render_document",
    "CalendarLinks",
    "generate_links",
    # Batch
    "generate_calendar_files",
]
