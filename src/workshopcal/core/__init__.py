"""Core calendar generation logic for workshopcal."""

from workshopcal.core.calendar_links import CalendarLinks, generate_links, webcal_url
from workshopcal.core.dataset import dataset_from_dict, load_dataset
from workshopcal.core.escaping import escape_text
from workshopcal.core.event_builder import build_description, event_from_offering, events_for_workshops
from workshopcal.core.filtering import WorkshopFilter, filter_workshops, sort_workshops
from workshopcal.core.ics_builder import build_ics_for_workshops, render_document, render_event
from workshopcal.core.models import Dataset, EventRecord, LookupEntity, Lookups, Offering, Workshop

__all__ = [
    "CalendarLinks",
    "generate_links",
    "webcal_url",
    "dataset_from_dict",
    "load_dataset",
    "escape_text",
    "build_description",
    "event_from_offering",
    "events_for_workshops",
    "WorkshopFilter",
    "filter_workshops",
    "sort_workshops",
    "build_ics_for_workshops",
    "render_document",
    "render_event",
    "Dataset",
    "EventRecord",
    "LookupEntity",
    "Lookups",
    "Offering",
    "Workshop",
]
