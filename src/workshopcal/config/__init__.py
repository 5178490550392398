"""Configuration module for workshopcal."""

from workshopcal.config.settings import CalendarConfig, DEFAULT_CONFIG, load_config
from workshopcal.config.constants import (
    ICS_PRODID,
    UID_DOMAIN,
    DEFAULT_LOCATION,
    DEFAULT_COMBINATIONS,
)

__all__ = [
    "CalendarConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "ICS_PRODID",
    "UID_DOMAIN",
    "DEFAULT_LOCATION",
    "DEFAULT_COMBINATIONS",
]
