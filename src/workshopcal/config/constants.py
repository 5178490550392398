"""Centralized constants for workshopcal.

Values that end up in published calendar files or provider links live here
so the ICS generator, the link generator and the batch job agree on them.
"""

# ICS calendar constants
ICS_PRODID = "-//UCSB Library//RDS Workshops//EN"
ICS_VERSION = "2.0"
ICS_CALSCALE = "GREGORIAN"
ICS_METHOD = "PUBLISH"
ICS_LINE_ENDING = "\r\n"

# Calendar display hints (X-WR-* properties)
CALENDAR_NAME = "RDS Workshops"
CALENDAR_TIMEZONE = "America/Los_Angeles"
CALENDAR_DESCRIPTION = "Research Data Services Workshop Catalogue"

# Appended to offering ids to form VEVENT UIDs
UID_DOMAIN = "rds-workshops.ucsb.edu"

# Reminders emitted on every event: (trigger, description suffix)
REMINDERS = (
    ("-PT24H", "tomorrow"),
    ("-PT1H", "in 1 hour"),
)

EVENT_STATUS = "CONFIRMED"
EVENT_SEQUENCE = "0"

# Event defaults
DEFAULT_LOCATION = "TBA"
DESCRIPTION_SEPARATOR = "\n\n---\n"

# Zone used to interpret naive timestamps ("local" = system zone)
DEFAULT_TIMEZONE = "local"

# Calendar provider endpoints
GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
OUTLOOK_COMPOSE_URL = "https://outlook.live.com/calendar/0/deeplink/compose"
OFFICE365_COMPOSE_URL = "https://outlook.office.com/calendar/0/deeplink/compose"
YAHOO_CALENDAR_URL = "https://calendar.yahoo.com/"
OUTLOOK_COMPOSE_PATH = "/calendar/action/compose"
YAHOO_API_VERSION = "60"

# Batch file generation
ALL_WORKSHOPS_FILENAME = "all.ics"
DEFAULT_OUTPUT_DIRNAME = "calendars"
DEFAULT_DATASET_FILENAME = "workshops.json"

# Lookup kinds that get one calendar file per entry, in generation order.
# Maps the filter key to the dataset collection name.
PER_LOOKUP_FILTERS = (
    ("area", "areas"),
    ("audience", "audiences"),
    ("format", "formats"),
    ("department", "departments"),
)

# Named filter combinations published alongside the per-lookup files
DEFAULT_COMBINATIONS = (
    ("online-grad", {"format": "fmt-online", "audience": "aud-grad"}),
    ("in-person-grad", {"format": "fmt-in-person", "audience": "aud-grad"}),
)

# Timezone abbreviation to IANA zone mapping
ABBR_TO_TZ = {
    # North America
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    # United Kingdom / Europe
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
    "UTC": "UTC",
}
