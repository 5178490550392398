"""Static calendar file generation.

Writes one ICS file for all workshops, one per research area, audience,
format and department, and one per named filter combination. Filenames
depend only on the filter identity, so a rerun against the same dataset
rewrites the same files.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple, Union

import pytz

from workshopcal.config.constants import (
    ALL_WORKSHOPS_FILENAME,
    DEFAULT_COMBINATIONS,
    PER_LOOKUP_FILTERS,
)
from workshopcal.config.settings import DEFAULT_CONFIG, CalendarConfig
from workshopcal.core.event_builder import events_for_workshops
from workshopcal.core.filtering import WorkshopFilter, filter_workshops
from workshopcal.core.ics_builder import count_events, render_document
from workshopcal.core.models import Dataset, Workshop
from workshopcal.utils.paths import calendar_filename

logger = logging.getLogger(__name__)

Combination = Tuple[str, Mapping[str, str]]


@dataclass(frozen=True)
class CalendarFile:
    """One planned output file."""

    filename: str
    filters: WorkshopFilter
    workshops: Tuple[Workshop, ...]


def plan_calendar_files(
    dataset: Dataset,
    combinations: Sequence[Combination] = DEFAULT_COMBINATIONS,
) -> List[CalendarFile]:
    """Work out which files to write and which workshops go in each.

    ``all.ics`` is always planned; other groups are dropped when no active
    workshop matches them.
    """
    planned = [
        CalendarFile(
            ALL_WORKSHOPS_FILENAME,
            WorkshopFilter(),
            tuple(filter_workshops(dataset.workshops)),
        )
    ]

    groups = []
    for filter_key, lookup_kind in PER_LOOKUP_FILTERS:
        for entity in dataset.lookups.entities(lookup_kind):
            groups.append((calendar_filename(filter_key, entity.id), {filter_key: entity.id}))
    for name, filters in combinations:
        groups.append((calendar_filename(None, name), filters))

    seen = {ALL_WORKSHOPS_FILENAME}
    for filename, filter_values in groups:
        if filename in seen:
            logger.warning("Filename %s planned twice, keeping the first", filename)
            continue
        seen.add(filename)
        filters = WorkshopFilter.from_mapping(filter_values)
        workshops = filter_workshops(dataset.workshops, filters)
        if not workshops:
            logger.debug("No workshops for %s, not writing it", filename)
            continue
        planned.append(CalendarFile(filename, filters, tuple(workshops)))
    return planned


def generate_calendar_files(
    dataset: Dataset,
    output_dir: Union[str, Path],
    generated_at: Optional[datetime] = None,
    config: CalendarConfig = DEFAULT_CONFIG,
    combinations: Sequence[Combination] = DEFAULT_COMBINATIONS,
) -> List[CalendarFile]:
    """Render and write every planned calendar file.

    Args:
        dataset: The loaded catalogue.
        output_dir: Directory to write into; created if missing.
        generated_at: DTSTAMP shared by every file (default: now).
        config: Calendar settings.
        combinations: Named filter combinations to publish.

    Returns:
        The files written, in generation order.

    Raises:
        CalendarRenderError: If a rendered document fails to parse back.
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    if generated_at is None:
        generated_at = datetime.now(pytz.utc)

    written = []
    for planned in plan_calendar_files(dataset, combinations):
        records = events_for_workshops(planned.workshops, dataset)
        content = render_document(records, generated_at=generated_at, config=config)
        event_count = count_events(content)
        # newline="" writes the CRLF endings as rendered
        with open(out_dir / planned.filename, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info(
            "Generated %s (%d workshops, %d events)",
            planned.filename, len(planned.workshops), event_count,
        )
        written.append(planned)
    return written
