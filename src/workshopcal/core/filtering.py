"""Selecting and ordering workshops."""

from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from workshopcal.core.models import Dataset, Workshop
from workshopcal.core.timezone_utils import TimezoneLike, to_utc

SORT_KEYS = ("date", "title")


@dataclass(frozen=True)
class WorkshopFilter:
    """Active filter selections. Empty values match everything."""

    search: Optional[str] = None
    area: Optional[str] = None
    audience: Optional[str] = None
    format: Optional[str] = None
    department: Optional[str] = None
    instructor: Optional[str] = None

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Optional[str]]]) -> "WorkshopFilter":
        """Build from a mapping, ignoring keys that are not filters."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (values or {}).items() if k in names and v})

    def active(self) -> Dict[str, str]:
        """Only the filters that are set."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    def matches(self, workshop: Workshop) -> bool:
        if not workshop.is_active:
            return False
        if self.search:
            haystack = " ".join(
                [workshop.title, workshop.summary, workshop.description or ""]
            ).lower()
            if self.search.lower() not in haystack:
                return False
        if self.area and self.area not in workshop.area_ids:
            return False
        if self.audience and self.audience not in workshop.audience_ids:
            return False
        if self.format and workshop.format_id != self.format:
            return False
        if self.department and self.department not in workshop.department_ids:
            return False
        if self.instructor and self.instructor not in workshop.instructor_ids:
            return False
        return True


def filter_workshops(
    workshops: Iterable[Workshop],
    filters: Optional[WorkshopFilter] = None,
) -> List[Workshop]:
    """Active workshops matching ``filters``, in input order."""
    filters = filters or WorkshopFilter()
    return [w for w in workshops if filters.matches(w)]


def sort_workshops(
    workshops: Iterable[Workshop],
    dataset: Dataset,
    sort_by: str = "date",
    tz: TimezoneLike = None,
) -> List[Workshop]:
    """Order workshops by first offering date or by title.

    Args:
        workshops: Workshops to order.
        dataset: Source of offerings for date ordering.
        sort_by: ``"date"`` (workshops without offerings last) or ``"title"``.
        tz: Zone naive offering times are read in, for mixed datasets.

    Raises:
        ValueError: For an unknown ``sort_by``.
    """
    if sort_by == "title":
        return sorted(workshops, key=lambda w: w.title.casefold())
    if sort_by != "date":
        raise ValueError(f"Unknown sort key '{sort_by}', expected one of {SORT_KEYS}")

    def date_key(workshop: Workshop) -> Tuple[int, float]:
        offerings = dataset.offerings_for(workshop)
        if not offerings:
            return (1, 0.0)
        return (0, to_utc(offerings[0].start, tz).timestamp())

    return sorted(workshops, key=date_key)
