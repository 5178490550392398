"""Data model for the workshop catalogue and derived calendar events."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional

from workshopcal.core.timezone_utils import parse_timestamp
from workshopcal.exceptions.errors import InvalidOfferingError

# Dataset collection names that hold lookup entities
LOOKUP_KINDS = ("formats", "instructors", "areas", "audiences", "departments", "series")


def _optional_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _optional_id(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _id_list(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass(frozen=True)
class LookupEntity:
    """A format, instructor, area, audience, department or series entry."""

    id: str
    label: str
    icon: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "LookupEntity":
        # Instructors carry "name", series carry "title", the rest "label"
        label = data.get("label") or data.get("name") or data.get("title") or ""
        return cls(id=str(data["id"]), label=str(label), icon=data.get("icon"))


@dataclass(frozen=True)
class Workshop:
    """One catalogue entry. Scheduling lives on its offerings."""

    id: str
    title: str
    summary: str = ""
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    format_id: Optional[str] = None
    area_ids: List[str] = field(default_factory=list)
    audience_ids: List[str] = field(default_factory=list)
    department_ids: List[str] = field(default_factory=list)
    instructor_ids: List[str] = field(default_factory=list)
    series_id: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Mapping) -> "Workshop":
        """Create a Workshop from a dataset record.

        A record without ``is_active`` is treated as inactive.
        """
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            summary=str(data.get("summary") or ""),
            description=data.get("description") or None,
            tags=[str(t) for t in data.get("tags") or []],
            format_id=_optional_id(data.get("format_id")),
            area_ids=_id_list(data.get("area_ids")),
            audience_ids=_id_list(data.get("audience_ids")),
            department_ids=_id_list(data.get("department_ids")),
            instructor_ids=_id_list(data.get("instructor_ids")),
            series_id=_optional_id(data.get("series_id")),
            is_active=bool(data.get("is_active", False)),
        )


@dataclass(frozen=True)
class Offering:
    """One scheduled occurrence of a workshop."""

    id: str
    workshop_id: str
    start: datetime
    end: datetime
    location: str = ""
    capacity: Optional[int] = None
    registration_url: Optional[str] = None
    quarter: Optional[str] = None
    year: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "Offering":
        """Create an Offering from a dataset record.

        Raises:
            InvalidOfferingError: If the timestamps are missing, unparseable,
                or the offering does not end after it starts.
        """
        offering_id = str(data.get("id", "<unknown>"))
        try:
            start = parse_timestamp(data.get("start"))
            end = parse_timestamp(data.get("end"))
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidOfferingError(offering_id, f"unparseable timestamp: {exc}") from exc
        if start is None or end is None:
            raise InvalidOfferingError(offering_id, "missing start or end")
        if (start.tzinfo is None) != (end.tzinfo is None):
            raise InvalidOfferingError(offering_id, "start and end mix naive and offset timestamps")
        if end <= start:
            raise InvalidOfferingError(offering_id, "end is not after start")

        try:
            capacity = _optional_int(data.get("capacity"))
            year = _optional_int(data.get("year"))
        except (TypeError, ValueError) as exc:
            raise InvalidOfferingError(offering_id, f"bad number: {exc}") from exc
        return cls(
            id=offering_id,
            workshop_id=str(data.get("workshop_id", "")),
            start=start,
            end=end,
            location=str(data.get("location") or ""),
            capacity=capacity,
            registration_url=data.get("registration_url") or None,
            quarter=data.get("quarter") or None,
            year=year,
        )


class Lookups:
    """Read-only lookup collections keyed by kind, then id."""

    def __init__(self, collections: Optional[Mapping[str, Iterable[LookupEntity]]] = None):
        self._by_kind: Dict[str, Dict[str, LookupEntity]] = {}
        for kind, entities in (collections or {}).items():
            self._by_kind[kind] = {e.id: e for e in entities}

    def entities(self, kind: str) -> List[LookupEntity]:
        """Entities of one kind in dataset order."""
        return list(self._by_kind.get(kind, {}).values())

    def get(self, kind: str, entity_id: Optional[str]) -> Optional[LookupEntity]:
        if not entity_id:
            return None
        return self._by_kind.get(kind, {}).get(entity_id)

    def label(self, kind: str, entity_id: Optional[str]) -> Optional[str]:
        """Label for ``entity_id`` or None when it does not resolve."""
        entity = self.get(kind, entity_id)
        return entity.label if entity and entity.label else None

    def labels(self, kind: str, entity_ids: Iterable[str]) -> List[str]:
        """Resolved labels in input order; misses are dropped."""
        resolved = (self.label(kind, entity_id) for entity_id in entity_ids)
        return [label for label in resolved if label]

    def display_label(self, kind: str, entity_id: str) -> str:
        """Label for display, falling back to the raw id."""
        return self.label(kind, entity_id) or entity_id


@dataclass
class Dataset:
    """Workshops, offerings and lookups loaded from one catalogue file."""

    workshops: List[Workshop]
    offerings: List[Offering]
    lookups: Lookups = field(default_factory=Lookups)
    _offerings_by_workshop: Dict[str, List[Offering]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        index: Dict[str, List[Offering]] = defaultdict(list)
        for offering in self.offerings:
            index[offering.workshop_id].append(offering)
        self._offerings_by_workshop = dict(index)

    def offerings_for(self, workshop: Workshop) -> List[Offering]:
        """Offerings of ``workshop`` in dataset order."""
        return list(self._offerings_by_workshop.get(workshop.id, []))

    def workshop(self, workshop_id: str) -> Optional[Workshop]:
        return next((w for w in self.workshops if w.id == workshop_id), None)

    def offering(self, offering_id: str) -> Optional[Offering]:
        return next((o for o in self.offerings if o.id == offering_id), None)

    @property
    def active_workshops(self) -> List[Workshop]:
        return [w for w in self.workshops if w.is_active]


@dataclass(frozen=True)
class EventRecord:
    """Provider-agnostic calendar event derived from one offering."""

    title: str
    description: str
    location: str
    start: datetime
    end: datetime
    url: str = ""
    # Offering id the UID is derived from
    uid_seed: str = ""

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Event '{self.title}' ends before it starts")

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)
