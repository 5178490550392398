"""Loading the workshop catalogue dataset from JSON."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from workshopcal.core.models import (
    LOOKUP_KINDS,
    Dataset,
    LookupEntity,
    Lookups,
    Offering,
    Workshop,
)
from workshopcal.exceptions.errors import DatasetLoadError, InvalidOfferingError

logger = logging.getLogger(__name__)


def load_dataset(path: Union[str, Path]) -> Dataset:
    """Read and parse a catalogue JSON file.

    Args:
        path: Path to the dataset file.

    Returns:
        The parsed Dataset.

    Raises:
        DatasetLoadError: If the file cannot be read or is not a catalogue.
    """
    dataset_path = Path(path)
    try:
        raw = dataset_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetLoadError(f"Could not read dataset: {exc.strerror or exc}", str(dataset_path)) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DatasetLoadError(f"Dataset is not valid JSON: {exc}", str(dataset_path)) from exc

    dataset = dataset_from_dict(data, source=str(dataset_path))
    logger.info(
        "Loaded %d workshops and %d offerings from %s",
        len(dataset.workshops), len(dataset.offerings), dataset_path,
    )
    return dataset


def dataset_from_dict(data: Any, source: str = "<memory>") -> Dataset:
    """Build a Dataset from already-decoded JSON.

    Offerings with unusable times are logged and skipped rather than
    failing the whole load.

    Raises:
        DatasetLoadError: If ``data`` does not have the catalogue shape.
    """
    if not isinstance(data, Mapping):
        raise DatasetLoadError(f"Expected a JSON object, got {type(data).__name__}", source)

    workshop_rows = _records(data, "workshops", source)
    offering_rows = _records(data, "offerings", source)

    try:
        workshops = [Workshop.from_dict(row) for row in workshop_rows]
    except KeyError as exc:
        raise DatasetLoadError(f"Workshop record missing field {exc}", source) from exc

    known_ids = {w.id for w in workshops}
    offerings: List[Offering] = []
    for row in offering_rows:
        try:
            offering = Offering.from_dict(row)
        except InvalidOfferingError as exc:
            logger.warning("Skipping offering: %s", exc)
            continue
        if offering.workshop_id not in known_ids:
            logger.warning(
                "Offering '%s' references unknown workshop '%s'",
                offering.id, offering.workshop_id,
            )
        offerings.append(offering)

    try:
        lookups = Lookups({
            kind: [LookupEntity.from_dict(row) for row in _records(data, kind, source)]
            for kind in LOOKUP_KINDS
        })
    except KeyError as exc:
        raise DatasetLoadError(f"Lookup record missing field {exc}", source) from exc

    return Dataset(workshops=workshops, offerings=offerings, lookups=lookups)


def _records(data: Mapping, key: str, source: str) -> List[Dict]:
    rows = data.get(key) or []
    if not isinstance(rows, list) or not all(isinstance(row, Mapping) for row in rows):
        raise DatasetLoadError(f"'{key}' must be a list of objects", source)
    return rows
