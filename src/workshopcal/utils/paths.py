"""Path utilities for datasets and generated calendars."""

import re
from pathlib import Path
from typing import Optional

from workshopcal.config.constants import DEFAULT_DATASET_FILENAME, DEFAULT_OUTPUT_DIRNAME

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def get_project_root() -> Path:
    """Get the project root directory when running from a source checkout.

    Returns:
        Path to the project root.
    """
    return Path(__file__).parent.parent.parent.parent


def get_default_dataset_path(configured: Optional[str] = None) -> Path:
    """Dataset location: the configured path, else ``data/workshops.json``."""
    if configured:
        return Path(configured)
    return get_project_root() / "data" / DEFAULT_DATASET_FILENAME


def get_default_output_dir(configured: Optional[str] = None) -> Path:
    """Output directory for generated calendars."""
    if configured:
        return Path(configured)
    return get_project_root() / DEFAULT_OUTPUT_DIRNAME


def calendar_filename(prefix: Optional[str], identifier: str) -> str:
    """Deterministic ``.ics`` filename for a filter group.

    Args:
        prefix: Filter kind (e.g. "area"), or None for named combinations.
        identifier: Lookup id or combination name.

    Returns:
        ``{prefix}-{identifier}.ics`` or ``{identifier}.ics``, with characters
        outside ``[A-Za-z0-9._-]`` replaced by ``_``.
    """
    safe_id = _UNSAFE_FILENAME_CHARS.sub("_", identifier).strip(".") or "_"
    stem = f"{prefix}-{safe_id}" if prefix else safe_id
    return f"{stem}.ics"
