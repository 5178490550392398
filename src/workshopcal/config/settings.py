"""Runtime configuration for workshopcal.

Defaults come from ``constants``; any of them can be overridden through
``WORKSHOPCAL_*`` variables, read from a ``.env`` file first and then from the
process environment (which wins).
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

from workshopcal.config.constants import (
    CALENDAR_DESCRIPTION,
    CALENDAR_NAME,
    CALENDAR_TIMEZONE,
    DEFAULT_TIMEZONE,
    ICS_PRODID,
    UID_DOMAIN,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "WORKSHOPCAL_"


@dataclass(frozen=True)
class CalendarConfig:
    """Settings that shape generated calendars."""

    prodid: str = ICS_PRODID
    uid_domain: str = UID_DOMAIN
    calendar_name: str = CALENDAR_NAME
    calendar_description: str = CALENDAR_DESCRIPTION
    calendar_timezone: str = CALENDAR_TIMEZONE
    # Zone naive offering timestamps are interpreted in
    timezone: str = DEFAULT_TIMEZONE
    data_path: Optional[str] = None
    output_dir: Optional[str] = None

    @classmethod
    def env_keys(cls) -> Dict[str, str]:
        """Map each field to its environment variable name."""
        return {f.name: f"{ENV_PREFIX}{f.name.upper()}" for f in fields(cls)}


def _collect_overrides(values: Mapping[str, Optional[str]]) -> Dict[str, str]:
    overrides = {}
    for field_name, env_key in CalendarConfig.env_keys().items():
        value = values.get(env_key)
        if value:
            overrides[field_name] = value.strip()
    return overrides


def load_config(
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CalendarConfig:
    """Build a CalendarConfig from a .env file and the environment.

    Args:
        env_file: Optional path to a .env file. Missing files are ignored.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        The resolved configuration.
    """
    config = CalendarConfig()

    if env_file is not None:
        env_path = Path(env_file)
        if env_path.is_file():
            file_overrides = _collect_overrides(dotenv_values(env_path))
            if file_overrides:
                logger.debug("Applying %d setting(s) from %s", len(file_overrides), env_path)
                config = replace(config, **file_overrides)
        else:
            logger.debug("No .env file at %s", env_path)

    env_overrides = _collect_overrides(os.environ if environ is None else environ)
    if env_overrides:
        logger.debug("Applying environment overrides: %s", sorted(env_overrides))
        config = replace(config, **env_overrides)

    return config


DEFAULT_CONFIG = CalendarConfig()
