"""Configuration loading for SLTP.

Settings live in ``~/.config/sltp/config.toml`` next to the journal
database. Set ``SLTP_HOME`` to use another directory.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import ValidationError

from sltp.models import AppSettings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"
DB_FILENAME = "journal.db"


def get_config_dir() -> Path:
    """Directory holding the config file and database."""
    override = os.environ.get("SLTP_HOME")
    if override:
        return Path(override)
    return Path.home() / ".config" / "sltp"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILENAME


def get_db_path() -> Path:
    return get_config_dir() / DB_FILENAME


def settings_to_toml(settings: AppSettings) -> dict:
    """Lay settings out as TOML tables."""
    challenge = settings.challenge.model_dump(exclude_none=True)
    if settings.challenge.start_date is not None:
        challenge["start_date"] = settings.challenge.start_date.isoformat()
    return {
        "journal": settings.model_dump(exclude={"challenge"}),
        "challenge": challenge,
    }


def settings_from_toml(data: dict) -> AppSettings:
    """Build settings from parsed TOML, filling gaps with defaults.

    Raises:
        ValueError: If ``journal`` or ``challenge`` is not a table.
    """
    for table in ("journal", "challenge"):
        if not isinstance(data.get(table, {}), dict):
            raise ValueError(f"[{table}] must be a table")

    journal = dict(data.get("journal", {}))
    journal.pop("challenge", None)
    challenge = dict(data.get("challenge", {}))
    if not challenge.get("start_date"):
        challenge.pop("start_date", None)
    return AppSettings(**journal, challenge=challenge)


def load_settings(config_path: Optional[Path] = None) -> AppSettings:
    """Load settings from the config file.

    A missing file gives default settings. An unreadable or invalid file
    also gives defaults, with a warning, so the journal stays usable.

    Args:
        config_path: Config file to read. Defaults to ``get_config_path()``.

    Returns:
        AppSettings.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return AppSettings()

    try:
        data = toml.load(config_path)
        return settings_from_toml(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("Could not read settings from %s (%s); using defaults", config_path, e)
        return AppSettings()


def save_settings(settings: AppSettings, config_path: Optional[Path] = None) -> Path:
    """Write settings to the config file.

    Args:
        settings: Settings to persist.
        config_path: Config file to write. Defaults to ``get_config_path()``.

    Returns:
        Path written.
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(settings_to_toml(settings), f)

    logger.debug("Saved settings to %s", config_path)
    return config_path
