"""Settings for the completion and code-action menus.

Settings are read from a JSON file shaped like::

    {"sort_completions": true, "max_matches": 100, "strong_match_threshold": 0.2}

Every key is optional.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from codemenu.logger import get_logger, setup_logger

logger = get_logger("config")


class MenuSettings(BaseModel):
    """Tunables shared by the matcher, the ranker and the menus."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sort_completions: bool = Field(
        default=True, description="Rank completions with the strong/weak bucket rule"
    )
    show_completion_documentation: bool = Field(
        default=True, description="Expose documentation of the selected completion"
    )
    max_matches: int = Field(default=100, gt=0, description="Maximum fuzzy matches kept per query")
    strong_match_threshold: float = Field(
        default=0.2, ge=0.0, le=1.0, description="Fuzzy score at which a match counts as strong"
    )
    filter_chunk_size: int = Field(
        default=256, gt=0, description="Candidates scored between cooperative yields"
    )
    log_level: str = Field(default="INFO", description="Level passed to setup_logger by configure_logging")


def default_settings_path() -> Path:
    """Location of the optional settings file shipped next to the package."""
    # config.py is in src/codemenu/core/, so parent.parent is src/codemenu/
    return Path(__file__).parent.parent / "config" / "codemenu.json"


def load_settings(config_path: Optional[str | Path] = None) -> MenuSettings:
    """
    Load menu settings from a JSON file.

    Args:
        config_path: Path to the JSON settings file. If None, the default
            location is tried and defaults are used when it does not exist.

    Returns:
        MenuSettings: Parsed settings

    Raises:
        FileNotFoundError: If an explicit settings file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If a setting has an invalid value
    """
    if config_path is None:
        config_path = default_settings_path()
        if not config_path.exists():
            logger.debug(f"No settings file at {config_path}, using defaults")
            return MenuSettings()
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        error_msg = f"Menu settings file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.info(f"Loading menu settings from: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in settings file {config_path}: {e}")
        raise

    try:
        settings = MenuSettings(**data)
    except ValidationError as e:
        logger.error(f"Invalid settings in {config_path}: {e}")
        raise

    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings


def configure_logging(settings: MenuSettings, log_file: Optional[str | Path] = None) -> None:
    """Reconfigure the codemenu loggers with the level from ``settings``."""
    setup_logger(log_file=str(log_file) if log_file is not None else None, log_level=settings.log_level)
