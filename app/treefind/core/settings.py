"""Settings for treefind.

Settings are read from a TOML file in the XDG config directory. The file
is optional; anything it does not set keeps its default. A broken file is
reported and ignored so a search is never blocked by it.

Example ``~/.config/treefind/config.toml``::

    [find]
    sort_children = true
    log_level = "INFO"

    [theme]
    error = "#ff0000"
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from treefind.core.paths import get_config_path
from treefind.core.theme import ThemeColors
from treefind.utils.formatting import print_warning

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class FindSettings(BaseModel):
    """The ``[find]`` section of the settings file.

    Attributes:
        sort_children: Visit siblings in sorted name order instead of the
            order the directory listing returns them.
        log_level: Level for the diagnostic log handler.
    """

    model_config = ConfigDict(extra="forbid")

    sort_children: Annotated[bool, Field(description="Sort siblings by name")] = False
    log_level: Annotated[LogLevel, Field(description="Log level")] = "WARNING"


class Settings(BaseModel):
    """Complete settings file model."""

    model_config = ConfigDict(extra="forbid")

    find: FindSettings = Field(default_factory=FindSettings)
    theme: ThemeColors = Field(default_factory=ThemeColors)


def _read_toml(path: Path) -> dict[str, object] | None:
    """Read a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed document, or None if the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse TOML file %s: %s", path, e)
        print_warning(f"Failed to parse {path}: {e}")
        return None
    except OSError as e:
        logger.warning("Failed to read settings file %s: %s", path, e)
        print_warning(f"Failed to read {path}: {e}")
        return None


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults.

    Args:
        path: Settings file to read. Defaults to the XDG config location.

    Returns:
        Validated Settings instance.
    """
    if path is None:
        path = get_config_path()

    data = _read_toml(path)
    if data is None:
        return Settings()

    logger.debug("Loaded settings from %s", path)
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        logger.warning("Settings validation failed, using defaults: %s", e)
        print_warning(f"Invalid settings in {path}: {e}")
        return Settings()
