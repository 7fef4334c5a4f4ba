"""Configuration management for typedrill."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

log = logging.getLogger("typedrill.config")

DEFAULT_TEXT = "The quick brown fox jumped over the lazy wolves."

COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_config_path() -> Path:
    """Settings file location under the XDG config directory."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config_home) / "typedrill" / "settings.json"


class TrainerSettings(BaseModel):
    """Trainer settings with validation."""

    default_text: str = Field(
        default=DEFAULT_TEXT,
        min_length=1,
        description="Phrase used when no text is given on the command line",
    )
    wpm_decimals: int = Field(
        default=2, ge=0, le=4, description="Decimal places shown for WPM"
    )
    show_state: bool = Field(
        default=False, description="Show the engine state line below the text"
    )
    correct_color: str = Field(
        default="green", description="Colour for correctly typed characters"
    )
    incorrect_color: str = Field(
        default="red", description="Colour for mistyped and skipped characters"
    )
    log_level: str = Field(default="INFO", description="Log file level")

    model_config = ConfigDict(extra="ignore")

    @field_validator("correct_color", "incorrect_color")
    @classmethod
    def validate_color(cls, v):
        """Only the eight basic curses colours are supported."""
        v = v.strip().lower()
        if v not in COLOR_NAMES:
            raise ValueError(f"Unknown colour {v!r}, expected one of {', '.join(COLOR_NAMES)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}, expected one of {', '.join(LOG_LEVELS)}")
        return v


class Config:
    """Configuration manager using a JSON file with Pydantic validation."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize config from a settings file.

        Args:
            path: Path to the JSON settings file (created on first ``set``)
        """
        self.path = Path(path) if path is not None else default_config_path()
        self._values = self._load()

    def _load(self) -> dict[str, Any]:
        """Read stored values, falling back to defaults on any problem."""
        if not self.path.exists():
            return {}

        try:
            raw = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            log.warning(f"Cannot read settings file {self.path}: {e}")
            return {}

        if not isinstance(raw, dict):
            log.warning(f"Ignoring settings file {self.path}: expected a JSON object")
            return {}

        values = {}
        for key, value in raw.items():
            if key not in TrainerSettings.model_fields:
                log.warning(f"Ignoring unknown setting {key!r}")
                continue
            try:
                values[key] = getattr(TrainerSettings(**{key: value}), key)
            except ValidationError as e:
                log.warning(f"Ignoring invalid setting {key}={value!r}: {e}")
        return values

    def _save(self) -> None:
        """Write current values to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._values, indent=2, sort_keys=True))

    @property
    def settings(self) -> TrainerSettings:
        """Validated settings with defaults filled in."""
        return TrainerSettings(**self._values)

    def get(self, key: str) -> Any:
        """Get configuration value, falling back to the model default.

        Raises:
            KeyError: If the key is not a known setting
        """
        if key not in TrainerSettings.model_fields:
            raise KeyError(f"Unknown setting: {key}")
        return getattr(self.settings, key)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value with pydantic validation.

        Args:
            key: Setting key
            value: Setting value (strings are coerced to the field type)

        Raises:
            KeyError: If the key is not a known setting
            ValueError: If value fails validation
        """
        if key not in TrainerSettings.model_fields:
            raise KeyError(f"Unknown setting: {key}")

        try:
            validated = TrainerSettings(**{key: value})
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {e}")

        self._values[key] = getattr(validated, key)
        self._save()
        log.info(f"Setting {key} = {self._values[key]!r}")

    def get_all(self) -> dict[str, Any]:
        """Get all settings as dictionary, defaults included."""
        return self.settings.model_dump()
