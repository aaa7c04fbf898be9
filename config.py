"""Configuration settings for the task timer application."""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

ENV_PREFIX = "TASKTIMER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_log_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass
class Config:
    """Application configuration settings.

    Centralized configuration to avoid hardcoded values throughout the codebase.
    """
    # File system
    tasks_file: Path = field(default_factory=lambda: Path("~/.config/tasktimer.json").expanduser())
    log_dir: Path = field(default_factory=lambda: Path("~/.local/state/tasktimer").expanduser())
    log_level: int = logging.INFO

    # Behaviour
    tick_interval: float = 1.0  # Seconds between live timer redraws
    show_line_numbers: bool = False
    jalali_calendar: bool = False

    # Limits
    input_char_limit: int = 156
    min_description_width: int = 5

    # Colors
    color_primary: str = "#0abdc6"  # Cyan - primary accent
    color_accent: str = "#ff006e"  # Pink - errors
    color_secondary: str = "#8b5cf6"  # Purple - secondary accent
    color_bg_dark: str = "#1a1a2e"  # Dark background
    color_bg_medium: str = "#2d2d44"  # Medium background
    color_text: str = "#e2e8f0"  # Light text

    @classmethod
    def load(cls) -> 'Config':
        """
        Load configuration.

        Defaults can be overridden through TASKTIMER_* environment variables.
        Values that fail to parse fall back to the default.

        Returns:
            Config instance with default or loaded values
        """
        defaults = cls()
        return cls(
            tasks_file=_env_path(_k("FILE"), defaults.tasks_file),
            log_dir=_env_path(_k("LOG_DIR"), defaults.log_dir),
            log_level=_env_log_level(_k("LOG_LEVEL"), defaults.log_level),
            tick_interval=_env_float(_k("TICK"), defaults.tick_interval),
            show_line_numbers=_env_bool(_k("LINE_NUMBERS"), defaults.show_line_numbers),
            jalali_calendar=_env_bool(_k("JALALI"), defaults.jalali_calendar),
        )
