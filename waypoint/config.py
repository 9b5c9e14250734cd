"""
Application configuration.

Values come from environment variables with sensible defaults, so the
viewer runs unconfigured and tests can point storage at a temp dir.
"""
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

APP_NAME = "WaypointPDF"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def default_data_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the per-user data directory for the application.

    Args:
        app_name: Name of the application

    Returns:
        Path to the app data directory (not created)
    """
    if os.name == 'nt':  # Windows
        base_dir = os.environ.get('APPDATA', os.path.expanduser('~'))
    elif sys.platform == 'darwin':  # macOS
        base_dir = os.path.expanduser('~/Library/Application Support')
    else:  # Linux and others
        base_dir = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))
    return Path(base_dir) / app_name


@dataclass
class AppConfig:
    """Viewer configuration with environment-aware defaults."""

    data_dir: Path = field(default_factory=lambda: Path(
        os.getenv("WAYPOINT_DATA_DIR") or default_data_dir()
    ))
    autosave: bool = field(default_factory=lambda: _env_flag("WAYPOINT_AUTOSAVE", "true"))
    dark_mode: bool = field(default_factory=lambda: _env_flag("WAYPOINT_DARK_MODE", "true"))
    log_level: str = field(default_factory=lambda: os.getenv("WAYPOINT_LOG_LEVEL", "INFO"))

    # View settings
    initial_zoom: float = 1.5
    zoom_step: float = 0.25
    min_zoom: float = 0.25
    max_zoom: float = 5.0
    page_spacing: int = 30

    # History
    undo_limit: int = 50

    def __post_init__(self):
        if isinstance(self.data_dir, str):
            self.data_dir = Path(self.data_dir)

    @property
    def annotations_dir(self) -> Path:
        """Directory holding one JSON file per annotated PDF."""
        return self.data_dir / "annotations"


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the process-wide configuration, creating it on first use."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _config
    _config = None
