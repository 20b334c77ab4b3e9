"""
Cabinet configuration.

Settings come from an optional YAML file (``--config`` on the launcher or
the CABINET_CONFIG environment variable). Everything has a default, so no
file is needed to play.

Example file:

    window_width: 1280
    window_height: 720
    log_level: DEBUG
    games:
      viper:
        move_rate: 10
      pong:
        win_score: 5
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_ENV = 'CABINET_CONFIG'

M = TypeVar('M', bound=BaseModel)


class ConfigError(Exception):
    """Configuration file missing, unreadable or invalid."""


class CabinetSettings(BaseModel):
    """Launcher and engine settings.

    Attributes:
        window_width: Window width in pixels
        window_height: Window height in pixels
        tick_interval: Seconds between engine ticks
        canvas_width: Width of the game canvas panel
        canvas_height: Height of the game canvas panel
        log_level: Default level for cabinet loggers
        games: Per-game overrides keyed by game slug
    """
    window_width: int = Field(default=1280, gt=0)
    window_height: int = Field(default=720, gt=0)
    tick_interval: float = Field(default=0.016, gt=0, le=1)
    canvas_width: int = Field(default=648, gt=0)
    canvas_height: int = Field(default=376, gt=0)
    log_level: str = 'INFO'
    games: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra='forbid')

    def game_overrides(self, slug: str) -> Dict[str, Any]:
        """Overrides for one game (empty if none configured)."""
        return dict(self.games.get(slug, {}))


def build_model(model: Type[M], data: Dict[str, Any], source: str = '<overrides>') -> M:
    """Validate ``data`` into ``model``, raising ConfigError on failure."""
    try:
        return model(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {model.__name__} in {source}: {exc}") from exc


def load_settings(path: Optional[Union[str, Path]] = None) -> CabinetSettings:
    """Load settings from a YAML file.

    Args:
        path: YAML file; falls back to CABINET_CONFIG, then to defaults

    Returns:
        Validated CabinetSettings

    Raises:
        ConfigError: File missing, not YAML, not a mapping, or invalid
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV)
    if not path:
        return CabinetSettings()

    path = Path(path).expanduser()
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return build_model(CabinetSettings, data, str(path))
