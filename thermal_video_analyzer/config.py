"""
Engine configuration loaded from YAML or JSON.
"""

import json
import logging
import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .exceptions import ConfigValidationError
from .resolver import DEFAULT_MATCH_THRESHOLD

VALID_UNITS = ("C", "F", "K")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EngineConfig:
    """Tunables for colour matching, frame caching and output."""

    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    frame_cache_size: int = 1
    jpeg_quality: int = 90
    temperature_unit: str = "C"
    log_level: str = "INFO"

    def __post_init__(self):
        if (
            isinstance(self.match_threshold, bool)
            or not isinstance(self.match_threshold, numbers.Real)
            or not math.isfinite(self.match_threshold)
        ):
            raise ConfigValidationError("Match threshold must be a finite number")
        for name in ("frame_cache_size", "jpeg_quality"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigValidationError(f"{name} must be an integer")
        if not isinstance(self.temperature_unit, str):
            raise ConfigValidationError("Temperature unit must be a string")
        if not isinstance(self.log_level, str):
            raise ConfigValidationError("Log level must be a string")
        if self.match_threshold <= 0:
            raise ConfigValidationError("Match threshold must be positive")
        if self.frame_cache_size < 1:
            raise ConfigValidationError("Frame cache size must be at least 1")
        if not 1 <= self.jpeg_quality <= 100:
            raise ConfigValidationError("JPEG quality must be between 1 and 100")
        if self.temperature_unit not in VALID_UNITS:
            raise ConfigValidationError(f"Temperature unit must be one of {VALID_UNITS}")
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigValidationError(f"Log level must be one of {VALID_LOG_LEVELS}")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)


def load_config(config_path: Union[str, Path]) -> EngineConfig:
    """Load configuration from a .yaml/.yml or .json file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigValidationError(f"Unsupported config format: {config_path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigValidationError(f"Failed to load configuration: {e}") from e

    if data is None:
        return EngineConfig()
    if not isinstance(data, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")
    return EngineConfig.from_dict(data)


def save_config(config: EngineConfig, config_path: Union[str, Path]) -> None:
    """Write configuration as YAML or JSON, chosen by file extension."""
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()
    with open(config_path, "w", encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, indent=2)
        elif suffix == ".json":
            json.dump(config.to_dict(), f, indent=2)
        else:
            raise ConfigValidationError(f"Unsupported config format: {config_path.suffix}")
