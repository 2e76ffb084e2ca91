"""
Loads a GameConfig from a JSON document on disk.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from kingdom_sim.config.game_config import GameConfig

logger = logging.getLogger(__name__)


@dataclass
class ConfigLoadResult:
    """Result of loading a configuration file."""
    success: bool
    config: Optional[GameConfig] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class GameConfigLoader:
    """
    Reads a game configuration file.

    Sections missing from the file fall back to the built-in defaults, and a
    missing file yields the default configuration with a warning.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> ConfigLoadResult:
        result = ConfigLoadResult(success=False)

        if not self.path.exists():
            result.warnings.append(f"Config file not found: {self.path}, using defaults")
            logger.warning(f"Config file not found: {self.path}, using defaults")
            result.config = GameConfig()
            result.success = True
            return result

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            result.errors.append(f"Invalid JSON in {self.path}: {e}")
            return result

        if not isinstance(data, dict):
            result.errors.append(f"Config root must be an object in {self.path}")
            return result

        try:
            result.config = GameConfig.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            result.errors.append(f"Invalid config in {self.path}: {e}")
            return result

        result.success = True
        logger.info(f"Loaded game config from {self.path}")
        return result

    def save(self, config: GameConfig) -> Path:
        """Write a config document, creating parent directories."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
        return self.path
