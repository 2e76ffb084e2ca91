"""
Game configuration: model, file loader and cached provider.
"""

from kingdom_sim.config.config_loader import ConfigLoadResult, GameConfigLoader
from kingdom_sim.config.config_provider import DEFAULT_CACHE_SECONDS, ConfigProvider
from kingdom_sim.config.game_config import (
    AdvisorConfig,
    FactionConfig,
    GameConfig,
    GeneralConfig,
    PrestigeConfig,
    ResourceConfig,
)

__all__ = [
    "AdvisorConfig",
    "ConfigLoadResult",
    "ConfigProvider",
    "DEFAULT_CACHE_SECONDS",
    "FactionConfig",
    "GameConfig",
    "GameConfigLoader",
    "GeneralConfig",
    "PrestigeConfig",
    "ResourceConfig",
]
