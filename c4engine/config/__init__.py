"""Config package exports."""

from .schema import DifficultyConfig, EngineConfig, load_config

__all__ = [
    "DifficultyConfig",
    "EngineConfig",
    "load_config",
]
