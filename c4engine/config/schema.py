"""Configuration schema for the move engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


@dataclass
class DifficultyConfig:
    time_budget_ms: float
    max_depth: Optional[int] = None
    center_bias: Optional[float] = None
    thinking_fraction: Optional[float] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "DifficultyConfig":
        allowed = {f.name for f in fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise ValueError(f"Unknown keys for difficulty '{name}': {sorted(unknown)}")
        return cls(**data)

    def options(self) -> Dict[str, Any]:
        """Settings to pass to ``Strategy.configure``; unset ones are left out."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _default_easy() -> DifficultyConfig:
    return DifficultyConfig(time_budget_ms=50.0, center_bias=1.5, thinking_fraction=0.3)


def _default_medium() -> DifficultyConfig:
    return DifficultyConfig(time_budget_ms=200.0, max_depth=3)


def _default_hard() -> DifficultyConfig:
    return DifficultyConfig(time_budget_ms=500.0, max_depth=12)


@dataclass
class EngineConfig:
    easy: DifficultyConfig = field(default_factory=_default_easy)
    medium: DifficultyConfig = field(default_factory=_default_medium)
    hard: DifficultyConfig = field(default_factory=_default_hard)
    seed: Optional[int] = None

    def for_difficulty(self, difficulty: str) -> DifficultyConfig:
        if difficulty not in ("easy", "medium", "hard"):
            raise ValueError(f"Unknown difficulty: {difficulty}")
        return getattr(self, difficulty)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        unknown = set(data) - {"easy", "medium", "hard", "seed"}
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        defaults = cls()
        levels = {}
        for name in ("easy", "medium", "hard"):
            level_data = data.get(name)
            if level_data is None:
                levels[name] = getattr(defaults, name)
            elif not isinstance(level_data, dict):
                raise ValueError(f"Config for '{name}' must be a mapping, got {type(level_data)}")
            else:
                merged = {**getattr(defaults, name).options(), **level_data}
                levels[name] = DifficultyConfig.from_dict(name, merged)

        seed = data.get("seed")
        if seed is not None:
            seed = int(seed)

        return cls(seed=seed, **levels)


def load_config(path: Union[str, Path]) -> EngineConfig:
    """Load EngineConfig from a YAML file."""
    path = Path(path)
    with path.open() as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data)}")
    return EngineConfig.from_dict(data)
