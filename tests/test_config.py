"""Tests for configuration schemas."""

from __future__ import annotations

from pathlib import Path

import pytest

from c4engine.config import DifficultyConfig, EngineConfig, load_config

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_engine_config_defaults():
    cfg = EngineConfig()
    assert cfg.easy.time_budget_ms == 50.0
    assert cfg.easy.center_bias == 1.5
    assert cfg.medium.max_depth == 3
    assert cfg.hard.max_depth == 12
    assert cfg.seed is None
    assert cfg.for_difficulty("hard") is cfg.hard
    with pytest.raises(ValueError):
        cfg.for_difficulty("expert")


def test_engine_config_parsing():
    """Partial sections are merged over the defaults."""
    data = {
        "seed": "7",
        "medium": {"time_budget_ms": 400},
        "hard": {"max_depth": 8},
    }
    cfg = EngineConfig.from_dict(data)
    assert cfg.seed == 7
    assert cfg.medium.time_budget_ms == 400
    assert cfg.medium.max_depth == 3
    assert cfg.hard.time_budget_ms == 500.0
    assert cfg.hard.max_depth == 8
    assert cfg.easy == EngineConfig().easy


def test_engine_config_rejects_unknown_keys():
    with pytest.raises(ValueError):
        EngineConfig.from_dict({"expert": {}})
    with pytest.raises(ValueError):
        EngineConfig.from_dict({"hard": {"depth": 3}})
    with pytest.raises(ValueError):
        EngineConfig.from_dict({"easy": [1, 2]})


def test_difficulty_options_skip_unset_fields():
    level = DifficultyConfig(time_budget_ms=120.0, max_depth=2)
    assert level.options() == {"time_budget_ms": 120.0, "max_depth": 2}


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("seed: 3\neasy:\n  center_bias: 2.0\n")
    cfg = load_config(path)
    assert cfg.seed == 3
    assert cfg.easy.center_bias == 2.0
    assert cfg.easy.time_budget_ms == 50.0


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- easy\n- hard\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_repo_config_loads():
    cfg = load_config(REPO_ROOT / "configs" / "engine.yaml")
    assert cfg.seed == 42
    assert cfg.hard.time_budget_ms == 500
