"""Strategy modules, one per difficulty."""

from typing import Any, Dict, Type

from .base_strategy import SearchStats, Strategy
from .easy_strategy import EasyConfig, EasyStrategy
from .medium_strategy import MediumConfig, MediumStrategy
from .hard_strategy import HardConfig, HardStrategy
from .tactics import find_forced_win, find_immediate_block, find_immediate_win

STRATEGY_CLASSES: Dict[str, Type[Strategy]] = {
    "easy": EasyStrategy,
    "medium": MediumStrategy,
    "hard": HardStrategy,
}

DIFFICULTIES = tuple(STRATEGY_CLASSES)


def make_strategy(difficulty: str, **kwargs: Any) -> Strategy:
    """Fresh strategy instance for ``difficulty``; ``kwargs`` go to its constructor."""
    if difficulty not in STRATEGY_CLASSES:
        raise KeyError(f"Unknown difficulty {difficulty!r}; expected one of {DIFFICULTIES}")
    return STRATEGY_CLASSES[difficulty](**kwargs)


__all__ = [
    "DIFFICULTIES",
    "STRATEGY_CLASSES",
    "EasyConfig",
    "EasyStrategy",
    "HardConfig",
    "HardStrategy",
    "MediumConfig",
    "MediumStrategy",
    "SearchStats",
    "Strategy",
    "find_forced_win",
    "find_immediate_block",
    "find_immediate_win",
    "make_strategy",
]
