from __future__ import annotations

from .turn_based_game import TurnBasedGame

__all__ = ["TurnBasedGame"]
