"""Strategy interface shared by the three difficulty levels."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from c4engine.games.connect4 import Board, Disc


@dataclass
class SearchStats:
    """Counters of the most recent ``choose_move`` call."""

    nodes_evaluated: int = 0
    pruning_count: int = 0
    search_depth: int = 0

    @property
    def pruning_efficiency(self) -> float:
        total = self.nodes_evaluated + self.pruning_count
        return self.pruning_count / total if total else 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["pruning_efficiency"] = self.pruning_efficiency
        return data


class Strategy(ABC):
    """
    Move selection for one difficulty level.

    Implementations own all of their search state (tables, counters, random
    generator), so two instances never influence each other.
    """

    name: str = ""

    @abstractmethod
    def choose_move(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        *,
        time_budget_ms: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> int:
        """
        Return a legal column for ``player``.

        Raises:
            NoLegalMoves: if the board has no open column.
        """

    @abstractmethod
    def analyze(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        depth: Optional[int] = None,
    ) -> Tuple[int, float]:
        """Untimed recommendation for UI hints: ``(column, score)``."""

    @abstractmethod
    def configure(self, **options: Any) -> None:
        """Update time budget, depth or bias; out-of-range values are clamped."""

    @abstractmethod
    def reset(self) -> None:
        """Forget everything learned during the current game."""

    @abstractmethod
    def get_stats(self) -> SearchStats:
        """Counters of the last search."""

    @abstractmethod
    def explain_move(self, board: Board, column: int, player: Disc, opponent: Disc) -> str:
        """Short human-readable reason for playing ``column``."""

    @abstractmethod
    def difficulty_info(self) -> Dict[str, Any]:
        """Name, description and current settings of this difficulty."""
