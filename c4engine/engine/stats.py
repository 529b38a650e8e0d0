"""Running per-difficulty performance counters."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from c4engine.strategies.base_strategy import SearchStats

GAME_RESULTS = ("win", "loss", "draw")


@dataclass
class PerformanceStats:
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    moves_played: int = 0
    fallbacks: int = 0
    total_think_time_ms: float = 0.0
    total_nodes_evaluated: int = 0
    total_pruning_count: int = 0
    total_pruning_efficiency: float = 0.0

    def record_move(self, thinking_time_ms: float, stats: SearchStats, used_fallback: bool) -> None:
        self.moves_played += 1
        self.total_think_time_ms += thinking_time_ms
        self.total_nodes_evaluated += stats.nodes_evaluated
        self.total_pruning_count += stats.pruning_count
        self.total_pruning_efficiency += stats.pruning_efficiency
        if used_fallback:
            self.fallbacks += 1

    def record_game(self, result: str) -> None:
        """``result`` is from the engine's side: "win", "loss" or "draw"."""
        if result not in GAME_RESULTS:
            raise ValueError(f"Unknown game result {result!r}; expected one of {GAME_RESULTS}")
        self.games_played += 1
        if result == "win":
            self.wins += 1
        elif result == "loss":
            self.losses += 1
        else:
            self.draws += 1

    def _per_move(self, total: float) -> float:
        return total / self.moves_played if self.moves_played else 0.0

    @property
    def average_think_time_ms(self) -> float:
        return self._per_move(self.total_think_time_ms)

    @property
    def average_nodes_evaluated(self) -> float:
        return self._per_move(self.total_nodes_evaluated)

    @property
    def average_pruning_count(self) -> float:
        return self._per_move(self.total_pruning_count)

    @property
    def average_pruning_efficiency(self) -> float:
        return self._per_move(self.total_pruning_efficiency)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.update(
            average_think_time_ms=self.average_think_time_ms,
            average_nodes_evaluated=self.average_nodes_evaluated,
            average_pruning_count=self.average_pruning_count,
            average_pruning_efficiency=self.average_pruning_efficiency,
        )
        return data
