"""Transposition table for the iterative-deepening search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, Optional


class Bound(str, Enum):
    EXACT = "exact"
    LOWER = "lowerbound"
    UPPER = "upperbound"


@dataclass
class TTEntry:
    score: float
    depth: int
    bound: Bound
    best_move: int
    generation: int


class TranspositionTable:
    """
    Maps a position key to the result of searching it.

    Keys are full board encodings (plus side to move), so a lookup can never
    return another position's score. Entries survive across searches of the
    same game; once the table grows past ``max_entries`` the ones not touched
    for ``max_age`` searches are evicted.
    """

    def __init__(self, max_entries: int = 250_000, max_age: int = 4) -> None:
        self.max_entries = max_entries
        self.max_age = max_age
        self.table: Dict[Hashable, TTEntry] = {}
        self.generation = 0
        self.hits = 0
        self.probes = 0

    def __len__(self) -> int:
        return len(self.table)

    def get(self, key: Hashable) -> Optional[TTEntry]:
        self.probes += 1
        entry = self.table.get(key)
        if entry is not None:
            self.hits += 1
        return entry

    def store(self, key: Hashable, score: float, depth: int, bound: Bound, best_move: int) -> None:
        self.table[key] = TTEntry(
            score=score,
            depth=depth,
            bound=bound,
            best_move=best_move,
            generation=self.generation,
        )

    def new_search(self) -> int:
        """Advance the generation and evict stale entries if the table is over capacity."""
        self.generation += 1
        self.hits = 0
        self.probes = 0
        if len(self.table) > self.max_entries:
            oldest_kept = self.generation - self.max_age
            self.table = {
                key: entry for key, entry in self.table.items() if entry.generation >= oldest_kept
            }
            if len(self.table) > self.max_entries:
                self.table.clear()
        return len(self.table)

    def reset(self) -> None:
        self.table.clear()
        self.generation = 0
        self.hits = 0
        self.probes = 0
