"""Abstract board value function for search algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from c4engine.games.connect4 import Board, Disc


class BoardValueFn(ABC):
    """
    Static board evaluator used at search leaves.

    Implementations must be antisymmetric: swapping ``player`` and
    ``opponent`` negates the score. The negamax searches rely on it.
    """

    @abstractmethod
    def evaluate(self, board: Board, player: Disc, opponent: Disc) -> int:
        """
        Higher is better for ``player``.
        """
        ...

    @property
    @abstractmethod
    def win_score(self) -> int:
        """Smallest score that denotes a won position."""
        ...
