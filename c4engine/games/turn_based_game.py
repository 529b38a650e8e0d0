from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, Sequence, TypeVar

S = TypeVar("S")  # state type
Action = int  # actions are column indices


class TurnBasedGame(ABC, Generic[S]):
    """
    Common interface for a deterministic two-player perfect-information game.
    Pure rules only: every transition returns a new state.
    """

    @abstractmethod
    def legal_actions(self, state: S) -> Sequence[Action]:
        """All legal actions in the given state."""

    @abstractmethod
    def apply_action(self, state: S, action: Action) -> S:
        """Return the new state after the move."""

    @abstractmethod
    def current_player(self, state: S) -> int:
        """
        Token of the player to move: 1 for red, -1 for yellow.
        """

    @abstractmethod
    def is_terminal(self, state: S) -> bool:
        """Is the state final (win or draw)?"""

    @abstractmethod
    def winner(self, state: S) -> Optional[int]:
        """
        Who won:

        * 1 : red won
        * -1 : yellow won
        * 0 : draw
        * None : not finished yet
        """
