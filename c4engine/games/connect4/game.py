"""Connect4 game rules (immutable state), used to drive the engine in play."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from c4engine.games.turn_based_game import Action, TurnBasedGame
from .board import apply_move, find_winner, is_full, legal_columns, side_to_move
from .state import FIRST_PLAYER, Board, Disc, Move, Position
from .utils import CONNECT4_COLS, CONNECT4_ROWS, CONNECT_LENGTH, check_n_in_row


@dataclass(frozen=True)
class GameState:
    board: Board
    to_move: Disc
    moves: List[Move] = field(default_factory=list)
    winner: Optional[int] = None
    done: bool = False
    winning_line: Optional[List[Position]] = None


class Connect4Game(TurnBasedGame[GameState]):
    """
    Game-state controller: applies moves, records history and detects the end
    of the game. The engine itself never persists anything.
    """

    def __init__(
        self,
        rows: int = CONNECT4_ROWS,
        cols: int = CONNECT4_COLS,
        first_player: Disc = FIRST_PLAYER,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.first_player = first_player

    def initial_state(self) -> GameState:
        return GameState(board=Board.empty(self.rows, self.cols), to_move=self.first_player)

    def from_board(self, board: Board) -> GameState:
        """Resume from an arbitrary position; the side to move follows the disc counts."""
        state = GameState(board=board, to_move=side_to_move(board))
        found = find_winner(board)
        if found is not None:
            winner, line = found
            return replace(state, winner=int(winner), done=True, winning_line=line)
        if is_full(board):
            return replace(state, winner=0, done=True)
        return state

    def legal_actions(self, state: GameState) -> Sequence[Action]:
        if state.done:
            return []
        return legal_columns(state.board)

    def apply_action(self, state: GameState, action: Action) -> GameState:
        if state.done:
            raise ValueError("Cannot apply action in terminal state")

        color = state.to_move
        board = apply_move(state.board, action, color)
        row, col = board.last_move
        moves = state.moves + [Move(column=col, row=row, color=color)]

        winner: Optional[int] = None
        done = False
        line: Optional[List[Position]] = None

        if check_n_in_row(board.cells(), row, col, color, n=CONNECT_LENGTH):
            winner = int(color)
            done = True
            found = find_winner(board)
            line = found[1] if found is not None else None
        elif is_full(board):
            winner = 0
            done = True

        return GameState(
            board=board,
            to_move=color.opponent,
            moves=moves,
            winner=winner,
            done=done,
            winning_line=line,
        )

    def current_player(self, state: GameState) -> int:
        return int(state.to_move)

    def is_terminal(self, state: GameState) -> bool:
        return state.done

    def winner(self, state: GameState) -> Optional[int]:
        return state.winner
