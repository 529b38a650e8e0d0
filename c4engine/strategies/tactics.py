"""One-move tactical shortcuts shared by the searching strategies."""

from __future__ import annotations

from typing import Optional

from c4engine.games.connect4 import Board, Disc, legal_columns, winning_columns
from c4engine.search.evaluation import is_forced_win


def find_immediate_win(board: Board, player: Disc) -> Optional[int]:
    """Leftmost column where ``player`` completes four right now."""
    wins = winning_columns(board, player)
    return wins[0] if wins else None


def find_immediate_block(board: Board, opponent: Disc) -> Optional[int]:
    """Leftmost column where ``opponent`` would complete four next turn."""
    return find_immediate_win(board, opponent)


def find_forced_win(board: Board, player: Disc, opponent: Disc, depth: int = 1) -> Optional[int]:
    """Leftmost column that wins by force within ``depth`` opponent replies."""
    for column in legal_columns(board):
        if is_forced_win(board, column, player, opponent, depth):
            return column
    return None
