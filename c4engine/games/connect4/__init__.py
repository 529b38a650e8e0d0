"""Connect4 board model and game rules."""

from .state import FIRST_PLAYER, Board, Disc, Move, Position
from .utils import (
    CONNECT4_COLS,
    CONNECT4_ROWS,
    CONNECT_LENGTH,
    DIRECTIONS,
    center_weights,
    check_n_in_row,
    count_line,
)
from .board import (
    apply_move,
    board_from_string,
    board_to_string,
    center_control,
    count_consecutive,
    count_discs,
    empty_cells,
    find_winner,
    is_full,
    is_legal_move,
    is_terminal,
    legal_columns,
    lowest_empty_row,
    mirrored_pairs,
    remove_top_disc,
    render_board,
    side_to_move,
    threat_positions,
    validate_board,
    winning_columns,
    winning_opportunities,
    would_win,
)
from .game import Connect4Game, GameState

__all__ = [
    "CONNECT4_COLS",
    "CONNECT4_ROWS",
    "CONNECT_LENGTH",
    "DIRECTIONS",
    "FIRST_PLAYER",
    "Board",
    "Connect4Game",
    "Disc",
    "GameState",
    "Move",
    "Position",
    "apply_move",
    "board_from_string",
    "board_to_string",
    "center_control",
    "center_weights",
    "check_n_in_row",
    "count_consecutive",
    "count_discs",
    "count_line",
    "empty_cells",
    "find_winner",
    "is_full",
    "is_legal_move",
    "is_terminal",
    "legal_columns",
    "lowest_empty_row",
    "mirrored_pairs",
    "remove_top_disc",
    "render_board",
    "side_to_move",
    "threat_positions",
    "validate_board",
    "winning_columns",
    "winning_opportunities",
    "would_win",
]
