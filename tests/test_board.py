"""Tests for the Connect4 board model."""

import numpy as np
import pytest

from c4engine.errors import InvalidColumn
from c4engine.games.connect4 import (
    Board,
    Disc,
    Position,
    apply_move,
    board_from_string,
    board_to_string,
    center_control,
    count_consecutive,
    find_winner,
    is_full,
    is_legal_move,
    is_terminal,
    legal_columns,
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
from helpers import board_from_moves, board_from_rows, full_board

EMPTY_ROW = "_______"


def test_empty_board():
    """Test empty board dimensions and legal columns."""
    board = Board.empty()
    assert board.rows == 6
    assert board.columns == 7
    assert legal_columns(board) == list(range(7))
    assert not is_full(board)
    assert not is_terminal(board)


def test_apply_move_drops_to_lowest_row():
    """Test that discs obey gravity."""
    board = apply_move(Board.empty(), 3, Disc.RED)
    assert board.grid[5, 3] == Disc.RED
    assert board.last_move == Position(5, 3)

    board = apply_move(board, 3, Disc.YELLOW)
    assert board.grid[4, 3] == Disc.YELLOW
    assert board.last_move == Position(4, 3)


def test_apply_move_returns_new_board():
    """Test that the source board is never modified."""
    board = Board.empty()
    after = apply_move(board, 0, Disc.RED)
    assert np.all(board.grid == 0)
    assert after is not board
    with pytest.raises(ValueError):
        after.grid[0, 0] = Disc.YELLOW


def test_apply_move_invalid_columns():
    """Test out-of-range and full columns."""
    board = Board.empty()
    with pytest.raises(InvalidColumn):
        apply_move(board, 7, Disc.RED)
    with pytest.raises(ValueError):
        apply_move(board, -1, Disc.RED)

    for i in range(6):
        board = apply_move(board, 0, Disc.RED if i % 2 == 0 else Disc.YELLOW)
    assert not is_legal_move(board, 0)
    assert 0 not in legal_columns(board)
    with pytest.raises(InvalidColumn):
        apply_move(board, 0, Disc.RED)


def test_apply_move_rejects_empty_disc():
    with pytest.raises(ValueError):
        apply_move(Board.empty(), 0, Disc.EMPTY)


def test_remove_top_disc():
    """Test removing the highest disc of a column."""
    board = board_from_moves([3, 3])
    removed = remove_top_disc(board, 3)
    assert removed.grid[4, 3] == Disc.EMPTY
    assert removed.grid[5, 3] == Disc.RED
    assert board.grid[4, 3] == Disc.YELLOW

    assert remove_top_disc(board, 0) == board


def test_count_consecutive_and_would_win():
    """Test run counting and hypothetical wins."""
    board = board_from_rows(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "YYY____", "RRR____")
    assert count_consecutive(board, Position(5, 1), (0, 1), Disc.RED) == 3
    assert count_consecutive(board, Position(5, 3), (0, 1), Disc.RED) == 0
    assert count_consecutive(board, Position(5, 0), (1, 0), Disc.RED) == 1

    assert would_win(board, Position(5, 3), Disc.RED)
    assert would_win(board, Position(4, 3), Disc.YELLOW)
    assert not would_win(board, Position(4, 3), Disc.RED)
    assert not would_win(board, Position(5, 0), Disc.RED)  # occupied


def test_winning_columns_only_playable_cells():
    """Yellow's (4, 3) is not reachable until column 3 has a disc."""
    board = board_from_rows(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "YYY____", "RRR____")
    assert winning_columns(board, Disc.RED) == [3]
    assert winning_columns(board, Disc.YELLOW) == []


def test_winning_opportunities_include_unplayable_cells():
    """Yellow's (4, 3) completes four even though it cannot be played yet."""
    board = board_from_rows(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "YYY____", "RRR____")
    assert winning_opportunities(board, Disc.RED) == [Position(5, 3)]
    assert winning_opportunities(board, Disc.YELLOW) == [Position(4, 3)]
    assert winning_opportunities(Board.empty(), Disc.RED) == []


def test_full_board():
    """Test full board detection."""
    board = full_board()
    assert is_full(board)
    assert legal_columns(board) == []
    assert is_terminal(board)
    assert find_winner(board) is None


def test_find_winner_vertical():
    """Test vertical win detection and the winning line."""
    board = board_from_moves([0, 1, 0, 1, 0, 1, 0])
    found = find_winner(board)
    assert found is not None
    winner, line = found
    assert winner == Disc.RED
    assert line == [Position(2, 0), Position(3, 0), Position(4, 0), Position(5, 0)]
    assert is_terminal(board)


def test_find_winner_diagonal():
    """Test diagonal win detection."""
    board = board_from_rows(
        EMPTY_ROW,
        EMPTY_ROW,
        "___R___",
        "__RY___",
        "_RYY___",
        "RYYR___",
    )
    winner, line = find_winner(board)
    assert winner == Disc.RED
    assert Position(5, 0) in line and Position(2, 3) in line


def test_validate_board():
    """Test gravity and turn-count validation."""
    assert validate_board(board_from_moves([3, 3, 2, 4]))
    floating = board_from_rows(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "R______", "_Y_____")
    assert not validate_board(floating)
    unbalanced = board_from_rows(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "RR_____")
    assert not validate_board(unbalanced)


def test_side_to_move():
    assert side_to_move(Board.empty()) == Disc.RED
    assert side_to_move(board_from_moves([3])) == Disc.YELLOW
    assert side_to_move(board_from_moves([3, 4])) == Disc.RED


def test_string_codec():
    """Test board string encoding."""
    board = board_from_moves([3, 2])
    text = board_to_string(board)
    assert len(text) == 42
    assert text.endswith("__YR___")
    assert board_from_string(text) == board

    with pytest.raises(ValueError):
        board_from_string("R" * 41)
    with pytest.raises(ValueError):
        board_from_string("X" * 42)


def test_board_equality_and_hash():
    """Boards compare by contents, not by move history."""
    a = board_from_moves([3, 2, 4])
    b = apply_move(apply_move(apply_move(Board.empty(), 4, Disc.RED), 2, Disc.YELLOW), 3, Disc.RED)
    assert a == b
    assert hash(a) == hash(b)
    assert a.key() == b.key()


def test_board_rejects_invalid_cells():
    with pytest.raises(ValueError):
        Board(np.full((6, 7), 2))
    with pytest.raises(ValueError):
        Board(np.zeros(7))


def test_board_from_rows_accepts_names():
    board = Board.from_rows([[None, "red"], ["yellow", 1]])
    assert board.grid.tolist() == [[0, 1], [-1, 1]]


def test_feature_counts():
    """Test threat, center and symmetry counters."""
    board = board_from_rows(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "RR____R")
    assert Position(5, 2) in threat_positions(board, Disc.RED)
    assert center_control(board, Disc.RED) == 1 + 2 + 1
    assert mirrored_pairs(board, Disc.RED) == 1
    assert mirrored_pairs(board, Disc.YELLOW) == 0


def test_render_board():
    text = render_board(board_from_moves([3]))
    lines = text.splitlines()
    assert lines[5] == ". . . X . . ."
    assert lines[6] == "0 1 2 3 4 5 6"
