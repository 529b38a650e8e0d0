"""Tests for the game controller and engine matches."""

import pytest

from c4engine.config import EngineConfig
from c4engine.engine import EngineService
from c4engine.games.connect4 import Connect4Game, Disc, Position
from c4engine.utils import play_game, play_match
from helpers import board_with_one_open_cell, full_board


def test_initial_state():
    game = Connect4Game()
    state = game.initial_state()
    assert state.to_move == Disc.RED
    assert list(game.legal_actions(state)) == list(range(7))
    assert not game.is_terminal(state)
    assert game.current_player(state) == Disc.RED


def test_apply_action_records_moves():
    game = Connect4Game()
    state = game.apply_action(game.initial_state(), 3)
    assert state.to_move == Disc.YELLOW
    assert state.moves[0].column == 3
    assert state.moves[0].row == 5
    assert state.moves[0].color == Disc.RED


def test_vertical_win():
    game = Connect4Game()
    state = game.initial_state()
    for column in (0, 1, 0, 1, 0, 1, 0):
        state = game.apply_action(state, column)
    assert game.is_terminal(state)
    assert game.winner(state) == Disc.RED
    assert state.winning_line == [Position(r, 0) for r in (2, 3, 4, 5)]
    assert game.legal_actions(state) == []
    with pytest.raises(ValueError):
        game.apply_action(state, 2)


def test_draw_on_last_cell():
    game = Connect4Game()
    state = game.from_board(board_with_one_open_cell(3))
    assert state.to_move == Disc.YELLOW
    assert not state.done
    state = game.apply_action(state, 3)
    assert state.done
    assert game.winner(state) == 0


def test_from_board_detects_finished_games():
    state = Connect4Game().from_board(full_board())
    assert state.done
    assert state.winner == 0


def test_play_game_reaches_terminal_state():
    config = EngineConfig.from_dict({"seed": 5, "easy": {"thinking_fraction": 0.0}})
    red = EngineService(config)
    yellow = EngineService(config)
    seen = []
    final = play_game(red, yellow, "easy", "easy", on_move=lambda s, r: seen.append(r.move))
    assert final.done
    assert len(seen) == len(final.moves)
    assert final.winner in (0, Disc.RED, Disc.YELLOW)


def test_play_match_records_results():
    config = EngineConfig.from_dict({"seed": 1, "easy": {"thinking_fraction": 0.0}})
    red = EngineService(config)
    yellow = EngineService(config)
    red_wins, draws, yellow_wins = play_match(red, yellow, "easy", "easy", num_games=3)
    assert red_wins + draws + yellow_wins == 3
    assert red.performance_stats("easy").games_played == 3
    assert red.performance_stats("easy").wins == red_wins
    assert yellow.performance_stats("easy").wins == yellow_wins
