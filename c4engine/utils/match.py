"""Utilities for playing engine-vs-engine matches."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from c4engine.engine import EngineService, MoveRequest, MoveResponse
from c4engine.games.connect4 import Connect4Game, Disc, GameState

MoveCallback = Callable[[GameState, MoveResponse], None]


def play_game(
    red_service: EngineService,
    yellow_service: EngineService,
    red_difficulty: str,
    yellow_difficulty: str,
    time_budget_ms: Optional[float] = None,
    on_move: Optional[MoveCallback] = None,
    game: Optional[Connect4Game] = None,
) -> GameState:
    """
    Play one complete game, red moving first, and return the final state.

    Both services are reset before the first move. ``on_move`` is called with
    the state after every move and the response that produced it.
    """
    game = game or Connect4Game()
    red_service.reset(red_difficulty)
    yellow_service.reset(yellow_difficulty)

    state = game.initial_state()
    while not game.is_terminal(state):
        color = state.to_move
        if color == Disc.RED:
            service, difficulty = red_service, red_difficulty
        else:
            service, difficulty = yellow_service, yellow_difficulty
        response = service.choose_move(
            MoveRequest(
                board=state.board,
                player_color=color,
                opponent_color=color.opponent,
                difficulty=difficulty,
                time_budget_ms=time_budget_ms,
            )
        )
        state = game.apply_action(state, response.move)
        if on_move is not None:
            on_move(state, response)
    return state


def play_match(
    red_service: EngineService,
    yellow_service: EngineService,
    red_difficulty: str,
    yellow_difficulty: str,
    num_games: int = 10,
    time_budget_ms: Optional[float] = None,
    on_move: Optional[MoveCallback] = None,
) -> Tuple[int, int, int]:
    """
    Play a match between two engine configurations.

    Results are recorded in each service's performance statistics from that
    service's point of view.

    Returns:
        Tuple of (red_wins, draws, yellow_wins).
    """
    red_wins = 0
    draws = 0
    yellow_wins = 0

    for _ in range(num_games):
        final = play_game(
            red_service,
            yellow_service,
            red_difficulty,
            yellow_difficulty,
            time_budget_ms=time_budget_ms,
            on_move=on_move,
        )
        if final.winner == Disc.RED:
            red_wins += 1
            red_result, yellow_result = "win", "loss"
        elif final.winner == Disc.YELLOW:
            yellow_wins += 1
            red_result, yellow_result = "loss", "win"
        else:
            draws += 1
            red_result = yellow_result = "draw"
        red_service.record_game_result(red_difficulty, red_result)
        yellow_service.record_game_result(yellow_difficulty, yellow_result)

    return red_wins, draws, yellow_wins
