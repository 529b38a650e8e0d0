"""Tests for the engine service."""

import pytest

from c4engine.config import EngineConfig
from c4engine.engine import EngineService, MoveRequest
from c4engine.engine.service import FALLBACK_CONFIDENCE, fallback_move
from c4engine.errors import NoLegalMoves
from c4engine.games.connect4 import Board, Disc, legal_columns
from c4engine.search.evaluation import DEFAULT_WEIGHTS
from c4engine.strategies import DIFFICULTIES
from helpers import board_from_moves, board_from_rows, full_board

EMPTY_ROW = "_______"
RED_CAN_WIN = board_from_rows(EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "YYY____", "RRR____")


def _fast_service() -> EngineService:
    config = EngineConfig.from_dict({"seed": 0, "easy": {"thinking_fraction": 0.0}})
    return EngineService(config)


def _request(board, difficulty, player=Disc.RED, opponent=Disc.YELLOW, **kwargs):
    return MoveRequest(
        board=board,
        player_color=player,
        opponent_color=opponent,
        difficulty=difficulty,
        **kwargs,
    )


@pytest.mark.parametrize("difficulty", DIFFICULTIES)
def test_full_board_raises(difficulty):
    service = _fast_service()
    with pytest.raises(NoLegalMoves):
        service.choose_move(_request(full_board(), difficulty))


@pytest.mark.parametrize("difficulty", DIFFICULTIES)
def test_response_fields(difficulty):
    """A normal response carries a legal move, bounded confidence and stats."""
    service = _fast_service()
    board = board_from_moves([3, 3])
    response = service.choose_move(_request(board, difficulty))
    assert response.move in legal_columns(board)
    assert 0.0 <= response.confidence <= 1.0
    assert response.thinking_time_ms >= 0.0
    assert response.explanation
    assert response.stats is not None
    assert not response.used_fallback

    data = response.to_dict()
    assert data["move"] == response.move
    assert set(data["stats"]) == {
        "nodesEvaluated",
        "pruningCount",
        "pruningEfficiency",
        "searchDepth",
    }
    assert "thinkingTimeMs" in data


@pytest.mark.parametrize("difficulty", ["medium", "hard"])
def test_winning_move_is_reported(difficulty):
    service = _fast_service()
    response = service.choose_move(_request(RED_CAN_WIN, difficulty))
    assert response.move == 3
    assert response.score >= DEFAULT_WEIGHTS.win


def test_color_names_are_accepted():
    service = _fast_service()
    response = service.choose_move(_request(board_from_moves([3]), "medium", "yellow", "red"))
    assert response.move in range(7)


def test_invalid_requests():
    service = _fast_service()
    with pytest.raises(ValueError):
        service.choose_move(_request(Board.empty(), "expert"))
    with pytest.raises(ValueError):
        service.choose_move(_request(Board.empty(), "hard", Disc.RED, Disc.RED))
    with pytest.raises(ValueError):
        service.choose_move(_request(Board.empty(), "hard", Disc.RED, Disc.EMPTY))


def test_strategy_failure_yields_fallback(monkeypatch):
    """An exception inside the strategy becomes the center-first fallback."""
    service = _fast_service()

    def boom(*args, **kwargs):
        raise RuntimeError("search exploded")

    monkeypatch.setattr(service.strategy("hard"), "choose_move", boom)
    response = service.choose_move(_request(Board.empty(), "hard"))
    assert response.used_fallback
    assert response.move == 3
    assert response.score == 0
    assert response.confidence == FALLBACK_CONFIDENCE
    assert response.stats is None
    assert service.performance_stats("hard").fallbacks == 1


def test_illegal_strategy_move_yields_fallback(monkeypatch):
    service = _fast_service()
    board = board_from_moves([3, 3, 3, 3, 3, 3])
    monkeypatch.setattr(service.strategy("medium"), "choose_move", lambda *a, **k: 3)
    response = service.choose_move(_request(board, "medium"))
    assert response.used_fallback
    assert response.move == 0


def test_fallback_move():
    assert fallback_move([0, 1, 2, 3], 7) == 3
    assert fallback_move([1, 5], 7) == 1


def test_performance_stats():
    service = _fast_service()
    for _ in range(2):
        service.choose_move(_request(board_from_moves([3, 3]), "medium"))
    service.record_game_result("medium", "win")
    service.record_game_result("medium", "draw")

    stats = service.performance_stats("medium")
    assert stats.moves_played == 2
    assert stats.games_played == 2
    assert stats.wins == 1 and stats.draws == 1 and stats.losses == 0
    assert stats.average_nodes_evaluated > 0
    assert stats.to_dict()["average_think_time_ms"] >= 0.0

    # returned stats are a snapshot
    stats.wins = 99
    assert service.performance_stats("medium").wins == 1
    assert service.all_performance_stats()["easy"].moves_played == 0

    with pytest.raises(ValueError):
        service.record_game_result("medium", "forfeit")


def test_difficulty_info_and_configure():
    service = _fast_service()
    info = service.difficulty_info("hard")
    assert info["level"] == "hard"
    assert "Transposition table" in info["features"]

    service.configure("medium", max_depth=2, time_budget_ms=300)
    info = service.difficulty_info("medium")
    assert info["max_depth"] == 2
    assert info["time_budget_ms"] == 300


def test_config_is_applied_to_strategies():
    config = EngineConfig.from_dict({"hard": {"time_budget_ms": 250, "max_depth": 6}})
    service = EngineService(config)
    assert service.strategy("hard").config.time_budget_ms == 250
    assert service.strategy("hard").config.max_depth == 6


def test_reset_clears_hard_tables():
    service = _fast_service()
    service.choose_move(_request(board_from_moves([3, 3, 2, 4]), "hard", time_budget_ms=200))
    assert len(service.strategy("hard").tt) > 0
    service.reset("hard")
    assert len(service.strategy("hard").tt) == 0
    service.reset()
    with pytest.raises(ValueError):
        service.reset("expert")


def test_quick_analysis():
    service = _fast_service()
    analysis = service.quick_analysis(Board.empty(), Disc.RED, Disc.YELLOW, "medium")
    assert analysis.best_move == 3
    assert len(analysis.move_evaluations) == 7
    assert analysis.move_evaluations[0].column == 3

    analysis = service.quick_analysis(RED_CAN_WIN, Disc.RED, Disc.YELLOW, "hard")
    assert analysis.best_move == 3

    with pytest.raises(NoLegalMoves):
        service.quick_analysis(full_board(), Disc.RED, Disc.YELLOW, "easy")


def test_cancel_without_request():
    assert not _fast_service().cancel()


def test_services_are_independent():
    a = _fast_service()
    b = _fast_service()
    a.choose_move(_request(board_from_moves([3, 3]), "hard", time_budget_ms=150))
    assert len(a.strategy("hard").tt) > 0
    assert len(b.strategy("hard").tt) == 0
    assert b.performance_stats("hard").moves_played == 0


def test_quick_analysis_does_not_disturb_move_stats():
    service = _fast_service()
    board = board_from_moves([3, 3, 2, 4])
    service.choose_move(_request(board, "hard", time_budget_ms=150))
    hard = service.strategy("hard")
    stats = hard.get_stats().to_dict()
    history = dict(hard.history)
    service.quick_analysis(board, Disc.RED, Disc.YELLOW, "hard")
    assert hard.get_stats().to_dict() == stats
    assert dict(hard.history) == history
