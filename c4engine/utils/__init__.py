"""Utility helpers."""

from .match import play_game, play_match

__all__ = ["play_game", "play_match"]
