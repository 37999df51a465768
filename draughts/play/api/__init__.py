"""Draughts REST API: stateless engine endpoints and managed games."""

from draughts.play.api.dependencies import init_app, get_game_manager

__all__ = [
    "init_app",
    "get_game_manager",
]
