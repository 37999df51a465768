"""Playing draughts: move-selection boundary, agents, game management, API.

The rules engine never picks a move; everything here decides which of the
engine's legal moves gets played.
"""

from draughts.play.selection import build_choices, extract_move_index, resolve_move_index, select_move
from draughts.play.agents import Agent, FirstMoveAgent, RandomAgent, LLMAgent, create_agent
from draughts.play.config import SelectionConfig, GameConfig, ServerConfig, InvalidModel, load_config
from draughts.play.game_manager import GameManager, ActiveGame

__all__ = [
    "build_choices",
    "extract_move_index",
    "resolve_move_index",
    "select_move",
    "Agent",
    "FirstMoveAgent",
    "RandomAgent",
    "LLMAgent",
    "create_agent",
    "SelectionConfig",
    "GameConfig",
    "ServerConfig",
    "InvalidModel",
    "load_config",
    "GameManager",
    "ActiveGame",
]
