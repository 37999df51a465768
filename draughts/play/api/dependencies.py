"""FastAPI dependency injection setup."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from draughts.play.agents import Agent, create_agent
from draughts.play.config import GameConfig, SelectionConfig
from draughts.play.game_manager import GameManager

logger = logging.getLogger("draughts.play.api")


def init_app(app, config: dict,
             agent_factory: Optional[Callable[[Optional[str]], Agent]] = None) -> None:
    """Initialize FastAPI app with shared resources from config.

    Builds the SelectionConfig, the agent factory, and a GameManager, and
    stores them on app.state.

    Args:
        app: FastAPI application instance.
        config: Configuration dict with keys:
            - selection.provider, selection.base_url, selection.api_key_env
            - selection.allowed_models, selection.default_model
            - selection.temperature, selection.max_tokens, selection.timeout
            - games.max_moves, games.max_concurrent, games.first_side
        agent_factory: Override for building agents (tests use scripted agents).
    """
    selection = SelectionConfig.from_dict(config.get("selection"))
    games = GameConfig.from_dict(config.get("games"))

    if agent_factory is None:
        def agent_factory(model: Optional[str]) -> Agent:
            return create_agent(model, selection)

    logger.info(f"Move selection: provider={selection.provider}, "
                f"models={', '.join(selection.allowed_models)}")

    app.state.selection_config = selection
    app.state.agent_factory = agent_factory
    app.state.game_manager = GameManager(games, agent_factory)
    logger.info("Draughts API initialized")


def get_game_manager(app) -> GameManager:
    """Get GameManager from app state."""
    return app.state.game_manager
