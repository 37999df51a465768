"""Move-selection agents.

Every agent answers with an index into the legal-move list. The answer is
untrusted: ``selection.select_move`` clamps it before use.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from draughts.game.state import Board, Color, Move
from draughts.play.config import InvalidModel, SelectionConfig
from draughts.play.llm_interface import LLMClient
from draughts.play.prompt import build_system_prompt, build_move_prompt
from draughts.play.selection import build_choices, extract_move_index

logger = logging.getLogger("draughts.play")


class Agent:
    """Base agent interface."""

    name = "agent"

    def choose_move(self, board: Board, side: Color, legal_moves: list[Move]):
        raise NotImplementedError


class FirstMoveAgent(Agent):
    """Always plays the first legal move."""

    name = "first"

    def choose_move(self, board: Board, side: Color, legal_moves: list[Move]) -> int:
        return 0


class RandomAgent(Agent):
    """Plays random legal moves."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def choose_move(self, board: Board, side: Color, legal_moves: list[Move]) -> int:
        if not legal_moves:
            raise ValueError("No legal moves")
        return self.rng.randrange(len(legal_moves))


class LLMAgent(Agent):
    """Asks an LLM to pick a move index.

    API failures are logged and answered with None; the selection boundary
    then falls back to the first legal move.
    """

    def __init__(self, client: LLMClient, include_rules: bool = False):
        self.client = client
        self.name = client.model
        self.system_prompt = build_system_prompt(include_rules)
        self.last_response: Optional[str] = None

    def choose_move(self, board: Board, side: Color,
                    legal_moves: list[Move]) -> Optional[int]:
        prompt = build_move_prompt(board, side, build_choices(legal_moves))
        try:
            text = self.client.complete(self.system_prompt, prompt)
        except Exception as e:
            logger.error(f"LLM move request failed ({self.client.model}): {e}")
            text = ""
        self.last_response = text
        idx = extract_move_index(text)
        logger.debug(f"{self.client.model} answered {text!r} -> {idx}")
        return idx


def create_agent(model: Optional[str], config: SelectionConfig) -> Agent:
    """Create the agent for ``model`` as configured.

    Raises:
        InvalidModel: If ``model`` is not in ``config.allowed_models``.
    """
    model = config.check_model(model)

    if config.provider == "first":
        return FirstMoveAgent()
    if config.provider == "random":
        return RandomAgent()

    client = LLMClient(
        provider=config.provider,
        base_url=config.base_url,
        api_key_env=config.api_key_env,
        model=model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout=config.timeout,
    )
    return LLMAgent(client, include_rules=config.include_rules)


def build_agent(agent_factory: Callable[[Optional[str]], Agent],
                model: Optional[str]) -> Agent:
    """Build an agent, falling back to FirstMoveAgent if construction fails.

    A missing provider SDK or a bad client setup must not stop a game.

    Raises:
        InvalidModel: If ``model`` is not allowed.
    """
    try:
        return agent_factory(model)
    except InvalidModel:
        raise
    except Exception as e:
        logger.error(f"Could not create agent for {model!r}: {e}; playing first legal moves")
        return FirstMoveAgent()
