"""Manages active human-vs-AI and AI-vs-AI draughts games."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from draughts.game.board import render_board
from draughts.game.notation import board_to_ascii, find_move, move_to_notation
from draughts.game.rules import apply_move, count_pieces, generate_all_moves
from draughts.game.state import Board, Color, Move, initial_board
from draughts.game.validation import board_to_codes, parse_side
from draughts.play.agents import Agent, build_agent
from draughts.play.config import GameConfig
from draughts.play.selection import select_move

logger = logging.getLogger("draughts.play")

MODES = ("human-ai", "ai-ai")


@dataclass
class ActiveGame:
    """State for a single active game."""
    game_id: str
    mode: str
    agents: dict[Color, Agent]
    board: Board = field(default_factory=initial_board)
    side_to_move: Color = Color.BLACK
    human_color: Optional[Color] = None
    move_history: list[str] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)
    finished: bool = False
    winner: Optional[Color] = None  # None = draw if finished
    result: Optional[str] = None  # "black", "white", "draw"
    # Held for the whole of a turn: turn check, agent call, and apply
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class GameManager:
    """Creates games, applies human moves, and asks agents for their replies.

    Args:
        config: Game limits.
        agent_factory: Builds an agent from a model name (may raise InvalidModel).
    """

    def __init__(self, config: GameConfig,
                 agent_factory: Callable[[Optional[str]], Agent]):
        self.config = config
        self.agent_factory = agent_factory
        self.games: dict[str, ActiveGame] = {}
        self._game_counter = 0
        self._lock = threading.Lock()

    def start_game(self, mode: str = "human-ai", human_color: str = "b",
                   model: Optional[str] = None,
                   black_model: Optional[str] = None,
                   white_model: Optional[str] = None) -> dict:
        """Create a new game.

        In ``human-ai`` mode the human plays ``human_color`` and ``model`` plays
        the other side. In ``ai-ai`` mode ``black_model`` and ``white_model``
        play each other one ``step`` at a time.

        Raises:
            InvalidSide: If ``human_color`` is not 'b' or 'w'.
            InvalidModel: If a model is not allowed.
        """
        if mode not in MODES:
            return {"error": f"Unknown mode {mode!r}. Use one of {', '.join(MODES)}."}

        active_count = sum(1 for g in self.games.values() if not g.finished)
        if active_count >= self.config.max_concurrent:
            return {"error": f"Maximum {self.config.max_concurrent} concurrent games. "
                    "Finish a game before starting a new one."}

        if mode == "human-ai":
            human = parse_side(human_color)
            agents = {human.opponent: build_agent(self.agent_factory, model)}
        else:
            human = None
            agents = {
                Color.BLACK: build_agent(self.agent_factory, black_model or model),
                Color.WHITE: build_agent(self.agent_factory, white_model or model),
            }

        with self._lock:
            self._game_counter += 1
            game_id = f"game_{self._game_counter:03d}"
            game = ActiveGame(
                game_id=game_id,
                mode=mode,
                agents=agents,
                side_to_move=parse_side(self.config.first_side),
                human_color=human,
            )
            self.games[game_id] = game

        logger.info(f"Started {mode} game {game_id}")

        # Agent opens if the human is not the first side
        with game.lock:
            if mode == "human-ai" and game.side_to_move != human:
                self._agent_turn(game)
            return self._state_response(game)

    def get_state(self, game_id: str) -> dict:
        game = self.games.get(game_id)
        if game is None:
            return _not_found(game_id)
        with game.lock:
            return self._state_response(game)

    def play_move(self, game_id: str, move_index: Optional[int] = None,
                  notation: Optional[str] = None) -> dict:
        """Apply the human's move and the agent's reply.

        The move is given either as an index into the legal-move list or in
        square notation. Human input is not clamped: an illegal choice is an error.
        """
        game = self.games.get(game_id)
        if game is None:
            return _not_found(game_id)

        with game.lock:
            if game.finished:
                return _already_finished(game)
            if game.mode != "human-ai" or game.side_to_move != game.human_color:
                return {"error": "It's not your turn."}

            legal = generate_all_moves(game.board, game.side_to_move)
            if move_index is not None:
                if not 0 <= move_index < len(legal):
                    return {"error": f"Move index {move_index} out of range 0-{len(legal) - 1}."}
                move = legal[move_index]
            elif notation is not None:
                try:
                    move = find_move(legal, notation)
                except ValueError as e:
                    return {"error": str(e),
                            "legal_moves": [move_to_notation(m) for m in legal]}
            else:
                return {"error": "Provide move_index or notation."}

            response: dict = {"your_move": self._advance(game, move)}

            if not game.finished:
                response["opponent_move"] = self._agent_turn(game)

            return {**response, **self._state_response(game)}

    def step(self, game_id: str) -> dict:
        """Let the agent on move play one half-move."""
        game = self.games.get(game_id)
        if game is None:
            return _not_found(game_id)

        with game.lock:
            if game.finished:
                return _already_finished(game)
            if game.side_to_move not in game.agents:
                return {"error": "It's the human player's turn."}

            played = self._agent_turn(game)
            return {"move": played, **self._state_response(game)}

    def play_out(self, game_id: str, max_moves: Optional[int] = None) -> dict:
        """Step an AI-vs-AI game until it ends or ``max_moves`` half-moves are played."""
        game = self.games.get(game_id)
        if game is None:
            return _not_found(game_id)
        if game.mode != "ai-ai":
            return {"error": "Only ai-ai games can be played out."}

        with game.lock:
            played = 0
            while not game.finished and (max_moves is None or played < max_moves):
                self._agent_turn(game)
                played += 1
            return self._state_response(game)

    def delete_game(self, game_id: str) -> bool:
        """Remove a game. Returns True if found and deleted."""
        with self._lock:
            if game_id in self.games:
                del self.games[game_id]
                logger.info(f"Deleted game {game_id}")
                return True
        return False

    def _agent_turn(self, game: ActiveGame) -> str:
        agent = game.agents[game.side_to_move]
        legal = generate_all_moves(game.board, game.side_to_move)
        move = select_move(agent, game.board, game.side_to_move, legal)
        return self._advance(game, move)

    def _advance(self, game: ActiveGame, move: Move) -> str:
        """Apply a legal move, switch sides, and detect the end of the game."""
        mover = game.side_to_move
        notation = move_to_notation(move)
        game.board = apply_move(game.board, move)
        game.move_history.append(notation)
        game.side_to_move = mover.opponent

        if not generate_all_moves(game.board, game.side_to_move):
            self._finalize_game(game, mover)
        elif len(game.move_history) >= self.config.max_moves:
            self._finalize_game(game, None)
        return notation

    def _finalize_game(self, game: ActiveGame, winner: Optional[Color]) -> None:
        game.finished = True
        game.winner = winner
        if winner is None:
            game.result = "draw"
        else:
            game.result = "black" if winner == Color.BLACK else "white"
        logger.info(f"Game {game.game_id} finished after {len(game.move_history)} "
                    f"half-moves: {game.result}")

    def _state_response(self, game: ActiveGame) -> dict:
        """Build a state response dict."""
        resp: dict = {
            "game_id": game.game_id,
            "mode": game.mode,
            "board": board_to_codes(game.board),
            "board_text": render_board(game.board, game.side_to_move.value),
            "board_ascii": board_to_ascii(game.board),
            "side_to_move": game.side_to_move.value,
            "human_color": game.human_color.value if game.human_color else None,
            "move_history": _format_move_history(game.move_history),
            "num_moves": len(game.move_history),
            "pieces": count_pieces(game.board),
            "finished": game.finished,
        }

        if game.finished:
            resp["result"] = game.result
            resp["winner"] = game.winner.value if game.winner else None
        else:
            legal = generate_all_moves(game.board, game.side_to_move)
            resp["legal_moves"] = [
                {"idx": i, "notation": move_to_notation(m), "move": m.to_dict()}
                for i, m in enumerate(legal)
            ]
            resp["num_legal_moves"] = len(legal)
            if game.side_to_move in game.agents:
                resp["waiting_for"] = "agent"

        return resp


def _format_move_history(moves: list[str]) -> str:
    """Format move list as numbered pairs (first side's move first)."""
    if not moves:
        return "(no moves yet)"
    lines = []
    for i in range(0, len(moves), 2):
        num = i // 2 + 1
        if i + 1 < len(moves):
            lines.append(f"{num}. {moves[i]} {moves[i + 1]}")
        else:
            lines.append(f"{num}. {moves[i]}")
    return "\n".join(lines)


def _not_found(game_id: str) -> dict:
    return {"error": f"Game '{game_id}' not found.", "code": "not_found"}


def _already_finished(game: ActiveGame) -> dict:
    return {"error": f"Game '{game.game_id}' is already finished.",
            "result": game.result}
