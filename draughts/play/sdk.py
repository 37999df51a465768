"""Draughts SDK: HTTP client for the draughts API.

Usage:
    client = DraughtsClient("http://localhost:8000")
    moves = client.legal_moves(board, "b")
    board = client.apply_move(board, moves[0])

Clients render and highlight from the returned legal-move list; they never
generate moves themselves.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

from draughts.game.state import Move


class DraughtsClient:
    """HTTP client for the draughts API.

    Wraps all REST endpoints with typed Python methods. Boards are passed in
    wire format (10x10 grid of 0, 'b', 'w', 'B', 'W').
    """

    def __init__(self, base_url: str = "http://localhost:8000",
                 timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _check(self, resp: requests.Response) -> dict:
        """Check response status and return JSON."""
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            raise DraughtsAPIError(resp.status_code, detail)
        return resp.json()

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def get_rules(self) -> str:
        """Get the rules text."""
        resp = self._session.get(self._url("/rules"), timeout=self.timeout)
        return self._check(resp)["rules"]

    def legal_moves(self, board: list[list[Any]], side: str) -> list[Move]:
        """List legal moves for ``side``."""
        resp = self._session.post(
            self._url("/moves"),
            json={"board": board, "side": side},
            timeout=self.timeout,
        )
        return [Move.from_dict(m) for m in self._check(resp)["moves"]]

    def apply_move(self, board: list[list[Any]], move: Move) -> list[list[Any]]:
        """Apply ``move`` and return the new wire board."""
        resp = self._session.post(
            self._url("/apply"),
            json={"board": board, "move": move.to_dict()},
            timeout=self.timeout,
        )
        return self._check(resp)["board"]

    def ai_move(self, board: list[list[Any]], side: str,
                model: Optional[str] = None) -> Move:
        """Ask the server's agent to choose a move for ``side``."""
        payload: dict[str, Any] = {"board": board, "aiPlaysAs": side}
        if model is not None:
            payload["model"] = model
        resp = self._session.post(self._url("/ai-move"), json=payload,
                                  timeout=self.timeout)
        return Move.from_dict(self._check(resp))

    # ------------------------------------------------------------------
    # Managed games
    # ------------------------------------------------------------------

    def start_game(self, mode: str = "human-ai", human_color: str = "b",
                   model: Optional[str] = None,
                   black_model: Optional[str] = None,
                   white_model: Optional[str] = None) -> dict:
        """Start a game and return its state."""
        payload: dict[str, Any] = {"mode": mode, "human_color": human_color}
        for key, value in (("model", model), ("black_model", black_model),
                           ("white_model", white_model)):
            if value is not None:
                payload[key] = value
        resp = self._session.post(self._url("/games"), json=payload,
                                  timeout=self.timeout)
        return self._check(resp)["game_state"]

    def get_game(self, game_id: str) -> dict:
        """Get game state."""
        resp = self._session.get(self._url(f"/games/{game_id}"), timeout=self.timeout)
        return self._check(resp)["game_state"]

    def play_move(self, game_id: str, move_index: Optional[int] = None,
                  notation: Optional[str] = None) -> dict:
        """Play a human move by index or notation; returns state after the reply."""
        payload: dict[str, Any] = {}
        if move_index is not None:
            payload["move_index"] = move_index
        if notation is not None:
            payload["notation"] = notation
        resp = self._session.post(self._url(f"/games/{game_id}/move"),
                                  json=payload, timeout=self.timeout)
        return self._check(resp)["game_state"]

    def step(self, game_id: str) -> dict:
        """Let the agent on move play one half-move."""
        resp = self._session.post(self._url(f"/games/{game_id}/step"),
                                  timeout=self.timeout)
        return self._check(resp)["game_state"]

    def delete_game(self, game_id: str) -> bool:
        """Delete a game."""
        resp = self._session.delete(self._url(f"/games/{game_id}"),
                                    timeout=self.timeout)
        self._check(resp)
        return True


class DraughtsAPIError(Exception):
    """Error from the draughts API."""

    def __init__(self, status_code: int, detail):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")
