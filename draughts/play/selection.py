"""Boundary between the rules engine and whoever picks the move.

The engine never chooses a move. An agent (human input, an LLM, a random
player) receives the indexed legal-move list and answers with an index.
Anything unusable in that answer falls back to index 0, so a game can
always continue.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from draughts.game.state import Board, Color, Move

logger = logging.getLogger("draughts.play")


def _rc(rc: tuple[int, int]) -> dict:
    return {"r": rc[0], "c": rc[1]}


def build_choices(moves: list[Move]) -> list[dict]:
    """Describe legal moves as ``{idx, from, to, jumps, promotes, path}`` records."""
    return [
        {
            "idx": idx,
            "from": _rc(m.from_rc),
            "to": _rc(m.to_rc),
            "jumps": m.num_captures,
            "promotes": m.promotes,
            "path": [_rc(rc) for rc in m.path],
        }
        for idx, m in enumerate(moves)
    ]


_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*?\}")
_MOVE_INDEX_RE = re.compile(r'"moveIndex"\s*:\s*(\d+)')


def _as_integer(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def extract_move_index(text: str) -> Optional[int]:
    """Pull ``moveIndex`` out of an agent's free-text reply.

    Tries the first JSON object in the text, then a bare ``"moveIndex": n``.
    Returns None if neither yields an integer.
    """
    if not text:
        return None

    m = _JSON_OBJECT_RE.search(text)
    if m:
        try:
            obj = json.loads(m.group(0))
        except json.JSONDecodeError:
            obj = None
        if isinstance(obj, dict):
            idx = _as_integer(obj.get("moveIndex"))
            if idx is not None:
                return idx

    m = _MOVE_INDEX_RE.search(text)
    if m:
        return int(m.group(1))
    return None


def resolve_move_index(index: Any, num_choices: int) -> int:
    """Return ``index`` if it is a valid position in the choice list, else 0."""
    idx = _as_integer(index)
    if idx is None or not 0 <= idx < num_choices:
        return 0
    return idx


def select_move(agent, board: Board, side: Color, legal_moves: list[Move]) -> Move:
    """Ask ``agent`` for a move and return it, falling back to the first legal move.

    Args:
        agent: Object with ``choose_move(board, side, legal_moves)``.
        board: Current board.
        side: Side to move.
        legal_moves: Non-empty output of ``generate_all_moves``.

    Raises:
        ValueError: If ``legal_moves`` is empty (the side has already lost).
    """
    if not legal_moves:
        raise ValueError("No legal moves to select from")

    try:
        raw = agent.choose_move(board, side, legal_moves)
    except Exception as e:
        logger.warning(f"Move selection failed for {side.value}: {e}")
        raw = None

    idx = resolve_move_index(raw, len(legal_moves))
    if idx != raw:
        logger.warning(f"Invalid move index {raw!r} for {len(legal_moves)} choices; using 0")
    return legal_moves[idx]
