"""Pydantic models for API request/response schemas.

Boards and sides are typed loosely here and checked by the engine's own
validator, so malformed input gets the engine's 400 error instead of a 422.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class GameMode(str, Enum):
    HUMAN_AI = "human-ai"
    AI_AI = "ai-ai"


class CoordModel(BaseModel):
    r: int = Field(..., ge=0, le=9)
    c: int = Field(..., ge=0, le=9)


class MoveModel(BaseModel):
    """A move as ``{from, path, captures, promotes}``."""
    model_config = ConfigDict(populate_by_name=True)

    from_: CoordModel = Field(..., alias="from")
    path: list[CoordModel] = Field(..., min_length=1)
    captures: list[CoordModel] = Field(default_factory=list)
    promotes: bool = False

    def to_move_dict(self) -> dict:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class LegalMovesRequest(BaseModel):
    """List legal moves for a side."""
    board: Any = Field(..., description="10x10 grid of 0, 'b', 'w', 'B', 'W'")
    side: Any = Field(..., description="'b' or 'w'")


class ApplyMoveRequest(BaseModel):
    """Apply a move to a board."""
    board: Any
    move: MoveModel


class AIMoveRequest(BaseModel):
    """Ask the configured agent to move."""
    model_config = ConfigDict(populate_by_name=True)

    board: Any
    ai_plays_as: Any = Field(..., alias="aiPlaysAs")
    model: Optional[str] = None


class StartGameRequest(BaseModel):
    """Start a managed game."""
    mode: GameMode = GameMode.HUMAN_AI
    human_color: str = "b"
    model: Optional[str] = None
    black_model: Optional[str] = None
    white_model: Optional[str] = None


class PlayMoveRequest(BaseModel):
    """Play a human move by legal-move index or square notation."""
    move_index: Optional[int] = Field(None, ge=0)
    notation: Optional[str] = Field(None, min_length=1)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class LegalMovesResponse(BaseModel):
    moves: list[MoveModel]
    notation: list[str]
    count: int
    game_over: bool


class ApplyMoveResponse(BaseModel):
    board: list[list[Any]]


class GameStateResponse(BaseModel):
    """Full game state."""
    game_state: dict
