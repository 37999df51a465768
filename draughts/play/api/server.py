"""FastAPI server exposing the draughts engine and managed games."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request

from draughts.game.notation import move_to_notation
from draughts.game.rules import apply_move, generate_all_moves
from draughts.game.state import Move
from draughts.game.validation import InvalidBoard, InvalidSide, board_to_codes, parse_side, validate_board
from draughts.play.api.models import (
    AIMoveRequest,
    ApplyMoveRequest,
    ApplyMoveResponse,
    GameStateResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveModel,
    PlayMoveRequest,
    StartGameRequest,
)
from draughts.play.agents import build_agent
from draughts.play.api.dependencies import get_game_manager
from draughts.play.config import InvalidModel
from draughts.play.game_manager import GameManager
from draughts.play.prompt import get_rules_prompt
from draughts.play.selection import select_move

logger = logging.getLogger("draughts.play.api")

app = FastAPI(
    title="Draughts API",
    description="International Draughts move generation and AI move selection",
    version="0.1.0",
)


def _manager(request: Request) -> GameManager:
    return get_game_manager(request.app)


def _parse_position(raw_board, raw_side):
    """Validate board and side or raise 400."""
    try:
        return validate_board(raw_board), parse_side(raw_side)
    except (InvalidBoard, InvalidSide) as e:
        raise HTTPException(status_code=400, detail=str(e))


def _check_result(result: dict) -> dict:
    """Raise 404 for unknown games and 400 for other game-manager errors."""
    if "error" in result:
        status = 404 if result.get("code") == "not_found" else 400
        raise HTTPException(status_code=status, detail=result)
    return result


def _move_model(move: Move) -> MoveModel:
    return MoveModel.model_validate(move.to_dict())


# ---------------------------------------------------------------------------
# Stateless engine endpoints
# ---------------------------------------------------------------------------

@app.get("/rules")
def get_rules():
    """Get the rules text."""
    return {"rules": get_rules_prompt()}


@app.post("/moves", response_model=LegalMovesResponse)
def legal_moves(body: LegalMovesRequest):
    """List all legal moves for a side (mandatory and longest capture applied)."""
    board, side = _parse_position(body.board, body.side)
    moves = generate_all_moves(board, side)
    return LegalMovesResponse(
        moves=[_move_model(m) for m in moves],
        notation=[move_to_notation(m) for m in moves],
        count=len(moves),
        game_over=len(moves) == 0,
    )


@app.post("/apply", response_model=ApplyMoveResponse)
def apply(body: ApplyMoveRequest):
    """Apply a move and return the resulting board."""
    try:
        board = validate_board(body.board)
        move = Move.from_dict(body.move.to_move_dict())
        after = apply_move(board, move)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ApplyMoveResponse(board=board_to_codes(after))


@app.post("/ai-move", response_model=MoveModel)
def ai_move(body: AIMoveRequest, request: Request):
    """Let the configured agent choose a move for ``aiPlaysAs``."""
    board, side = _parse_position(body.board, body.ai_plays_as)

    selection = request.app.state.selection_config
    try:
        model = selection.check_model(body.model)
    except InvalidModel as e:
        raise HTTPException(status_code=400, detail=str(e))

    legal = generate_all_moves(board, side)
    if not legal:
        raise HTTPException(status_code=400,
                            detail={"error": "No legal moves", "gameOver": True})

    agent = build_agent(request.app.state.agent_factory, model)
    move = select_move(agent, board, side, legal)
    logger.info(f"{model} played {move_to_notation(move)} as {side.value}")
    return _move_model(move)


# ---------------------------------------------------------------------------
# Managed games
# ---------------------------------------------------------------------------

@app.post("/games", response_model=GameStateResponse, status_code=201)
def start_game(body: StartGameRequest, request: Request):
    """Start a human-vs-AI or AI-vs-AI game."""
    selection = request.app.state.selection_config
    try:
        for model in (body.model, body.black_model, body.white_model):
            if model is not None:
                selection.check_model(model)
        result = _manager(request).start_game(
            mode=body.mode.value,
            human_color=body.human_color,
            model=body.model,
            black_model=body.black_model,
            white_model=body.white_model,
        )
    except (InvalidSide, InvalidModel) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return GameStateResponse(game_state=_check_result(result))


@app.get("/games/{game_id}", response_model=GameStateResponse)
def get_game_state(game_id: str, request: Request):
    """Get game state."""
    return GameStateResponse(game_state=_check_result(_manager(request).get_state(game_id)))


@app.post("/games/{game_id}/move", response_model=GameStateResponse)
def play_move(game_id: str, body: PlayMoveRequest, request: Request):
    """Play a human move; the agent replies in the same call."""
    result = _manager(request).play_move(game_id, move_index=body.move_index,
                                         notation=body.notation)
    return GameStateResponse(game_state=_check_result(result))


@app.post("/games/{game_id}/step", response_model=GameStateResponse)
def step_game(game_id: str, request: Request):
    """Let the agent on move play one half-move."""
    return GameStateResponse(game_state=_check_result(_manager(request).step(game_id)))


@app.delete("/games/{game_id}")
def delete_game(game_id: str, request: Request):
    """Remove a game."""
    if not _manager(request).delete_game(game_id):
        raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found")
    return {"deleted": True, "game_id": game_id}
