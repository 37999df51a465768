"""Validation of untrusted board and side input."""

from __future__ import annotations

from typing import Any

from draughts.game.board import BOARD_SIZE, EMPTY_CODE
from draughts.game.state import PIECE_FROM_CODE, Board, Color


class InvalidBoard(ValueError):
    """Raised when a board is not a 10x10 grid of allowed cell codes."""


class InvalidSide(ValueError):
    """Raised when a side is not one of the two colors."""


def _is_empty_code(cell: Any) -> bool:
    # bool is an int subclass and False == 0, so check the exact type
    return type(cell) is int and cell == EMPTY_CODE


def validate_board(raw: Any) -> Board:
    """Convert a wire-format grid into a Board.

    Args:
        raw: 10x10 list of lists of cell codes (0, 'b', 'w', 'B', 'W').

    Returns:
        A new Board.

    Raises:
        InvalidBoard: If the shape or any cell value is malformed.
    """
    if not isinstance(raw, (list, tuple)) or len(raw) != BOARD_SIZE:
        raise InvalidBoard(f"Board must have exactly {BOARD_SIZE} rows")

    board: Board = []
    for r, row in enumerate(raw):
        if not isinstance(row, (list, tuple)) or len(row) != BOARD_SIZE:
            raise InvalidBoard(f"Row {r} must have exactly {BOARD_SIZE} cells")
        cells = []
        for c, cell in enumerate(row):
            if _is_empty_code(cell):
                cells.append(None)
            elif isinstance(cell, str) and cell in PIECE_FROM_CODE:
                cells.append(PIECE_FROM_CODE[cell])
            else:
                raise InvalidBoard(f"Invalid cell {cell!r} at ({r}, {c})")
        board.append(cells)
    return board


def parse_side(raw: Any) -> Color:
    """Convert 'b' / 'w' (or a Color) to a Color.

    Raises:
        InvalidSide: For anything else.
    """
    if isinstance(raw, Color):
        return raw
    if isinstance(raw, str):
        for color in Color:
            if raw == color.value:
                return color
    raise InvalidSide(f"Invalid side {raw!r}: expected 'b' or 'w'")


def board_to_codes(board: Board) -> list[list]:
    """Convert a Board to the wire grid accepted by ``validate_board``."""
    return [[EMPTY_CODE if cell is None else cell.code for cell in row] for row in board]
