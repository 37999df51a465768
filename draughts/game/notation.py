"""Draughts move notation and ASCII board format.

Move formats (squares numbered 1-50, see ``board.rc_to_square``):
  32-28        Quiet move from 32 to 28
  28x19x10     Capture chain from 28 landing on 19, then 10
  28x10        Short capture form (from and final landing only)

ASCII board (the format shown to move-selection agents):
  10 lines of 10 characters, top row first.
  '.' empty, 'b'/'w' men, 'B'/'W' kings.
"""

from __future__ import annotations

import re

from draughts.game.board import BOARD_SIZE, rc_to_square, square_to_rc
from draughts.game.state import PIECE_FROM_CODE, Board, Coord, Move, empty_board
from draughts.game.validation import InvalidBoard


def move_to_notation(move: Move) -> str:
    """Convert a move to notation, listing every landing for captures."""
    start = str(rc_to_square(*move.from_rc))
    if not move.is_capture:
        return f"{start}-{rc_to_square(*move.to_rc)}"
    landings = [str(rc_to_square(*rc)) for rc in move.path]
    return "x".join([start] + landings)


_QUIET_RE = re.compile(r"^(\d{1,2})-(\d{1,2})$")
_CAPTURE_RE = re.compile(r"^\d{1,2}(?:x\d{1,2})+$")


def parse_notation(text: str) -> tuple[Coord, tuple[Coord, ...], bool]:
    """Parse notation into (from_rc, landings, is_capture).

    Raises:
        ValueError: If the notation is invalid.
    """
    text = text.strip().lower()

    m = _QUIET_RE.match(text)
    if m:
        return (square_to_rc(int(m.group(1))),
                (square_to_rc(int(m.group(2))),),
                False)

    if _CAPTURE_RE.match(text):
        squares = [square_to_rc(int(s)) for s in text.split("x")]
        return squares[0], tuple(squares[1:]), True

    raise ValueError(f"Invalid move notation: {text!r}")


def find_move(legal_moves: list[Move], text: str) -> Move:
    """Find the legal move matching ``text``.

    A capture written with its full landing path is matched exactly; the
    short ``from x to`` form is accepted only if exactly one legal move fits.

    Raises:
        ValueError: If the notation is invalid, illegal, or ambiguous.
    """
    from_rc, landings, is_capture = parse_notation(text)

    candidates = [m for m in legal_moves
                  if m.from_rc == from_rc and m.is_capture == is_capture]

    for move in candidates:
        if move.path == landings:
            return move

    if is_capture and len(landings) == 1:
        short = [m for m in candidates if m.to_rc == landings[0]]
        if len(short) == 1:
            return short[0]
        if len(short) > 1:
            options = ", ".join(move_to_notation(m) for m in short)
            raise ValueError(f"Ambiguous capture {text!r}: one of {options}")

    raise ValueError(f"{text!r} is not a legal move in this position")


def board_to_ascii(board: Board) -> str:
    """Render the board as 10 lines of 10 characters."""
    return "\n".join(
        "".join("." if cell is None else cell.code for cell in row)
        for row in board
    )


def ascii_to_board(text: str) -> Board:
    """Parse the output of ``board_to_ascii``.

    Raises:
        InvalidBoard: On wrong dimensions or unknown characters.
    """
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if len(lines) != BOARD_SIZE:
        raise InvalidBoard(f"Expected {BOARD_SIZE} lines, got {len(lines)}")

    board = empty_board()
    for r, line in enumerate(lines):
        if len(line) != BOARD_SIZE:
            raise InvalidBoard(f"Line {r} must have {BOARD_SIZE} characters")
        for c, ch in enumerate(line):
            if ch == ".":
                continue
            if ch not in PIECE_FROM_CODE:
                raise InvalidBoard(f"Invalid character {ch!r} at ({r}, {c})")
            board[r][c] = PIECE_FROM_CODE[ch]
    return board
