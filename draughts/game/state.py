"""Board and move representation for International Draughts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

from draughts.game.board import BOARD_SIZE, STARTING_POSITIONS


class Color(str, Enum):
    BLACK = "b"
    WHITE = "w"

    @property
    def opponent(self) -> Color:
        return Color.WHITE if self is Color.BLACK else Color.BLACK

    @property
    def forward(self) -> int:
        """Row step of a man moving forward: White advances toward row 9."""
        return 1 if self is Color.WHITE else -1

    @property
    def promotion_row(self) -> int:
        return BOARD_SIZE - 1 if self is Color.WHITE else 0


class PieceKind(IntEnum):
    MAN = 0
    KING = 1


@dataclass(frozen=True)
class Piece:
    color: Color
    kind: PieceKind

    @property
    def code(self) -> str:
        return self.color.value.upper() if self.kind == PieceKind.KING else self.color.value

    @property
    def is_king(self) -> bool:
        return self.kind == PieceKind.KING

    def promoted(self) -> Piece:
        return Piece(self.color, PieceKind.KING)


# Map cell codes to pieces
PIECE_FROM_CODE = {
    "b": Piece(Color.BLACK, PieceKind.MAN),
    "w": Piece(Color.WHITE, PieceKind.MAN),
    "B": Piece(Color.BLACK, PieceKind.KING),
    "W": Piece(Color.WHITE, PieceKind.KING),
}

Coord = tuple[int, int]
Board = list[list[Optional[Piece]]]


def empty_board() -> Board:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def initial_board() -> Board:
    """Board with 20 men per side on their starting squares."""
    board = empty_board()
    for (row, col), code in STARTING_POSITIONS.items():
        board[row][col] = PIECE_FROM_CODE[code]
    return board


def clone_board(board: Board) -> Board:
    # Pieces are immutable, so a row-wise copy is a full copy
    return [row[:] for row in board]


def _rc_to_dict(rc: Coord) -> dict:
    return {"r": rc[0], "c": rc[1]}


def _rc_from_dict(d: Any) -> Coord:
    return (int(d["r"]), int(d["c"]))


@dataclass(frozen=True)
class Move:
    """A single move: a quiet step/slide or a full capture chain.

    ``path`` lists every landing square in order (one per jump for captures),
    ``captures`` lists the captured squares in the order they were taken.
    """
    from_rc: Coord
    path: tuple[Coord, ...]
    captures: tuple[Coord, ...] = ()
    promotes: bool = False

    @property
    def to_rc(self) -> Coord:
        return self.path[-1]

    @property
    def is_capture(self) -> bool:
        return len(self.captures) > 0

    @property
    def num_captures(self) -> int:
        return len(self.captures)

    def to_dict(self) -> dict:
        """Serialize to ``{from, path, captures, promotes}`` with ``{r, c}`` coords."""
        return {
            "from": _rc_to_dict(self.from_rc),
            "path": [_rc_to_dict(rc) for rc in self.path],
            "captures": [_rc_to_dict(rc) for rc in self.captures],
            "promotes": self.promotes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Move:
        """Parse the dict produced by ``to_dict``.

        Raises:
            ValueError: If required keys are missing or malformed.
        """
        try:
            from_rc = _rc_from_dict(data["from"])
            path = tuple(_rc_from_dict(d) for d in data["path"])
            captures = tuple(_rc_from_dict(d) for d in data.get("captures") or [])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed move: {e}") from e
        if not path:
            raise ValueError("Malformed move: path must not be empty")
        return cls(from_rc, path, captures, bool(data.get("promotes", False)))
