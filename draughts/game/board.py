"""Board constants, starting layout, square numbering, and text rendering."""

from __future__ import annotations

BOARD_SIZE = 10

# Wire codes: 0 = empty, 'b'/'w' = men, 'B'/'W' = kings
EMPTY_CODE = 0
PIECE_CODES = ("b", "w", "B", "W")

DIAGONAL_DIRS = [(1, 1), (1, -1), (-1, 1), (-1, -1)]


def is_dark(row: int, col: int) -> bool:
    return (row + col) % 2 == 1


# Starting positions: dict mapping (row, col) -> man code.
# White on the dark squares of rows 0-3 (top), Black on rows 6-9 (bottom).
STARTING_POSITIONS: dict[tuple[int, int], str] = {
    (row, col): ("w" if row <= 3 else "b")
    for row in range(BOARD_SIZE)
    for col in range(BOARD_SIZE)
    if is_dark(row, col) and (row <= 3 or row >= 6)
}

NUM_SQUARES = BOARD_SIZE * BOARD_SIZE // 2


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE


def rc_to_square(row: int, col: int) -> int:
    """Convert (row, col) of a dark square to its number (1-50).

    Squares are numbered row-major from the top-left, row 0 first.
    """
    if not in_bounds(row, col) or not is_dark(row, col):
        raise ValueError(f"({row}, {col}) is not a playable square")
    return row * (BOARD_SIZE // 2) + col // 2 + 1


def square_to_rc(square: int) -> tuple[int, int]:
    """Convert a square number (1-50) to (row, col)."""
    if not 1 <= square <= NUM_SQUARES:
        raise ValueError(f"Square {square} out of range 1-{NUM_SQUARES}")
    row, k = divmod(square - 1, BOARD_SIZE // 2)
    col = 2 * k + (1 if row % 2 == 0 else 0)
    return (row, col)


def render_board(board, side_to_move: str | None = None) -> str:
    """Render the board as a labelled text grid.

    Args:
        board: 10x10 list of lists. Each cell is None or has a ``code`` attribute.
        side_to_move: Optional 'b' or 'w' for a header line.
    """
    lines = []

    if side_to_move is not None:
        name = "Black" if side_to_move == "b" else "White"
        lines.append(f"{name} to move")
        lines.append("")

    border = "   +" + "-" * (2 * BOARD_SIZE + 1) + "+"
    lines.append("     " + " ".join(str(c) for c in range(BOARD_SIZE)))
    lines.append(border)

    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            cell = board[row][col]
            if cell is not None:
                cells.append(cell.code)
            elif is_dark(row, col):
                cells.append(".")
            else:
                cells.append(" ")
        lines.append(f"{row:2d} | {' '.join(cells)} |")

    lines.append(border)

    return "\n".join(lines)
