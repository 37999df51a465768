"""Legal move generation and move execution for International Draughts (10x10).

Mandatory capture: if any piece can capture, only capture moves are legal.
Longest capture: among capture chains, only those taking the most pieces are legal.
Men move one square diagonally forward but capture in all four directions.
Kings fly: they slide any distance and may land anywhere beyond a captured piece.
A man reaching the far row mid-chain is crowned and finishes the chain as a king.

All functions are pure: boards are copied before any change.
"""

from __future__ import annotations

from typing import Optional

from draughts.game.board import BOARD_SIZE, DIAGONAL_DIRS, in_bounds
from draughts.game.state import Board, Color, Coord, Move, Piece, PieceKind, clone_board
from draughts.game.validation import parse_side


def _owner(cell: Optional[Piece]) -> Optional[Color]:
    return None if cell is None else cell.color


# ---------------------------------------------------------------------------
# Quiet moves
# ---------------------------------------------------------------------------

def _gen_man_quiet(board: Board, row: int, col: int, side: Color,
                   moves: list[Move]):
    """Man: one square diagonally forward onto an empty square."""
    r2 = row + side.forward
    for dc in (-1, 1):
        c2 = col + dc
        if not in_bounds(r2, c2) or board[r2][c2] is not None:
            continue
        moves.append(Move((row, col), ((r2, c2),),
                          promotes=r2 == side.promotion_row))


def _gen_king_quiet(board: Board, row: int, col: int, moves: list[Move]):
    """King: any number of empty squares along each diagonal."""
    for dr, dc in DIAGONAL_DIRS:
        r2, c2 = row + dr, col + dc
        while in_bounds(r2, c2) and board[r2][c2] is None:
            moves.append(Move((row, col), ((r2, c2),)))
            r2 += dr
            c2 += dc


# ---------------------------------------------------------------------------
# Capture search
# ---------------------------------------------------------------------------

def _man_capture_dfs(board: Board, origin: Coord, pos: Coord, side: Color,
                     used: frozenset, path: tuple, captures: tuple,
                     results: list[Move]):
    """Extend a man's capture chain from ``pos`` one jump at a time."""
    opponent = side.opponent
    row, col = pos
    extended = False

    for dr, dc in DIAGONAL_DIRS:
        mr, mc = row + dr, col + dc
        lr, lc = row + 2 * dr, col + 2 * dc
        if not in_bounds(lr, lc):
            continue
        if board[lr][lc] is not None:
            continue
        if _owner(board[mr][mc]) != opponent or (mr, mc) in used:
            continue

        after = clone_board(board)
        moving = after[row][col]
        after[row][col] = None
        after[mr][mc] = None
        crowned = lr == side.promotion_row
        after[lr][lc] = moving.promoted() if crowned else moving

        next_used = used | {(mr, mc)}
        next_path = path + ((lr, lc),)
        next_caps = captures + ((mr, mc),)
        extended = True

        if crowned:
            # The rest of the chain is searched with flying-king rules
            continuations: list[Move] = []
            _king_capture_dfs(after, (lr, lc), (lr, lc), side, next_used,
                              (), (), continuations)
            if not continuations:
                results.append(Move(origin, next_path, next_caps, promotes=True))
            for cont in continuations:
                results.append(Move(origin, next_path + cont.path,
                                    next_caps + cont.captures, promotes=True))
        else:
            _man_capture_dfs(after, origin, (lr, lc), side, next_used,
                             next_path, next_caps, results)

    if not extended and captures:
        results.append(Move(origin, path, captures, promotes=False))


def _king_capture_dfs(board: Board, origin: Coord, pos: Coord, side: Color,
                      used: frozenset, path: tuple, captures: tuple,
                      results: list[Move]):
    """Extend a flying king's capture chain from ``pos``.

    Each empty square beyond a captured piece is a separate branch.
    """
    opponent = side.opponent
    row, col = pos
    extended = False

    for dr, dc in DIAGONAL_DIRS:
        mr, mc = row + dr, col + dc
        while in_bounds(mr, mc) and board[mr][mc] is None:
            mr += dr
            mc += dc
        if not in_bounds(mr, mc):
            continue
        if _owner(board[mr][mc]) != opponent or (mr, mc) in used:
            continue

        lr, lc = mr + dr, mc + dc
        while in_bounds(lr, lc) and board[lr][lc] is None:
            after = clone_board(board)
            moving = after[row][col]
            after[row][col] = None
            after[mr][mc] = None
            after[lr][lc] = moving

            _king_capture_dfs(after, origin, (lr, lc), side,
                              used | {(mr, mc)},
                              path + ((lr, lc),),
                              captures + ((mr, mc),),
                              results)
            extended = True
            lr += dr
            lc += dc

    if not extended and captures:
        results.append(Move(origin, path, captures, promotes=False))


def generate_man_captures(board: Board, at: Coord, side: Color) -> list[Move]:
    """All maximal capture chains for the man at ``at``."""
    results: list[Move] = []
    _man_capture_dfs(board, at, at, side, frozenset(), (), (), results)
    return results


def generate_king_captures(board: Board, at: Coord, side: Color) -> list[Move]:
    """All maximal capture chains for the king at ``at``."""
    results: list[Move] = []
    _king_capture_dfs(board, at, at, side, frozenset(), (), (), results)
    return results


def generate_quiet_moves(board: Board, at: Coord, side: Color) -> list[Move]:
    """Non-capturing moves for the piece at ``at``."""
    moves: list[Move] = []
    row, col = at
    piece = board[row][col]
    if piece is None:
        return moves
    if piece.is_king:
        _gen_king_quiet(board, row, col, moves)
    else:
        _gen_man_quiet(board, row, col, side, moves)
    return moves


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def _own_squares(board: Board, side: Color) -> list[Coord]:
    return [(row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if _owner(board[row][col]) == side]


def generate_all_moves(board: Board, side) -> list[Move]:
    """Generate all legal moves for ``side``.

    Capture chains take priority; only chains with the maximum number of
    captures are kept (ties are all returned). Without captures, every
    quiet move is legal. An empty list means ``side`` has lost.

    Raises:
        InvalidSide: If ``side`` is not a color.
    """
    side = parse_side(side)
    squares = _own_squares(board, side)

    capture_moves: list[Move] = []
    for at in squares:
        piece = board[at[0]][at[1]]
        if piece.is_king:
            capture_moves.extend(generate_king_captures(board, at, side))
        else:
            capture_moves.extend(generate_man_captures(board, at, side))

    if capture_moves:
        max_caps = max(m.num_captures for m in capture_moves)
        return [m for m in capture_moves if m.num_captures == max_caps]

    quiet_moves: list[Move] = []
    for at in squares:
        quiet_moves.extend(generate_quiet_moves(board, at, side))
    return quiet_moves


def moves_for_piece(moves: list[Move], at: Coord) -> list[Move]:
    """Filter a legal-move list to the moves of the piece at ``at``."""
    return [m for m in moves if m.from_rc == tuple(at)]


# ---------------------------------------------------------------------------
# Application and game end
# ---------------------------------------------------------------------------

def apply_move(board: Board, move: Move) -> Board:
    """Return the board after ``move``. The input board is not modified.

    Raises:
        ValueError: If there is no piece on ``move.from_rc``.
    """
    fr, fc = move.from_rc
    moving = board[fr][fc]
    if moving is None:
        raise ValueError(f"No piece at {move.from_rc}")

    after = clone_board(board)
    after[fr][fc] = None
    for cr, cc in move.captures:
        after[cr][cc] = None
    tr, tc = move.to_rc
    after[tr][tc] = moving.promoted() if move.promotes else moving
    return after


def check_winner(board: Board, side_to_move) -> tuple[bool, Optional[Color]]:
    """Check if the game is over.

    Returns (is_done, winner): the side to move loses when it has no legal move.
    """
    side_to_move = parse_side(side_to_move)
    if generate_all_moves(board, side_to_move):
        return False, None
    return True, side_to_move.opponent


def count_pieces(board: Board) -> dict[str, int]:
    """Count men and kings for each color."""
    counts = {"black_men": 0, "black_kings": 0, "white_men": 0, "white_kings": 0}
    for row in board:
        for cell in row:
            if cell is None:
                continue
            color = "black" if cell.color == Color.BLACK else "white"
            kind = "kings" if cell.kind == PieceKind.KING else "men"
            counts[f"{color}_{kind}"] += 1
    return counts
