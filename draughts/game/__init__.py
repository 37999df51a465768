"""International Draughts rules engine: board, validation, move generation, notation."""

from draughts.game.state import Color, PieceKind, Piece, Move, Board, initial_board, empty_board
from draughts.game.validation import InvalidBoard, InvalidSide, validate_board, parse_side, board_to_codes
from draughts.game.rules import generate_all_moves, apply_move, check_winner, count_pieces, moves_for_piece
from draughts.game.board import BOARD_SIZE, STARTING_POSITIONS, render_board
from draughts.game.notation import move_to_notation, find_move, board_to_ascii, ascii_to_board

__all__ = [
    "Color", "PieceKind", "Piece", "Move", "Board", "initial_board", "empty_board",
    "InvalidBoard", "InvalidSide", "validate_board", "parse_side", "board_to_codes",
    "generate_all_moves", "apply_move", "check_winner", "count_pieces", "moves_for_piece",
    "BOARD_SIZE", "STARTING_POSITIONS", "render_board",
    "move_to_notation", "find_move", "board_to_ascii", "ascii_to_board",
]
