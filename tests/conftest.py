"""Shared test fixtures: board builders and scripted agents."""

import pytest

from draughts.game.state import PIECE_FROM_CODE, empty_board
from draughts.play.agents import Agent


def make_board(pieces: dict):
    """Build a board from {(row, col): code} on an otherwise empty grid."""
    board = empty_board()
    for (r, c), code in pieces.items():
        board[r][c] = PIECE_FROM_CODE[code]
    return board


def make_codes(pieces: dict) -> list[list]:
    """Wire-format grid with the given {(row, col): code} pieces."""
    grid = [[0] * 10 for _ in range(10)]
    for (r, c), code in pieces.items():
        grid[r][c] = code
    return grid


class ScriptedAgent(Agent):
    """Answers every request with a fixed value (or raises it if it's an exception)."""

    name = "scripted"

    def __init__(self, answer):
        self.answer = answer
        self.calls = 0

    def choose_move(self, board, side, legal_moves):
        self.calls += 1
        if isinstance(self.answer, Exception):
            raise self.answer
        return self.answer


@pytest.fixture
def board_builder():
    return make_board
