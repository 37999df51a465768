#!/usr/bin/env python3
"""Interactive CLI for playing International Draughts.

Usage:
    python scripts/play.py                          # Human vs Human
    python scripts/play.py --black human --white random
    python scripts/play.py --black llm --white llm --config configs/server.yaml
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from draughts.game.board import render_board
from draughts.game.notation import find_move, move_to_notation
from draughts.game.rules import apply_move, check_winner, generate_all_moves
from draughts.game.state import Color, initial_board
from draughts.play.agents import FirstMoveAgent, RandomAgent, create_agent
from draughts.play.config import SelectionConfig, load_config
from draughts.play.selection import select_move


def list_moves(moves: list) -> None:
    """Display numbered legal moves."""
    for i, move in enumerate(moves):
        suffix = " (promotes)" if move.promotes else ""
        print(f"  {i + 1:3d}. {move_to_notation(move)}{suffix}")


def human_turn(moves: list) -> int | None:
    """Get a human player's move. Returns move index or None to quit."""
    list_moves(moves)
    print(f"\nEnter move number (1-{len(moves)}), notation, or 'q' to quit:")

    while True:
        inp = input("> ").strip()
        if inp.lower() == "q":
            return None

        try:
            idx = int(inp) - 1
            if 0 <= idx < len(moves):
                return idx
            print(f"Invalid number. Enter 1-{len(moves)}.")
            continue
        except ValueError:
            pass

        try:
            return moves.index(find_move(moves, inp))
        except ValueError as e:
            print(f"{e}. Enter a move number or notation.")


def make_agent(kind: str, model: str | None, selection: SelectionConfig):
    if kind == "random":
        return RandomAgent()
    if kind == "first":
        return FirstMoveAgent()
    return create_agent(model, selection)


def play_game(players: dict, max_moves: int = 400):
    """Play a full game. ``players`` maps Color -> agent or "human"."""
    board = initial_board()
    side = Color.BLACK
    num_moves = 0

    print("=" * 40)
    print("  International Draughts")
    print("=" * 40)
    for color in (Color.BLACK, Color.WHITE):
        p = players[color]
        print(f"  {color.name.title()}: {p if p == 'human' else p.name}")
    print("=" * 40)

    while num_moves < max_moves:
        print()
        print(render_board(board, side.value))
        print()

        moves = generate_all_moves(board, side)
        if not moves:
            break

        player = players[side]
        if player == "human":
            print(f"{side.name.title()}'s turn. Legal moves:")
            idx = human_turn(moves)
            if idx is None:
                print("Game aborted.")
                return
            move = moves[idx]
        else:
            move = select_move(player, board, side, moves)
            print(f"{side.name.title()} ({player.name}) plays: {move_to_notation(move)}")

        board = apply_move(board, move)
        side = side.opponent
        num_moves += 1

    print()
    print(render_board(board))
    done, winner = check_winner(board, side)
    if not done:
        print(f"Draw after {num_moves} half-moves.")
    else:
        print(f"{winner.name.title()} wins after {num_moves} half-moves!")


def main():
    parser = argparse.ArgumentParser(description="Play International Draughts")
    choices = ["human", "random", "first", "llm"]
    parser.add_argument("--black", choices=choices, default="human")
    parser.add_argument("--white", choices=choices, default="human")
    parser.add_argument("--model", default=None, help="Model for llm players")
    parser.add_argument("--config", default=None, help="Config YAML with a selection section")
    parser.add_argument("--max-moves", type=int, default=400)
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")

    config = load_config(args.config) if args.config else {}
    selection = SelectionConfig.from_dict(config.get("selection"))

    players = {}
    for color, kind in ((Color.BLACK, args.black), (Color.WHITE, args.white)):
        players[color] = "human" if kind == "human" else make_agent(kind, args.model, selection)

    play_game(players, max_moves=args.max_moves)


if __name__ == "__main__":
    main()
