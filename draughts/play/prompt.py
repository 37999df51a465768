"""Construct prompts for LLM move selection: rules text + position + legal choices."""

from __future__ import annotations

import json

from draughts.game.notation import board_to_ascii
from draughts.game.state import Board, Color

RULES_TEXT = """# International Draughts Rules

## Board
10x10 board, pieces stand on the dark squares only. Row 0 is the top row.
White starts on rows 0-3 and moves down (toward row 9).
Black starts on rows 6-9 and moves up (toward row 0). Black moves first.

## Pieces
| Piece | Symbol | Move | Capture |
|-------|--------|------|---------|
| Man | b / w | 1 square diagonally forward | Jumps an adjacent enemy piece in any diagonal direction |
| King | B / W | Any distance along a diagonal (flying) | Jumps an enemy piece at any distance, may land on any empty square beyond it |

## Capturing
Capturing is mandatory. A capture continues as long as another jump is available,
and a piece cannot be captured twice in one move.
Among all capture sequences, you must play one that takes the most pieces.

## Promotion
A man reaching the far row (row 9 for White, row 0 for Black) becomes a king.
If this happens during a capture, the rest of the sequence is played as a king.

## End of game
A player with no legal move (no pieces, or all pieces blocked) loses.

## Notation
Dark squares are numbered 1-50 from the top-left. Quiet move: `32-28`.
Capture: `28x19x10` (every landing square).
"""

SYSTEM_PROMPT = "\n".join([
    "You are a strong International Draughts (10x10) engine. Respond ONLY with a JSON object.",
    'Format: {"moveIndex": integer}. No prose, no code fences.',
    "Rules: mandatory capture, men capture in all directions, kings are flying, "
    "choose longest capture sequences (max jumps).",
    "Secondary preferences: prefer promoting, improve king activity/centralization, "
    "avoid giving immediate recapture when possible.",
])


def get_rules_prompt() -> str:
    """Get the rules description."""
    return RULES_TEXT


def build_system_prompt(include_rules: bool = False) -> str:
    """Build the system prompt for a move-selection request.

    Args:
        include_rules: Append the full rules text (longer prompt, helps weaker models).
    """
    if include_rules:
        return SYSTEM_PROMPT + "\n\n" + RULES_TEXT
    return SYSTEM_PROMPT


def build_move_prompt(board: Board, side: Color, choices: list[dict]) -> str:
    """Build the user message: position, side to move, and indexed legal moves.

    Args:
        board: Current board.
        side: Side the agent plays.
        choices: Output of ``selection.build_choices``.
    """
    return "\n".join([
        "Board (top first, 10 lines of 10 chars; . empty, b/w men, B/W kings):",
        board_to_ascii(board),
        f"Side to move: {side.value}",
        "Legal moves (array):",
        json.dumps(choices, separators=(",", ":")),
        'Return ONLY {"moveIndex": n} where n is an index in the array above.',
    ])
