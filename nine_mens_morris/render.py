"""
Text rendering of the board for terminal play.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from .config import config
from .location import COLUMNS, ROWS, Location, next_intersection

if TYPE_CHECKING:
    from .board import Board

PLAYER_SYMBOLS: Sequence[str] = ("X", "O", "#", "@")
EMPTY_SYMBOL = "+"
CELL_WIDTH = 4  # characters between two columns
MARGIN = "   "


def _symbol(owner: int) -> str:
    if owner < 0:
        return EMPTY_SYMBOL
    if owner < len(PLAYER_SYMBOLS):
        return PLAYER_SYMBOLS[owner]
    return str(owner)


def _canvas_position(x: int, y: int) -> tuple[int, int]:
    # Row 7 is drawn at the top
    return 2 * (config.BOARD_SIZE - 1 - y), CELL_WIDTH * x


def render_board(board: "Board") -> str:
    """Draw the lines and intersections of the board with each player's pieces."""
    size = config.BOARD_SIZE
    height = 2 * size - 1
    width = CELL_WIDTH * (size - 1) + 1
    canvas = [[" "] * width for _ in range(height)]
    owners = board.to_array()

    for loc in Location.all():
        row, col = _canvas_position(loc.x, loc.y)
        right = next_intersection(loc.x, loc.y, 1, 0)
        if right is not None:
            _, end = _canvas_position(*right)
            for c in range(col + 1, end):
                canvas[row][c] = "-"
        down = next_intersection(loc.x, loc.y, 0, -1)
        if down is not None:
            end, _ = _canvas_position(*down)
            for r in range(row + 1, end):
                canvas[r][col] = "|"

    for loc in Location.all():
        row, col = _canvas_position(loc.x, loc.y)
        canvas[row][col] = _symbol(int(owners[loc.y, loc.x]))

    lines = []
    for r, cells in enumerate(canvas):
        label = ROWS[size - 1 - r // 2] if r % 2 == 0 else " "
        lines.append(f"{label}{MARGIN[1:]}{''.join(cells).rstrip()}")
    lines.append(MARGIN + (" " * (CELL_WIDTH - 1)).join(COLUMNS[:size]))
    return "\n".join(lines)


def render_status(board: "Board") -> str:
    """One line per player: symbol, stage, pieces left to place and on the board."""
    lines = []
    for idx in range(board.get_player_count()):
        lines.append(
            f"{_symbol(idx)} {board.get_player(idx)}: {board.get_stage(idx).name.lower()}, "
            f"{board.get_pieces_remaining_to_be_placed(idx)} to place, "
            f"{board.pieces_on_board(idx)} on board"
        )
    return "\n".join(lines)
