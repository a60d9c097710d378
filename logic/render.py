from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple
import re

from models import HIT, MISS, SHIP, Board
from logic.battle import attack_view
from logic.parser import COLS
from wcwidth import wcswidth

# fixed-width layout for board cells
#
# Some of the symbols below are rendered wider than ASCII by Telegram
# clients; padding every cell to ``CELL_WIDTH`` display columns keeps the
# grid rectangular inside a <pre> block.
CELL_WIDTH = 2

EMPTY_SYMBOL = "·"
MISS_SYMBOL = "×"
SHIP_SYMBOL = "▢"
HIT_SYMBOL = "■"
LAST_MOVE_MISS_SYMBOL = "✕"
LAST_MOVE_HIT_SYMBOL = "▣"


def format_cell(symbol: str) -> str:
    """Pad cell contents so that the board remains aligned.

    HTML tags are ignored when measuring the visible width.
    """
    visible = re.sub(r"<[^>]+>", "", symbol)
    width = wcswidth(visible)
    if width < 0:
        # wcswidth returns -1 for non-printable strings
        return symbol
    if width >= CELL_WIDTH:
        return symbol
    slack = CELL_WIDTH - width
    left_pad = (slack + 1) // 2
    right_pad = slack - left_pad
    return (" " * left_pad) + symbol + (" " * right_pad)


COL_HEADERS = ''.join(format_cell(letter) for letter in COLS)
HEADER_PREFIX = format_cell("") + "|" + " "


def _symbol(state: int, highlighted: bool, show_ships: bool) -> str:
    if state == HIT:
        return LAST_MOVE_HIT_SYMBOL if highlighted else HIT_SYMBOL
    if state == MISS:
        return LAST_MOVE_MISS_SYMBOL if highlighted else MISS_SYMBOL
    if state == SHIP and show_ships:
        return SHIP_SYMBOL
    return EMPTY_SYMBOL


def _render_grid(
    grid: Sequence[Sequence[int]],
    highlight: Iterable[Tuple[int, int]],
    show_ships: bool,
) -> str:
    lines = [HEADER_PREFIX + COL_HEADERS]
    marked = set(highlight)
    for r_idx, row in enumerate(grid):
        cells: List[str] = [
            format_cell(_symbol(state, (r_idx, c_idx) in marked, show_ships))
            for c_idx, state in enumerate(row)
        ]
        row_label = format_cell(str(r_idx + 1))
        lines.append(f"{row_label}| " + ''.join(cells))
    return '<pre>' + '\n'.join(lines) + '</pre>'


def render_board_own(board: Board) -> str:
    return _render_grid(board.grid, board.highlight, show_ships=True)


def render_board_enemy(board: Board) -> str:
    # only the attack view is drawn so ship cells cannot leak
    return _render_grid(attack_view(board), board.highlight, show_ships=False)
