from __future__ import annotations
from typing import List, Tuple

from models import BOARD_SIZE, HIT as HIT_CELL, MISS as MISS_CELL, SHIP, UNKNOWN, Board


MISS, HIT, REPEAT = 'miss', 'hit', 'repeat'


def in_bounds(coord: Tuple[int, int]) -> bool:
    r, c = coord
    return 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE


def apply_shot(board: Board, coord: Tuple[int, int]) -> str:
    """Resolve a shot at ``coord`` and return ``MISS``, ``HIT`` or ``REPEAT``.

    A cell that was already shot is left alone and reported as ``REPEAT``;
    the highlight of the previous shot is kept in that case.
    """
    r, c = coord
    cell_state = board.grid[r][c]
    if cell_state in (MISS_CELL, HIT_CELL):
        return REPEAT
    if cell_state == SHIP:
        board.grid[r][c] = HIT_CELL
        board.highlight = [coord]
        return HIT
    board.grid[r][c] = MISS_CELL
    board.highlight = [coord]
    return MISS


def attack_view(board: Board) -> List[List[int]]:
    """Project ``board`` to what its opponent may know: hits and misses only."""
    return [
        [cell if cell in (HIT_CELL, MISS_CELL) else UNKNOWN for cell in row]
        for row in board.grid
    ]


__all__ = [
    "apply_shot",
    "attack_view",
    "in_bounds",
    "MISS",
    "HIT",
    "REPEAT",
]
