from __future__ import annotations
from typing import Optional, Tuple

# Columns are labelled with letters, rows with numbers 1..10.
COLS = "ABCDEFGHIJ"


def normalize(cell: str) -> str:
    return cell.strip().upper()


def parse_coord(cell: str) -> Optional[Tuple[int, int]]:
    """Parse user coordinate like 'B7' into ``(row, col)``."""
    cell = normalize(cell)
    if len(cell) < 2:
        return None
    letter = cell[0]
    rest = cell[1:].strip()
    if letter not in COLS:
        return None
    if not rest.isdigit():
        return None
    row = int(rest)
    if not 1 <= row <= 10:
        return None
    return row - 1, COLS.index(letter)


def format_coord(coord: Tuple[int, int]) -> str:
    r, c = coord
    return f"{COLS[c]}{r+1}"
