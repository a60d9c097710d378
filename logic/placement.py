from __future__ import annotations
import logging
import random
from typing import List, Optional, Sequence, Tuple

from models import BOARD_SIZE, EMPTY, FLEET, HORIZONTAL, SHIP, VERTICAL, Board, ShipSpec
from logic.errors import FleetPlacementError, PlacementInvalid


logger = logging.getLogger(__name__)

MAX_PLACEMENT_ATTEMPTS = 200


def ship_cells(row: int, col: int, size: int, orientation: str) -> List[Tuple[int, int]]:
    if orientation == HORIZONTAL:
        return [(row, col + i) for i in range(size)]
    return [(row + i, col) for i in range(size)]


def can_place(grid: List[List[int]], cells: Sequence[Tuple[int, int]]) -> bool:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    for r, c in cells:
        if not (0 <= r < rows and 0 <= c < cols):
            return False
        if grid[r][c] != EMPTY:
            return False
    return True


def place_ship(
    board: Board, row: int, col: int, size: int, orientation: str
) -> List[Tuple[int, int]]:
    """Mark a ship of ``size`` starting at ``(row, col)`` on ``board``.

    Raises :class:`PlacementInvalid` when any cell is off the board or
    already taken, or when ``orientation`` is neither horizontal nor
    vertical; in that case ``board`` is not modified.
    """
    if orientation not in (HORIZONTAL, VERTICAL):
        raise PlacementInvalid(f"Unknown orientation: {orientation}")
    cells = ship_cells(row, col, size, orientation)
    if not can_place(board.grid, cells):
        raise PlacementInvalid("Cannot place ship here!")
    for r, c in cells:
        board.grid[r][c] = SHIP
    return cells


def _place_randomly(
    board: Board,
    ship: ShipSpec,
    rng: random.Random,
    attempts: int,
) -> List[Tuple[int, int]]:
    for attempt in range(attempts):
        r = rng.randrange(BOARD_SIZE)
        c = rng.randrange(BOARD_SIZE)
        orient = rng.choice((HORIZONTAL, VERTICAL))
        cells = ship_cells(r, c, ship.size, orient)
        if can_place(board.grid, cells):
            for rr, cc in cells:
                board.grid[rr][cc] = SHIP
            logger.debug("Placed %s at %s after %d attempts", ship.name, cells[0], attempt + 1)
            return cells
    raise FleetPlacementError(
        f"Could not place {ship.name} within {attempts} attempts"
    )


def random_fleet(
    fleet: Sequence[ShipSpec] = FLEET,
    rng: Optional[random.Random] = None,
    attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Board:
    """Return a new board holding every ship of ``fleet`` at random."""
    rng = rng or random.Random()
    board = Board()
    for ship in fleet:
        _place_randomly(board, ship, rng, attempts)
    return board
