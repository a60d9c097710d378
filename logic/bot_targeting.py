"""Target selection for the computer opponent.

Every strategy reads an attack view only (``UNKNOWN``/``HIT``/``MISS`` per
cell, see :func:`logic.battle.attack_view`) and never the ship layout.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models import BOARD_SIZE, EASY, HARD, HIT, MEDIUM, UNKNOWN, Board, normalize_difficulty
from logic.placement import random_fleet

Coord = Tuple[int, int]
View = Sequence[Sequence[int]]

logger = logging.getLogger(__name__)

# right, left, down, up
_DIRECTIONS = ((0, 1), (0, -1), (1, 0), (-1, 0))


def _is_unknown(view: View, coord: Coord) -> bool:
    r, c = coord
    return 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and view[r][c] == UNKNOWN


def adjacent_unknown(view: View, coord: Coord) -> List[Coord]:
    r, c = coord
    cells: List[Coord] = []
    for dr, dc in _DIRECTIONS:
        candidate = (r + dr, c + dc)
        if _is_unknown(view, candidate):
            cells.append(candidate)
    return cells


def unknown_cells(view: View) -> List[Coord]:
    return [
        (r, c)
        for r in range(BOARD_SIZE)
        for c in range(BOARD_SIZE)
        if view[r][c] == UNKNOWN
    ]


def find_incomplete_hits(view: View) -> List[Coord]:
    """Hits that still border unexplored water, in row-major order."""
    hits: List[Coord] = []
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if view[r][c] == HIT and adjacent_unknown(view, (r, c)):
                hits.append((r, c))
    return hits


def _ship_direction(hits: Sequence[Coord]) -> Optional[str]:
    # same row is labelled "horizontal", same column "vertical"
    if len(hits) < 2:
        return None
    (r1, c1), (r2, c2) = hits[0], hits[1]
    if r1 == r2:
        return "horizontal"
    if c1 == c2:
        return "vertical"
    return None


def _direction_cells(view: View, hit: Coord, direction: str) -> List[Coord]:
    r, c = hit
    cells: List[Coord] = []
    for offset in (-1, 1):
        if direction == "horizontal":
            candidate = (r, c + offset)
        else:
            candidate = (r + offset, c)
        if _is_unknown(view, candidate):
            cells.append(candidate)
    return cells


def _easy_target(view: View, rng: random.Random) -> Optional[Coord]:
    cells = unknown_cells(view)
    if not cells:
        return None
    return rng.choice(cells)


def _medium_target(view: View, rng: random.Random) -> Optional[Coord]:
    incomplete = find_incomplete_hits(view)
    if incomplete:
        neighbours = adjacent_unknown(view, incomplete[0])
        if neighbours:
            return rng.choice(neighbours)
    return _easy_target(view, rng)


def _hard_target(view: View, rng: random.Random) -> Optional[Coord]:
    incomplete = find_incomplete_hits(view)

    if len(incomplete) >= 2:
        direction = _ship_direction(incomplete)
        if direction:
            line = _direction_cells(view, incomplete[0], direction)
            if line:
                return line[0]

    if incomplete:
        neighbours = adjacent_unknown(view, incomplete[-1])
        if neighbours:
            # prefer cells that open up more unexplored water
            neighbours.sort(key=lambda cell: len(adjacent_unknown(view, cell)), reverse=True)
            return neighbours[0]

    checkerboard: List[Coord] = []
    rest: List[Coord] = []
    for r, c in unknown_cells(view):
        if (r + c) % 2 == 0:
            checkerboard.append((r, c))
        else:
            rest.append((r, c))
    if checkerboard:
        return rng.choice(checkerboard)
    if rest:
        return rng.choice(rest)

    return _easy_target(view, rng)


_STRATEGIES: Dict[str, Callable[[View, random.Random], Optional[Coord]]] = {
    EASY: _easy_target,
    MEDIUM: _medium_target,
    HARD: _hard_target,
}


def plan_attack(
    view: View,
    difficulty: str = MEDIUM,
    rng: Optional[random.Random] = None,
) -> Optional[Coord]:
    """Return the next cell to attack or ``None`` when nothing is left.

    Unrecognised difficulties play as ``MEDIUM``.
    """
    strategy = _STRATEGIES[normalize_difficulty(difficulty)]
    target = strategy(view, rng or random.Random())
    if target is None:
        logger.info("No target available for %s opponent", difficulty)
    return target


def auto_place_fleet(rng: Optional[random.Random] = None) -> Board:
    return random_fleet(rng=rng)


__all__ = [
    "Coord",
    "adjacent_unknown",
    "auto_place_fleet",
    "find_incomplete_hits",
    "plan_attack",
    "unknown_cells",
]
