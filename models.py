from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Optional
from datetime import datetime
import uuid


Coord = Tuple[int, int]  # row, col indexes

BOARD_SIZE = 10

# cell states of a player's own board
EMPTY, SHIP, MISS, HIT = 0, 1, 2, 3
# the opponent only ever sees these
UNKNOWN = EMPTY

PLACEMENT, BATTLE, GAME_OVER = 'placement', 'battle', 'game_over'
HORIZONTAL, VERTICAL = 'horizontal', 'vertical'
EASY, MEDIUM, HARD = 'easy', 'medium', 'hard'
DIFFICULTIES = (EASY, MEDIUM, HARD)
MODE_PVP, MODE_AI = 'pvp', 'ai'
PLAYERS = (1, 2)


@dataclass(frozen=True)
class ShipSpec:
    name: str
    size: int


FLEET: Tuple[ShipSpec, ...] = (
    ShipSpec('Carrier', 5),
    ShipSpec('Battleship', 4),
    ShipSpec('Cruiser', 3),
    ShipSpec('Submarine', 3),
    ShipSpec('Destroyer', 2),
)
FLEET_CELLS = sum(ship.size for ship in FLEET)


def _empty_grid() -> List[List[int]]:
    return [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def normalize_difficulty(value: object) -> str:
    """Return a known difficulty, falling back to ``MEDIUM``."""
    if isinstance(value, str) and value.strip().lower() in DIFFICULTIES:
        return value.strip().lower()
    return MEDIUM


def other_player(player: int) -> int:
    return 2 if player == 1 else 1


@dataclass
class Board:
    grid: List[List[int]] = field(default_factory=_empty_grid)
    # cells to highlight (last shot) for rendering
    highlight: List[Coord] = field(default_factory=list)

    def has_ships(self) -> bool:
        return any(SHIP in row for row in self.grid)


@dataclass
class ShotRecord:
    player: int
    coord: Coord
    result: str


@dataclass
class Game:
    game_id: str
    chat_id: int
    mode: str = MODE_AI
    difficulty: str = MEDIUM
    phase: str = PLACEMENT
    current_player: int = 1
    created_at: str = field(default_factory=lambda: datetime.utcnow().isoformat())
    boards: Dict[int, Board] = field(
        default_factory=lambda: {p: Board() for p in PLAYERS}
    )
    ship_index: int = 0
    orientation: str = HORIZONTAL
    winner: Optional[int] = None
    # session tally, survives resets
    scores: Dict[int, int] = field(default_factory=lambda: {p: 0 for p in PLAYERS})
    total_games: int = 0
    last_action: str = ''
    last_shot: Optional[ShotRecord] = None
    # bumped on every reset so that delayed computer moves can detect staleness
    round: int = 0

    @staticmethod
    def new(chat_id: int, mode: str = MODE_AI, difficulty: str = MEDIUM) -> 'Game':
        return Game(
            game_id=uuid.uuid4().hex,
            chat_id=chat_id,
            mode=mode,
            difficulty=normalize_difficulty(difficulty),
        )

    @property
    def current_ship(self) -> Optional[ShipSpec]:
        if self.phase != PLACEMENT or self.ship_index >= len(FLEET):
            return None
        return FLEET[self.ship_index]

    @property
    def vs_computer(self) -> bool:
        return self.mode == MODE_AI
