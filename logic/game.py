"""Game engine: placement, turns, attacks and win detection.

All functions mutate the :class:`models.Game` passed to them.  Rejected
operations raise a :class:`logic.errors.GameError` subclass before touching
any state, so callers may simply report the message and carry on.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Tuple

from models import (
    BATTLE,
    FLEET,
    GAME_OVER,
    HORIZONTAL,
    MEDIUM,
    MODE_AI,
    PLACEMENT,
    PLAYERS,
    VERTICAL,
    Board,
    Game,
    ShipSpec,
    ShotRecord,
    other_player,
)
from logic import placement
from logic.battle import HIT, MISS, REPEAT, apply_shot, attack_view, in_bounds
from logic.bot_targeting import auto_place_fleet, plan_attack
from logic.errors import InvalidCoordinate, PlacementInvalid, WrongPhase

Coord = Tuple[int, int]

logger = logging.getLogger(__name__)


def new_game(chat_id: int, mode: str = MODE_AI, difficulty: str = MEDIUM) -> Game:
    game = Game.new(chat_id, mode, difficulty)
    logger.info("Created game %s in chat %s (mode=%s, difficulty=%s)",
                game.game_id, chat_id, game.mode, game.difficulty)
    return game


def _require_phase(game: Game, phase: str) -> None:
    if game.phase != phase:
        raise WrongPhase(f"Not allowed during the {game.phase} phase")


def _require_placing(game: Game, player: int) -> None:
    _require_phase(game, PLACEMENT)
    if player != game.current_player:
        raise WrongPhase(f"Player {game.current_player} is placing ships now")


def _check_coord(coord: Coord) -> None:
    if not in_bounds(coord):
        raise InvalidCoordinate(f"Coordinate {coord} is outside the board")


def _finish_placement(game: Game, player: int) -> None:
    if player == 1:
        if game.mode == MODE_AI:
            game.boards[2] = auto_place_fleet()
            logger.info("Computer fleet placed for game %s", game.game_id)
            _start_battle(game)
        else:
            game.current_player = 2
            game.ship_index = 0
            game.last_action = "Player 2, deploy your fleet"
    else:
        _start_battle(game)


def _start_battle(game: Game) -> None:
    game.phase = BATTLE
    game.current_player = 1
    game.ship_index = 0
    game.last_action = "Player 1's turn to attack!"
    logger.info("Game %s entered battle", game.game_id)


def place_ship(
    game: Game,
    player: int,
    row: int,
    col: int,
    ship: Optional[ShipSpec] = None,
    orientation: Optional[str] = None,
) -> List[Coord]:
    """Place the next catalog ship of ``player`` at ``(row, col)``."""
    _require_placing(game, player)
    expected = FLEET[game.ship_index]
    if ship is not None and ship != expected:
        raise PlacementInvalid(f"Next ship to place is the {expected.name}")
    cells = placement.place_ship(
        game.boards[player], row, col, expected.size, orientation or game.orientation
    )
    logger.debug("Player %s placed %s at %s", player, expected.name, cells)
    game.ship_index += 1
    if game.ship_index >= len(FLEET):
        _finish_placement(game, player)
    return cells


def randomize_fleet(game: Game, player: int) -> Board:
    """Replace ``player``'s board with a random fleet and finish placement."""
    _require_placing(game, player)
    board = placement.random_fleet()
    game.boards[player] = board
    _finish_placement(game, player)
    return board


def toggle_orientation(game: Game) -> str:
    _require_phase(game, PLACEMENT)
    game.orientation = VERTICAL if game.orientation == HORIZONTAL else HORIZONTAL
    return game.orientation


def attack(game: Game, defender: int, row: int, col: int) -> str:
    """Fire at ``defender``'s board and return ``HIT``, ``MISS`` or ``REPEAT``.

    ``REPEAT`` means the cell was already resolved; nothing changes, not even
    the turn.  Sinking the last ship ends the game in favour of the attacker.
    """
    _require_phase(game, BATTLE)
    if defender not in PLAYERS or defender == game.current_player:
        raise WrongPhase(f"It is player {game.current_player}'s turn to attack")
    coord = (row, col)
    _check_coord(coord)

    attacker = game.current_player
    board = game.boards[defender]
    result = apply_shot(board, coord)
    if result == REPEAT:
        return result

    for key in PLAYERS:
        if key != defender:
            game.boards[key].highlight = []
    game.last_shot = ShotRecord(player=attacker, coord=coord, result=result)
    game.last_action = "Hit!" if result == HIT else "Miss!"
    logger.debug("Player %s fired at %s: %s", attacker, coord, result)

    if not board.has_ships():
        game.winner = attacker
        game.phase = GAME_OVER
        game.scores[attacker] += 1
        game.total_games += 1
        game.last_action = f"Player {attacker} wins!"
        logger.info("Game %s over, player %s wins", game.game_id, attacker)
    else:
        game.current_player = other_player(attacker)
    return result


def reset_game(game: Game) -> None:
    """Start a fresh round; the session scores are kept."""
    game.boards = {p: Board() for p in PLAYERS}
    game.phase = PLACEMENT
    game.current_player = 1
    game.ship_index = 0
    game.orientation = HORIZONTAL
    game.winner = None
    game.last_action = ''
    game.last_shot = None
    game.round += 1
    logger.info("Game %s reset (round %s)", game.game_id, game.round)


def own_board(game: Game, player: int) -> Board:
    return game.boards[player]


def opponent_view(game: Game, player: int) -> List[List[int]]:
    """What ``player`` knows about the enemy board."""
    return attack_view(game.boards[other_player(player)])


def status(game: Game) -> Dict[str, object]:
    return {
        "phase": game.phase,
        "current_player": game.current_player,
        "winner": game.winner,
        "scores": dict(game.scores),
        "total_games": game.total_games,
        "orientation": game.orientation,
        "ship": game.current_ship,
        "last_action": game.last_action,
    }


def computer_on_turn(game: Game) -> bool:
    return game.mode == MODE_AI and game.phase == BATTLE and game.current_player == 2


def play_computer_move(
    game: Game, rng: Optional[random.Random] = None
) -> Optional[Tuple[Coord, str]]:
    """Let the computer (player 2) pick a target and fire at player 1."""
    if not computer_on_turn(game):
        raise WrongPhase("It is not the computer's turn")
    target = plan_attack(opponent_view(game, 2), game.difficulty, rng)
    if target is None:
        return None
    result = attack(game, 1, *target)
    return target, result


__all__ = [
    "HIT",
    "MISS",
    "REPEAT",
    "attack",
    "computer_on_turn",
    "new_game",
    "opponent_view",
    "own_board",
    "place_ship",
    "play_computer_move",
    "randomize_fleet",
    "reset_game",
    "status",
    "toggle_orientation",
]
