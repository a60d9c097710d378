from __future__ import annotations

import asyncio
import logging
from typing import Optional

from telegram.ext import ContextTypes

import storage
from models import Game
from logic.game import computer_on_turn, play_computer_move
from logic.scheduler import ComputerMoveScheduler
from app.config import ai_delay
from .messages import safe_send_state, shot_line


logger = logging.getLogger(__name__)

scheduler = ComputerMoveScheduler()


async def _computer_move(context: ContextTypes.DEFAULT_TYPE, game: Game) -> None:
    # applied before the first await, the scheduler frees the slot here
    outcome = play_computer_move(game)
    if outcome is None:
        logger.warning("Computer found no target in game %s", game.game_id)
        return
    coord, result = outcome
    storage.save_game(game)
    await safe_send_state(context, game, shot_line(game, 2, coord, result))


def schedule_computer_move(
    context: ContextTypes.DEFAULT_TYPE, game: Game
) -> Optional[asyncio.Task]:
    """Queue the computer's reply after its thinking delay."""
    if not computer_on_turn(game):
        return None

    async def _move(g: Game) -> None:
        await _computer_move(context, g)

    return scheduler.schedule(game, _move, ai_delay(game.difficulty))


def cancel_computer_move(game: Game) -> bool:
    return scheduler.cancel(game.game_id)
