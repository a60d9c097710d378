from __future__ import annotations
import logging
from telegram import Update
from telegram.ext import ContextTypes

import storage
from models import BATTLE, GAME_OVER, PLACEMENT, other_player
from logic.battle import REPEAT
from logic.errors import GameError
from logic.game import attack, computer_on_turn, place_ship
from logic.parser import format_coord, parse_coord
from .commands import NO_GAME_TEXT
from .computer import schedule_computer_move
from .messages import send_state, shot_line


logger = logging.getLogger(__name__)


def _log_router_skip(reason: str, *, game, chat_id: int, text_raw: str) -> None:
    context = {
        "chat_id": chat_id,
        "text_raw": text_raw,
        "game_id": getattr(game, "game_id", None),
        "phase": getattr(game, "phase", None),
        "current_player": getattr(game, "current_player", None),
    }
    logger.info("%s | context=%s", reason, context)


async def router_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route a plain text coordinate to placement or to an attack."""
    text_raw = update.message.text or ""
    chat_id = update.effective_chat.id
    game = storage.get_game(chat_id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return

    coord = parse_coord(text_raw)
    if coord is None:
        _log_router_skip("Unparsable coordinate", game=game, chat_id=chat_id, text_raw=text_raw)
        await update.message.reply_text("Send a coordinate like B7 (columns A-J, rows 1-10).")
        return

    if game.phase == GAME_OVER:
        await update.message.reply_text("Game over. Send /reset to play again.")
        return

    if game.phase == PLACEMENT:
        ship = game.current_ship
        try:
            place_ship(game, game.current_player, *coord)
        except GameError as exc:
            await update.message.reply_text(str(exc))
            return
        storage.save_game(game)
        await send_state(context, game, f"{ship.name} placed at {format_coord(coord)}.")
        return

    if game.phase == BATTLE:
        if computer_on_turn(game):
            _log_router_skip("Move during computer turn", game=game, chat_id=chat_id, text_raw=text_raw)
            await update.message.reply_text("Wait for the computer's move.")
            return
        attacker = game.current_player
        try:
            result = attack(game, other_player(attacker), *coord)
        except GameError as exc:
            await update.message.reply_text(str(exc))
            return
        if result == REPEAT:
            await update.message.reply_text("This cell was already attacked, choose another one.")
            return
        storage.save_game(game)
        await send_state(context, game, shot_line(game, attacker, coord, result))
        if computer_on_turn(game):
            schedule_computer_move(context, game)
