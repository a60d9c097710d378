from __future__ import annotations
from telegram import Update
from telegram.ext import ContextTypes

import logging

import storage
from models import DIFFICULTIES, MODE_AI, MODE_PVP, Game, normalize_difficulty
from logic.errors import FleetPlacementError, GameError
from logic.game import randomize_fleet, reset_game, toggle_orientation
from app.config import DEFAULT_DIFFICULTY, DEFAULT_MODE
from .computer import cancel_computer_move
from .keyboards import mode_keyboard, parse_mode_callback
from .messages import scoreboard_text, send_state


logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Battleship on a 10×10 grid.\n"
    "/newgame [pvp|ai] [easy|medium|hard] - start a game in this chat\n"
    "/rotate - switch ship orientation\n"
    "/auto - place the whole fleet at random\n"
    "/board - show the boards\n"
    "/score - show the scoreboard\n"
    "/reset - restart, keeping the score\n"
    "Send a coordinate like B7 to place a ship or to fire."
)

NO_GAME_TEXT = "No game in this chat. Use /newgame to start."


def _args(context: ContextTypes.DEFAULT_TYPE) -> list[str]:
    return [a.strip().lower() for a in (getattr(context, "args", None) or [])]


def parse_game_args(args: list[str]) -> tuple[str, str]:
    mode = DEFAULT_MODE
    difficulty = DEFAULT_DIFFICULTY
    for arg in args:
        if arg in (MODE_PVP, "1v1"):
            mode = MODE_PVP
        elif arg in (MODE_AI, "1vai"):
            mode = MODE_AI
        elif arg in DIFFICULTIES:
            mode = MODE_AI
            difficulty = arg
    return mode, difficulty


def start_game(chat_id: int, mode: str, difficulty: str) -> Game:
    """Create the chat game or restart the existing one in a new mode.

    Restarting keeps the session scores.
    """
    game = storage.get_game(chat_id)
    if game is None:
        return storage.create_game(chat_id, mode, difficulty)
    cancel_computer_move(game)
    reset_game(game)
    game.mode = mode
    game.difficulty = normalize_difficulty(difficulty)
    storage.save_game(game)
    return game


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(HELP_TEXT)


async def newgame(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    args = _args(context)
    if not args:
        await update.message.reply_text("Choose a game mode:", reply_markup=mode_keyboard())
        return
    mode, difficulty = parse_game_args(args)
    game = start_game(update.effective_chat.id, mode, difficulty)
    await send_state(context, game, "New game started.")


async def choose_mode(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    await query.answer()
    parsed = parse_mode_callback(query.data)
    if parsed is None:
        logger.info("Ignoring unknown mode callback %r", query.data)
        return
    mode, difficulty = parsed
    chat_id = query.message.chat.id
    game = start_game(chat_id, mode, difficulty or DEFAULT_DIFFICULTY)
    await send_state(context, game, "New game started.")


async def rotate(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    game = storage.get_game(update.effective_chat.id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return
    try:
        orientation = toggle_orientation(game)
    except GameError as exc:
        await update.message.reply_text(str(exc))
        return
    storage.save_game(game)
    await update.message.reply_text(f"Orientation: {orientation}")


async def auto(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    game = storage.get_game(update.effective_chat.id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return
    try:
        randomize_fleet(game, game.current_player)
    except GameError as exc:
        await update.message.reply_text(str(exc))
        return
    except FleetPlacementError:
        logger.exception("Random fleet placement failed in chat %s", game.chat_id)
        await update.message.reply_text("Could not place the fleet, please try again.")
        return
    storage.save_game(game)
    await send_state(context, game, "Fleet placed.")


async def reset(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    game = storage.get_game(update.effective_chat.id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return
    cancel_computer_move(game)
    reset_game(game)
    storage.save_game(game)
    await send_state(context, game, "Game reset.")


async def score(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    game = storage.get_game(update.effective_chat.id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return
    await update.message.reply_text(scoreboard_text(game))


async def board(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    game = storage.get_game(update.effective_chat.id)
    if game is None:
        await update.message.reply_text(NO_GAME_TEXT)
        return
    await send_state(context, game)
