from __future__ import annotations

import asyncio
import logging

from telegram.ext import ContextTypes

from models import BATTLE, GAME_OVER, MODE_AI, PLACEMENT, Game, other_player
from logic.battle import HIT, MISS
from logic.game import own_board, status
from logic.parser import format_coord
from logic.render import render_board_enemy, render_board_own
from app.config import SHOW_OWN_BOARD


logger = logging.getLogger(__name__)

RESULT_LABELS = {HIT: "Hit!", MISS: "Miss!"}

# headline for the outcome of the last shot
ACTION_HEADLINES = {"Hit!": "HIT! Target destroyed", "Miss!": "MISS! No contact"}


def player_label(game: Game, player: int) -> str:
    if game.mode == MODE_AI and player == 2:
        return "Computer"
    return f"Player {player}"


def shot_line(game: Game, player: int, coord, result: str) -> str:
    return f"{player_label(game, player)} fires at {format_coord(coord)}: {RESULT_LABELS.get(result, result)}"


def scoreboard_text(game: Game) -> str:
    return (
        f"{player_label(game, 1)}: {game.scores[1]} | "
        f"{player_label(game, 2)}: {game.scores[2]} | "
        f"Games played: {game.total_games}"
    )


def status_text(game: Game) -> str:
    if game.phase == PLACEMENT:
        ship = game.current_ship
        lines = [f"{player_label(game, game.current_player)}, deploy your fleet"]
        if ship is not None:
            lines.append(
                f"Next: {ship.name} ({ship.size} cells), {game.orientation}. "
                "Send the bow coordinate like B7, /rotate to turn it or /auto to place the whole fleet."
            )
        return "\n".join(lines)
    if game.phase == BATTLE:
        lines = []
        headline = ACTION_HEADLINES.get(status(game)["last_action"])
        if headline:
            lines.append(headline)
        if game.mode == MODE_AI and game.current_player == 2:
            lines.append("Computer is thinking...")
        else:
            lines.append(f"{player_label(game, game.current_player)}'s turn - select target")
        return "\n".join(lines)
    if game.phase == GAME_OVER and game.winner is not None:
        return f"{player_label(game, game.winner)} victorious!\n{scoreboard_text(game)}\nSend /reset to play again."
    return ""


def _viewer(game: Game) -> int:
    # against the computer the human always looks at the boards
    if game.mode == MODE_AI:
        return 1
    return game.current_player


def board_text(game: Game) -> str:
    viewer = _viewer(game)
    if game.phase == PLACEMENT:
        return f"Your fleet:\n{render_board_own(own_board(game, game.current_player))}"
    parts = [f"Enemy waters:\n{render_board_enemy(game.boards[other_player(viewer)])}"]
    if SHOW_OWN_BOARD:
        parts.append(f"Your fleet:\n{render_board_own(own_board(game, viewer))}")
    return "\n".join(parts)


async def send_state(
    context: ContextTypes.DEFAULT_TYPE,
    game: Game,
    message: str = "",
) -> None:
    """Send the boards, the result line and the status as one message."""
    lines = [board_text(game)]
    message = message.strip()
    if message:
        lines.append(message)
    status = status_text(game)
    if status:
        lines.append(status)
    await context.bot.send_message(game.chat_id, "\n".join(lines), parse_mode="HTML")


async def safe_send_state(
    context: ContextTypes.DEFAULT_TYPE,
    game: Game,
    message: str = "",
) -> None:
    try:
        await send_state(context, game, message)
    except asyncio.CancelledError:
        raise
    except Exception:
        logger.exception("Failed to send state to chat %s", game.chat_id)
