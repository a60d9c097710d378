from __future__ import annotations

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from models import DIFFICULTIES, MODE_AI, MODE_PVP


def mode_keyboard() -> InlineKeyboardMarkup:
    """Return the inline keyboard for choosing the game mode.

    Callback data is ``mode|pvp`` for a two-player game in this chat or
    ``mode|ai|<difficulty>`` for a game against the computer.
    """
    keyboard: list[list[InlineKeyboardButton]] = [
        [InlineKeyboardButton("1 vs 1", callback_data=f"mode|{MODE_PVP}")],
        [
            InlineKeyboardButton(f"vs AI: {level.capitalize()}", callback_data=f"mode|{MODE_AI}|{level}")
            for level in DIFFICULTIES
        ],
    ]
    return InlineKeyboardMarkup(keyboard)


def parse_mode_callback(data: str) -> tuple[str, str | None] | None:
    parts = (data or "").split("|")
    if len(parts) < 2 or parts[0] != "mode":
        return None
    if parts[1] == MODE_PVP:
        return MODE_PVP, None
    if parts[1] == MODE_AI:
        return MODE_AI, parts[2] if len(parts) > 2 else None
    return None
