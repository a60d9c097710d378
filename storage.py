"""In-memory registry of running games, one per chat.

Games live only as long as the process does.
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, List, Optional

from models import MODE_AI, MEDIUM, Game, normalize_difficulty
from logic.game import new_game


logger = logging.getLogger(__name__)

_games: Dict[int, Game] = {}
_lock = Lock()


def create_game(chat_id: int, mode: str = MODE_AI, difficulty: str = MEDIUM) -> Game:
    game = new_game(chat_id, mode, normalize_difficulty(difficulty))
    with _lock:
        _games[chat_id] = game
    return game


def get_game(chat_id: int) -> Optional[Game]:
    with _lock:
        return _games.get(chat_id)


def save_game(game: Game) -> None:
    with _lock:
        _games[game.chat_id] = game


def list_games() -> List[Game]:
    with _lock:
        return list(_games.values())


def clear() -> None:
    with _lock:
        _games.clear()
    logger.debug("Cleared game registry")
