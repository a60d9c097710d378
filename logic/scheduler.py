"""Delayed computer moves with a single in-flight slot per game."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional

from models import Game
from logic.game import computer_on_turn


logger = logging.getLogger(__name__)


class ComputerMoveScheduler:
    """Run at most one pending computer move per game.

    A scheduled move captures the game ``round`` as its cancellation token:
    if the game was reset or finished, or the turn moved on while the task
    was sleeping, the move is dropped instead of being applied to a fresh
    board.

    The slot is held only while the move is waiting. The callback must apply
    its attack before its first ``await``; announcing it runs outside the
    slot, so the next computer turn can be scheduled meanwhile.
    """

    def __init__(self, sleep: Callable[[float], Awaitable[object]] = asyncio.sleep) -> None:
        self._sleep = sleep
        self._pending: Dict[str, asyncio.Task] = {}

    def is_pending(self, game_id: str) -> bool:
        return game_id in self._pending

    def schedule(
        self,
        game: Game,
        callback: Callable[[Game], Awaitable[None]],
        delay: float = 0.0,
    ) -> Optional[asyncio.Task]:
        if game.game_id in self._pending:
            logger.warning("Computer move already pending for game %s", game.game_id)
            return None
        token = game.round
        task = asyncio.create_task(self._run(game, token, callback, delay))
        self._pending[game.game_id] = task
        task.add_done_callback(lambda t, gid=game.game_id: self._release(gid, t))
        return task

    def cancel(self, game_id: str) -> bool:
        task = self._pending.pop(game_id, None)
        if task is None:
            return False
        task.cancel()
        logger.info("Cancelled pending computer move for game %s", game_id)
        return True

    def _free(self, game_id: str, task: Optional[asyncio.Task]) -> None:
        if task is not None and self._pending.get(game_id) is task:
            del self._pending[game_id]

    def _release(self, game_id: str, task: asyncio.Task) -> None:
        self._free(game_id, task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "Computer move for game %s failed", game_id, exc_info=task.exception()
            )

    async def _run(
        self,
        game: Game,
        token: int,
        callback: Callable[[Game], Awaitable[None]],
        delay: float,
    ) -> None:
        if delay:
            await self._sleep(delay)
        if game.round != token or not computer_on_turn(game):
            logger.warning("Discarding stale computer move for game %s", game.game_id)
            return
        self._free(game.game_id, asyncio.current_task())
        await callback(game)


__all__ = ["ComputerMoveScheduler"]
