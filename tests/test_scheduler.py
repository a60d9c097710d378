import asyncio

from models import MODE_AI, MODE_PVP
from logic import game as engine
from logic.scheduler import ComputerMoveScheduler


def _computer_turn_game():
    game = engine.new_game(1, MODE_AI)
    engine.randomize_fleet(game, 1)
    engine.attack(game, 2, 9, 9)
    return game


def test_schedule_runs_callback_after_delay():
    async def run():
        game = _computer_turn_game()
        delays = []

        async def fake_sleep(delay):
            delays.append(delay)

        calls = []

        async def move(g):
            calls.append(g.game_id)

        scheduler = ComputerMoveScheduler(sleep=fake_sleep)
        task = scheduler.schedule(game, move, delay=1.5)
        assert scheduler.is_pending(game.game_id)
        await task
        assert delays == [1.5]
        assert calls == [game.game_id]
        assert not scheduler.is_pending(game.game_id)

    asyncio.run(run())


def test_only_one_move_in_flight():
    async def run():
        game = _computer_turn_game()
        gate = asyncio.Event()
        calls = []

        async def fake_sleep(delay):
            await gate.wait()

        async def move(g):
            calls.append(1)

        scheduler = ComputerMoveScheduler(sleep=fake_sleep)
        first = scheduler.schedule(game, move, delay=1)
        assert scheduler.schedule(game, move, delay=1) is None
        await asyncio.sleep(0)
        assert scheduler.schedule(game, move, delay=1) is None
        gate.set()
        await first
        assert calls == [1]
        assert not scheduler.is_pending(game.game_id)

    asyncio.run(run())


def test_slot_is_free_while_move_is_announced():
    async def run():
        game = _computer_turn_game()
        gate = asyncio.Event()
        calls = []

        async def move(g):
            # the attack lands first, then the slow announcement
            engine.play_computer_move(g)
            calls.append(1)
            await gate.wait()

        scheduler = ComputerMoveScheduler()
        first = scheduler.schedule(game, move)
        await asyncio.sleep(0)
        assert calls == [1]
        assert not scheduler.is_pending(game.game_id)

        # the human answers before the announcement is out
        engine.attack(game, 2, 9, 8)
        second = scheduler.schedule(game, move)
        assert second is not None
        await asyncio.sleep(0)
        assert calls == [1, 1]

        gate.set()
        await asyncio.gather(first, second)
        assert not scheduler.is_pending(game.game_id)
        assert game.current_player == 1

    asyncio.run(run())


def test_cancel_clears_guard_and_drops_move():
    async def run():
        game = _computer_turn_game()
        calls = []

        async def move(g):
            calls.append(1)

        scheduler = ComputerMoveScheduler()
        task = scheduler.schedule(game, move, delay=10)
        await asyncio.sleep(0)
        assert scheduler.cancel(game.game_id)
        assert not scheduler.is_pending(game.game_id)
        await asyncio.gather(task, return_exceptions=True)
        assert task.cancelled()
        assert calls == []
        assert not scheduler.cancel(game.game_id)

    asyncio.run(run())


def test_stale_move_is_discarded_after_reset():
    async def run():
        game = _computer_turn_game()
        calls = []

        async def fake_sleep(delay):
            # the round ends while the computer is thinking
            engine.reset_game(game)

        async def move(g):
            calls.append(1)

        scheduler = ComputerMoveScheduler(sleep=fake_sleep)
        await scheduler.schedule(game, move, delay=1)
        assert calls == []
        assert not scheduler.is_pending(game.game_id)

    asyncio.run(run())


def test_failing_move_releases_guard():
    async def run():
        game = _computer_turn_game()

        async def move(g):
            raise RuntimeError("boom")

        scheduler = ComputerMoveScheduler()
        task = scheduler.schedule(game, move)
        results = await asyncio.gather(task, return_exceptions=True)
        assert isinstance(results[0], RuntimeError)
        await asyncio.sleep(0)
        assert not scheduler.is_pending(game.game_id)

    asyncio.run(run())


def test_move_skipped_when_not_computer_turn():
    async def run():
        game = engine.new_game(1, MODE_PVP)
        engine.randomize_fleet(game, 1)
        engine.randomize_fleet(game, 2)
        engine.attack(game, 2, 9, 9)
        calls = []

        async def move(g):
            calls.append(1)

        scheduler = ComputerMoveScheduler()
        await scheduler.schedule(game, move)
        assert calls == []

    asyncio.run(run())
