"""Tests for the real-time GameDriver."""

from __future__ import annotations

import asyncio

import pytest

from snake_tab.config import GameConfig
from snake_tab.driver import GameDriver
from snake_tab.engine import GameEngine, GameState, Phase
from snake_tab.score_store import JsonScoreStore, MemoryScoreStore
from snake_tab.snake import Direction, Position

# Long enough that the tick task never fires during a test that steps manually.
_MANUAL = 60.0


def _driver(**kwargs) -> GameDriver:
    kwargs.setdefault("engine", GameEngine(seed=0))
    kwargs.setdefault("tick_interval", _MANUAL)
    return GameDriver(**kwargs)


def _at_right_wall(driver: GameDriver, score: int) -> None:
    driver.engine.state = GameState(
        snake=(Position(19, 10), Position(18, 10), Position(17, 10)),
        food=Position(0, 0),
        score=score,
        is_playing=True,
    )


async def _wait_for(predicate, timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        assert loop.time() < deadline, "condition not reached in time"
        await asyncio.sleep(0.005)


class TestDriverInit:
    def test_invalid_tick_interval(self):
        with pytest.raises(ValueError, match="positive"):
            GameDriver(tick_interval=0)

    def test_defaults(self):
        driver = GameDriver()
        assert driver.state.phase is Phase.IDLE
        assert driver.high_score == 0
        assert driver.tick_interval == pytest.approx(0.15)
        assert not driver.ticking

    def test_from_config_uses_json_store(self, tmp_path):
        path = tmp_path / "best.json"
        JsonScoreStore(path).write(90)
        cfg = GameConfig(grid_size=10, tick_interval_ms=40, high_score_path=str(path))
        driver = GameDriver.from_config(cfg)
        assert driver.high_score == 90
        assert driver.engine.grid.size == 10
        assert driver.tick_interval == pytest.approx(0.04)


class TestDriverLifecycle:
    @pytest.mark.asyncio
    async def test_start_begins_ticking(self):
        driver = _driver()
        driver.start()
        assert driver.state.phase is Phase.RUNNING
        assert driver.ticking
        driver.close()
        assert not driver.ticking

    @pytest.mark.asyncio
    async def test_reset_stops_ticking(self):
        driver = _driver()
        driver.start()
        driver.reset()
        assert driver.state.phase is Phase.IDLE
        assert not driver.ticking

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_task(self):
        driver = _driver()
        driver.start()
        task = driver._task
        driver.start()
        assert driver._task is task
        driver.close()

    @pytest.mark.asyncio
    async def test_game_over_stops_ticking(self):
        driver = _driver()
        driver.start()
        _at_right_wall(driver, score=0)
        result = driver.advance()
        assert result.game_over
        assert not driver.ticking
        assert driver.state.phase is Phase.TERMINATED

    @pytest.mark.asyncio
    async def test_tick_loop_moves_snake(self):
        driver = _driver(tick_interval=0.01)
        driver.start()
        await _wait_for(lambda: driver.state.head != (10, 10))
        assert driver.state.head.x > 10
        driver.close()

    @pytest.mark.asyncio
    async def test_tick_loop_runs_until_game_over(self):
        driver = _driver(tick_interval=0.005)
        driver.start()
        await _wait_for(lambda: driver.state.is_game_over)
        await asyncio.sleep(0.02)
        assert not driver.ticking

    @pytest.mark.asyncio
    async def test_cancelled_loop_does_not_tick(self):
        driver = _driver(tick_interval=0.01)
        driver.start()
        driver.reset()
        before = driver.state
        await asyncio.sleep(0.05)
        assert driver.state is before


class TestDriverHighScore:
    @pytest.mark.asyncio
    async def test_new_best_is_written(self):
        store = MemoryScoreStore(50)
        driver = _driver(store=store)
        driver.start()
        _at_right_wall(driver, score=80)
        driver.advance()
        assert store.read() == 80
        assert driver.high_score == 80

        state = driver.reset()
        assert state.phase is Phase.IDLE
        assert state.score == 0
        assert store.read() == 80

    @pytest.mark.asyncio
    async def test_lower_score_leaves_best(self):
        store = MemoryScoreStore(50)
        driver = _driver(store=store)
        driver.start()
        _at_right_wall(driver, score=30)
        driver.advance()
        assert store.read() == 50

    @pytest.mark.asyncio
    async def test_equal_score_is_not_rewritten(self):
        writes: list[int] = []

        class _Recording(MemoryScoreStore):
            def write(self, score: int) -> None:
                writes.append(score)
                super().write(score)

        driver = _driver(store=_Recording(40))
        driver.start()
        _at_right_wall(driver, score=40)
        driver.advance()
        assert writes == []


class TestDriverKeys:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("ArrowUp", Direction.UP),
            ("w", Direction.UP),
            ("W", Direction.UP),
            ("ArrowDown", Direction.DOWN),
            ("s", Direction.DOWN),
            ("S", Direction.DOWN),
        ],
    )
    @pytest.mark.asyncio
    async def test_vertical_keys(self, key, expected):
        driver = _driver()
        driver.start()
        assert driver.handle_key(key)
        assert driver.state.direction is expected
        driver.close()

    @pytest.mark.parametrize("key", ["ArrowLeft", "a", "A"])
    @pytest.mark.asyncio
    async def test_left_keys_map_to_left(self, key):
        driver = _driver()
        driver.start()
        driver.handle_key("ArrowUp")
        assert driver.handle_key(key)
        assert driver.state.direction is Direction.LEFT
        driver.close()

    @pytest.mark.parametrize("key", ["ArrowRight", "d", "D"])
    @pytest.mark.asyncio
    async def test_right_keys_map_to_right(self, key):
        driver = _driver()
        driver.start()
        driver.handle_key("ArrowDown")
        assert driver.handle_key(key)
        assert driver.state.direction is Direction.RIGHT
        driver.close()

    def test_unbound_keys(self):
        driver = _driver()
        assert not driver.handle_key("q")
        assert not driver.handle_key("Enter")
        assert not driver.handle_key("arrowup")

    def test_direction_ignored_while_idle(self):
        driver = _driver()
        assert driver.handle_key("ArrowUp")
        assert driver.state.direction is Direction.RIGHT

    @pytest.mark.asyncio
    async def test_space_starts_when_idle(self):
        driver = _driver()
        assert driver.handle_key(" ")
        assert driver.state.phase is Phase.RUNNING
        assert driver.ticking
        driver.close()

    @pytest.mark.asyncio
    async def test_space_ignored_while_running(self):
        driver = _driver()
        driver.start()
        before = driver.state
        assert driver.handle_key(" ")
        assert driver.state is before
        driver.close()

    @pytest.mark.asyncio
    async def test_space_resets_when_terminated(self):
        driver = _driver()
        driver.start()
        _at_right_wall(driver, score=10)
        driver.advance()
        assert driver.handle_key(" ")
        assert driver.state.phase is Phase.IDLE
        assert driver.state.score == 0
        assert not driver.ticking


class TestDriverNotifications:
    @pytest.mark.asyncio
    async def test_on_change_sees_each_transition(self):
        seen: list[Phase] = []
        driver = _driver(on_change=lambda s: seen.append(s.phase))
        driver.start()
        driver.change_direction(Direction.UP)
        driver.change_direction(Direction.DOWN)  # reversal, no change
        driver.advance()
        driver.reset()
        assert seen == [Phase.RUNNING, Phase.RUNNING, Phase.RUNNING, Phase.IDLE]

    def test_noop_transitions_are_silent(self):
        seen: list[GameState] = []
        driver = _driver(on_change=seen.append)
        driver.advance()
        driver.change_direction(Direction.UP)
        assert seen == []


class TestDriverFailures:
    def test_start_outside_event_loop_leaves_run_idle(self):
        driver = _driver()
        with pytest.raises(RuntimeError):
            driver.start()
        assert driver.state.phase is Phase.IDLE
        assert not driver.ticking

    @pytest.mark.asyncio
    async def test_failing_change_callback_ends_run(self):
        calls: list[Phase] = []

        def _flaky(state: GameState) -> None:
            calls.append(state.phase)
            if len(calls) == 2:
                raise RuntimeError("renderer failed")

        store = MemoryScoreStore(10)
        driver = _driver(store=store, on_change=_flaky, tick_interval=0.005)
        driver.engine.state = GameState(
            snake=(Position(10, 10), Position(9, 10), Position(8, 10)),
            food=Position(0, 0),
            score=30,
        )
        driver.start()
        await _wait_for(lambda: driver.state.is_game_over)
        assert not driver.ticking
        assert store.read() == 30
        assert calls[-1] is Phase.TERMINATED

        driver.handle_key(" ")
        assert driver.state.phase is Phase.IDLE
        driver.handle_key(" ")
        assert driver.state.phase is Phase.RUNNING
        assert driver.ticking
        driver.close()
