from gridarcade import GameMode, GameState, GameStatus, TickDriver
from gridarcade.config import ArcadeConfig
from gridarcade.utils import tick_interval_ms


def test_interval_shrinks_with_level_and_is_floored():
    assert tick_interval_ms(GameMode.PUZZLE, 1) == 800
    assert tick_interval_ms(GameMode.PUZZLE, 2) < tick_interval_ms(GameMode.PUZZLE, 1)
    assert tick_interval_ms(GameMode.RECIPE, 8) == 100
    assert tick_interval_ms(GameMode.COLLECTOR, 30) == 100


def test_tunneling_interval_is_fixed():
    assert tick_interval_ms(GameMode.TUNNELING, 1) == 200
    assert tick_interval_ms(GameMode.TUNNELING, 12) == 200


def test_driver_ticks_once_per_elapsed_interval():
    state = GameState(config=ArcadeConfig(random_seed=0))
    state.start(GameMode.PUZZLE)
    driver = TickDriver(state)
    assert driver.advance(799) == 0
    assert state.active.position == (4, 0)
    assert driver.advance(1) == 1
    assert state.active.position == (4, 1)
    assert driver.advance(1600) == 2
    assert state.active.position == (4, 3)


def test_driver_resets_when_not_playing():
    state = GameState(config=ArcadeConfig(random_seed=0))
    state.start(GameMode.PUZZLE)
    driver = TickDriver(state)
    driver.advance(500)
    state.pause()
    assert driver.advance(5000) == 0
    assert driver.drop_accum == 0
    state.resume()
    assert driver.advance(700) == 0
    assert state.status is GameStatus.PLAYING
