from collections import deque

from gridarcade.catalog import CellType, GameMode, GameStatus
from gridarcade.config import ArcadeConfig
from gridarcade.game_state import GameState


def _collector(seed=6):
    state = GameState(config=ArcadeConfig(random_seed=seed))
    state.start(GameMode.COLLECTOR)
    return state


def _food(state):
    return state.board.cells_of(CellType.FOOD)


def test_start_places_head_body_and_food():
    state = _collector()
    assert state.active.position == (5, 10)
    assert state.active.facing == (0, -1)
    assert list(state.snake_body) == [(5, 11), (5, 12)]
    food = _food(state)
    assert len(food) == 1
    assert food[0] not in {(5, 10), (5, 11), (5, 12)}


def test_reversal_is_rejected():
    state = _collector()
    assert state.move(0, 1) is False
    assert state.active.facing == (0, -1)
    assert state.active.next_facing == (0, -1)


def test_turn_applies_on_next_tick():
    state = _collector()
    state.board.clear()
    assert state.move(1, 0) is True
    assert state.active.position == (5, 10)
    assert state.active.facing == (0, -1)
    state.tick()
    assert state.active.position == (6, 10)
    assert state.active.facing == (1, 0)
    assert list(state.snake_body) == [(5, 10), (5, 11)]


def test_eating_grows_body_and_relocates_food():
    for seed in range(10):
        state = _collector(seed)
        state.board.clear()
        state.board.set_cell(5, 9, CellType.FOOD)
        state.tick()
        assert state.active.position == (5, 9)
        assert list(state.snake_body) == [(5, 10), (5, 11), (5, 12)]
        assert state.score == 50
        food = _food(state)
        assert len(food) == 1
        assert food[0] != (5, 9)
        assert food[0] not in state.snake_body


def test_leaving_grid_ends_game():
    state = _collector()
    state.board.clear()
    state.active.position = (5, 0)
    state.snake_body = deque([(5, 1), (5, 2)])
    state.tick()
    assert state.status is GameStatus.GAME_OVER
    assert state.score == 0


def test_running_into_body_ends_game():
    state = _collector()
    state.board.clear()
    state.snake_body = deque([(4, 10), (4, 9), (5, 9)])
    state.tick()
    assert state.status is GameStatus.GAME_OVER


def test_act_and_hard_drop_are_no_ops():
    state = _collector()
    state.act()
    state.hard_drop()
    assert state.active.position == (5, 10)
    assert list(state.snake_body) == [(5, 11), (5, 12)]
