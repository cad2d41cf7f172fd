from gridarcade.board import CELL_VALUES
from gridarcade.catalog import SHAPES, TETROMINOES, CellType, GameMode, GameStatus
from gridarcade.config import ArcadeConfig
from gridarcade.entities import ActiveEntity
from gridarcade.game_state import GameState


def _puzzle(seed=1):
    state = GameState(config=ArcadeConfig(random_seed=seed))
    assert state.start(GameMode.PUZZLE)
    return state


def test_start_spawns_piece_at_top_center_with_preview():
    state = _puzzle()
    assert state.status is GameStatus.PLAYING
    assert state.active.type in TETROMINOES
    assert state.active.position == (4, 0)
    assert state.upcoming in TETROMINOES
    assert state.score == 0 and state.level == 1


def test_full_bottom_row_clears_and_scores_by_level():
    state = _puzzle()
    state.lines = 25
    state.level = 3
    state.board.grid[19, 2:] = CELL_VALUES[CellType.Z]
    state.active = ActiveEntity(CellType.O, position=(0, 18))

    state.tick()

    assert state.lines == 26
    assert state.level == 3
    assert state.score == 300
    assert state.board.get_cell(0, 19) is CellType.O
    assert state.board.get_cell(1, 19) is CellType.O
    assert all(state.board.get_cell(x, 19) is None for x in range(2, 10))
    assert not state.board.grid[:19].any()
    assert state.status is GameStatus.PLAYING
    assert state.active.position == (4, 0)


def test_level_follows_total_lines():
    state = _puzzle()
    state.lines = 9
    state.board.grid[19, 2:] = CELL_VALUES[CellType.Z]
    state.active = ActiveEntity(CellType.O, position=(0, 18))
    state.hard_drop()
    assert state.lines == 10
    assert state.level == 2
    assert state.score == 100


def test_rotation_rejected_when_result_collides():
    state = _puzzle()
    state.active = ActiveEntity(CellType.I, position=(3, 5))
    state.board.set_cell(5, 8, CellType.DIRT)
    state.act()
    assert state.active.shape.tolist() == SHAPES[CellType.I].tolist()

    state.board.set_cell(5, 8, None)
    state.act()
    assert [row[2] for row in state.active.shape.tolist()] == [1, 1, 1, 1]


def test_horizontal_move_blocked_by_wall_does_not_lock():
    state = _puzzle()
    state.active = ActiveEntity(CellType.O, position=(0, 5))
    assert state.move(-1, 0) is False
    assert state.active.position == (0, 5)
    assert not state.board.grid.any()
    assert state.move(1, 0) is True
    assert state.active.position == (1, 5)


def test_blocked_downward_move_locks_piece():
    state = _puzzle()
    state.active = ActiveEntity(CellType.O, position=(0, 18))
    assert state.move(0, 1) is False
    assert state.board.cells_of(CellType.O) == [(0, 18), (1, 18), (0, 19), (1, 19)]
    assert state.active.position == (4, 0)


def test_hard_drop_lands_on_floor_and_spawns_next():
    state = _puzzle()
    upcoming = state.upcoming
    state.active = ActiveEntity(CellType.O, position=(0, 0))
    state.hard_drop()
    assert state.board.cells_of(CellType.O) == [(0, 18), (1, 18), (0, 19), (1, 19)]
    assert state.active.type is upcoming


def test_gravity_run_ends_in_game_over_with_frozen_counters():
    state = _puzzle(seed=7)
    for _ in range(10_000):
        if state.status is GameStatus.GAME_OVER:
            break
        state.tick()
    assert state.status is GameStatus.GAME_OVER
    assert state.active is None

    frozen = state.snapshot()
    state.tick()
    state.hard_drop()
    assert state.move(1, 0) is False
    assert state.snapshot() == frozen
