from gridarcade.catalog import BLUEPRINTS, POWERUPS, CellType, GameMode, GameStatus
from gridarcade.config import ArcadeConfig
from gridarcade.entities import ActiveEntity
from gridarcade.game_state import GameState


def _complete_first_blueprint(seed=2):
    state = GameState(config=ArcadeConfig(random_seed=seed))
    state.start(GameMode.CONSTRUCTION)
    assert state.blueprint == BLUEPRINTS[0]
    state.active = ActiveEntity(CellType.O, position=(4, 0))
    state.hard_drop()
    return state


def test_satisfied_blueprint_enters_powerup_selection():
    state = _complete_first_blueprint()
    assert state.status is GameStatus.POWERUP_SELECT
    assert state.active is None
    assert len(state.powerup_pool) == 10
    assert set(state.powerup_pool) == set(POWERUPS)
    # The grid stays frozen until a selection is made.
    assert len(state.board.cells_of(CellType.O)) == 4
    state.tick()
    assert state.move(0, 1) is False
    assert len(state.board.cells_of(CellType.O)) == 4


def test_unsatisfied_lock_spawns_next_piece():
    state = GameState(config=ArcadeConfig(random_seed=2))
    state.start(GameMode.CONSTRUCTION)
    state.active = ActiveEntity(CellType.O, position=(0, 0))
    state.hard_drop()
    assert state.status is GameStatus.PLAYING
    assert state.active is not None
    assert state.board.cells_of(CellType.O) == [(0, 18), (1, 18), (0, 19), (1, 19)]
    assert state.score == 0


def test_selecting_powerup_advances_level_and_resets_grid():
    state = _complete_first_blueprint()
    choice = state.powerup_pool[0].id
    assert state.select_powerup(choice) is True
    assert state.status is GameStatus.PLAYING
    assert state.level == 2
    assert state.score == 1000
    assert state.blueprint == BLUEPRINTS[2]
    assert not state.board.grid.any()
    assert state.active_powerups == [choice]
    assert state.powerup_pool == []
    assert state.active is not None


def test_selection_outside_powerup_state_fails():
    state = GameState()
    assert state.select_powerup("master") is False
    state.start(GameMode.CONSTRUCTION)
    assert state.select_powerup("master") is False
    assert state.level == 1


def test_unknown_powerup_is_rejected():
    state = _complete_first_blueprint()
    assert state.select_powerup("laser") is False
    assert state.status is GameStatus.POWERUP_SELECT


def test_master_builder_forces_i_pieces():
    state = _complete_first_blueprint()
    state.select_powerup("master")
    assert state.active.type is CellType.I
    assert state.forced_pieces == 4


def test_slow_motion_powerups_stretch_tick_interval():
    state = _complete_first_blueprint()
    state.select_powerup("warp")
    assert state.tick_interval_ms() == 1400.0


def test_ghost_vision_exposes_landing_anchor():
    state = _complete_first_blueprint()
    assert state.snapshot()["ghost"] is None
    state.select_powerup("ghost")
    state.active = ActiveEntity(CellType.O, position=(0, 0))
    assert state.snapshot()["ghost"] == (0, 18)


def test_blocked_spawn_ends_game():
    state = GameState(config=ArcadeConfig(random_seed=2))
    state.start(GameMode.CONSTRUCTION)
    for x in range(4, 8):
        state.board.set_cell(x, 1, CellType.S)
    state.active = ActiveEntity(CellType.O, position=(0, 0))
    state.hard_drop()
    assert state.status is GameStatus.GAME_OVER
    assert state.active is None
    assert state.powerup_pool == []
    assert state.board.cells_of(CellType.O) == [(0, 18), (1, 18), (0, 19), (1, 19)]


def test_preview_reports_forced_pieces():
    state = _complete_first_blueprint()
    state.select_powerup("master")
    assert state.next_piece is CellType.I
    assert state.snapshot()["upcoming"] == CellType.I.value
    state.forced_pieces = 0
    assert state.next_piece is state.upcoming
