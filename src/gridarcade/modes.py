"""Per-mode rule sets.

Each game mode is a stateless :class:`ModeRules` object that operates on the
:class:`~gridarcade.game_state.GameState` handed to it.  The store owns the
data and guards every call on the session status; the rules only decide how
that data evolves for one action.

The falling-block family (puzzle, construction, recipe) shares gravity,
collision and spawning through :class:`FallingBlockRules` and differs only in
which pieces it draws and how a locked piece is resolved.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, ClassVar, Dict, List, Optional, Tuple

from .board import Board
from .catalog import (
    COLORS,
    MONSTERS,
    POWERUPS,
    RECIPE,
    TETROMINOES,
    CellType,
    GameMode,
    GameStatus,
)
from .entities import ActiveEntity, Bullet
from .utils import blueprint_satisfied, collides

if TYPE_CHECKING:  # pragma: no cover
    from .game_state import GameState


LOGGER = logging.getLogger(__name__)

DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


class ModeRules:
    """Uniform capability contract shared by every mode.

    The default implementations are no-ops so single-purpose modes only
    override what they use.
    """

    mode: ClassVar[GameMode]
    gravity: ClassVar[bool] = False

    def setup(self, state: "GameState") -> None:
        """Seed the board and entities for a fresh session."""

        raise NotImplementedError

    def move(self, state: "GameState", dx: int, dy: int) -> bool:
        return False

    def act(self, state: "GameState") -> None:
        return None

    def hard_drop(self, state: "GameState") -> None:
        return None

    def tick(self, state: "GameState") -> None:
        return None

    def resolve_lock(self, state: "GameState") -> None:
        return None

    def after_powerup(self, state: "GameState") -> None:
        return None


# ---------------------------------------------------------------------------
# Falling-block family
# ---------------------------------------------------------------------------


class FallingBlockRules(ModeRules):
    gravity = True
    pieces: ClassVar[Tuple[CellType, ...]] = TETROMINOES

    def draw_piece(self, state: "GameState") -> CellType:
        return state.rng.choice(self.pieces)

    def spawn_position(self, board: Board) -> Tuple[int, int]:
        return board.width // 2 - 1, 0

    def setup(self, state: "GameState") -> None:
        state.upcoming = self.draw_piece(state)
        self.spawn_next(state)

    def spawn_next(self, state: "GameState") -> bool:
        """Promote the upcoming piece to active.

        Returns ``False`` and ends the game when the new piece overlaps the
        board at its spawn position.
        """

        if state.forced_pieces > 0:
            piece = CellType.I
            state.forced_pieces -= 1
        else:
            piece = state.upcoming or self.draw_piece(state)
            state.upcoming = self.draw_piece(state)
        entity = ActiveEntity(piece, position=self.spawn_position(state.board))
        if collides(entity.shape, entity.position, state.board):
            state.game_over("spawn blocked")
            return False
        state.active = entity
        return True

    def move(self, state: "GameState", dx: int, dy: int) -> bool:
        active = state.active
        target = active.moved(dx, dy)
        if collides(active.shape, target, state.board):
            if dy > 0:
                self.resolve_lock(state)
            return False
        active.position = target
        return True

    def act(self, state: "GameState") -> None:
        active = state.active
        rotated = active.rotated_shape()
        if not collides(rotated, active.position, state.board):
            active.shape = rotated

    def hard_drop(self, state: "GameState") -> None:
        while self.move(state, 0, 1):
            pass

    def tick(self, state: "GameState") -> None:
        self.move(state, 0, 1)

    def merge_active(self, state: "GameState") -> None:
        active = state.active
        state.board.lock(active.shape, active.position, active.type)
        LOGGER.debug("Locked %s at %s", active.type.value, active.position)
        state.active = None


class PuzzleRules(FallingBlockRules):
    mode = GameMode.PUZZLE

    def resolve_lock(self, state: "GameState") -> None:
        self.merge_active(state)
        cleared = state.board.clear_full_rows()
        if cleared:
            scoring = state.config.scoring
            state.award(scoring.score_for_lines(cleared, state.level))
            state.lines += cleared
            state.set_level(state.lines // scoring.lines_per_level + 1)
            LOGGER.debug("Cleared %d row(s), %d total", cleared, state.lines)
        self.spawn_next(state)


class ConstructionRules(FallingBlockRules):
    mode = GameMode.CONSTRUCTION

    def resolve_lock(self, state: "GameState") -> None:
        self.merge_active(state)
        if blueprint_satisfied(state.board, state.blueprint):
            count = min(state.config.powerup_choices, len(POWERUPS))
            state.powerup_pool = state.rng.sample(POWERUPS, k=count)
            state.status = GameStatus.POWERUP_SELECT
            LOGGER.info("Blueprint %r complete", state.blueprint.name)
            return
        self.spawn_next(state)

    def after_powerup(self, state: "GameState") -> None:
        self.spawn_next(state)


class RecipeRules(FallingBlockRules):
    mode = GameMode.RECIPE
    pieces = RECIPE

    def act(self, state: "GameState") -> None:
        # Ingredients are single cells; there is nothing to rotate.
        return None

    def resolve_lock(self, state: "GameState") -> None:
        self.merge_active(state)
        completed = self.collect_stacks(state)
        if completed:
            scoring = state.config.scoring
            state.award(completed * scoring.recipe_item)
            state.items += completed
            state.set_level(state.items // scoring.items_per_level + 1)
        self.spawn_next(state)

    def collect_stacks(self, state: "GameState") -> int:
        """Remove every column run matching the recipe, bottom to top.

        Matching reads the board as it was before any removal.  Returns the
        number of completed stacks.
        """

        board = state.board
        before = board.copy()
        depth = len(RECIPE)
        top_down = RECIPE[::-1]
        completed = 0
        for x in range(board.width):
            for y in range(board.height - depth + 1):
                if all(before.is_cell(x, y + i, top_down[i]) for i in range(depth)):
                    for i in range(depth):
                        board.set_cell(x, y + i, None)
                    completed += 1
                    state.events.emit(x, y, "#ffff00")
                    LOGGER.debug("Recipe completed in column %d", x)
        return completed


# ---------------------------------------------------------------------------
# Tunneling
# ---------------------------------------------------------------------------


class TunnelingRules(ModeRules):
    mode = GameMode.TUNNELING

    def setup(self, state: "GameState") -> None:
        config = state.config
        board = state.board
        rock = config.rock_chance
        pooka = rock + config.pooka_chance
        fygar = pooka + config.fygar_chance
        for y in range(config.tunnel_open_rows, board.height):
            for x in range(board.width):
                r = state.rng.random()
                if r < rock:
                    cell = CellType.ROCK
                elif r < pooka:
                    cell = CellType.POOKA
                elif r < fygar:
                    cell = CellType.FYGAR
                else:
                    cell = CellType.DIRT
                board.set_cell(x, y, cell)
        state.active = ActiveEntity(
            CellType.DIGGER, position=(board.width // 2, 2), facing=(0, 1)
        )

    def move(self, state: "GameState", dx: int, dy: int) -> bool:
        active = state.active
        board = state.board
        x, y = active.moved(dx, dy)
        if not board.in_bounds(x, y):
            return False
        target = board.get_cell(x, y)
        if target is CellType.ROCK:
            return False
        if target in MONSTERS:
            state.game_over("walked into %s" % target.value)
            return False
        if target is CellType.DIRT:
            board.set_cell(x, y, None)
            state.award(state.config.scoring.dirt)
        active.position = (x, y)
        active.facing = (dx, dy)
        return True

    def act(self, state: "GameState") -> None:
        active = state.active
        fx, fy = active.facing or (0, 1)
        x, y = active.moved(fx, fy)
        board = state.board
        if board.in_bounds(x, y) and board.get_cell(x, y) in MONSTERS:
            board.set_cell(x, y, None)
            state.award(state.config.scoring.monster)
            state.events.emit(x, y, "#ff0000")
            LOGGER.debug("Monster destroyed at %s", (x, y))

    def tick(self, state: "GameState") -> None:
        board = state.board
        self._drop_rocks(board)
        self._wander_monsters(state)
        x, y = state.active.position
        current = board.get_cell(x, y)
        if current is CellType.ROCK or current in MONSTERS:
            state.game_over("crushed by %s" % current.value)

    @staticmethod
    def _drop_rocks(board: Board) -> None:
        for y in range(board.height - 2, -1, -1):
            for x in range(board.width):
                if board.is_cell(x, y, CellType.ROCK) and board.is_empty(x, y + 1):
                    board.set_cell(x, y + 1, CellType.ROCK)
                    board.set_cell(x, y, None)

    @staticmethod
    def _wander_monsters(state: "GameState") -> None:
        board = state.board
        chance = state.config.monster_move_chance
        monsters = [(pos, kind) for kind in MONSTERS for pos in board.cells_of(kind)]
        monsters.sort(key=lambda item: (item[0][1], item[0][0]))
        for (x, y), kind in monsters:
            if state.rng.random() >= chance:
                continue
            dx, dy = state.rng.choice(DIRECTIONS)
            nx, ny = x + dx, y + dy
            if board.is_empty(nx, ny):
                board.set_cell(nx, ny, kind)
                board.set_cell(x, y, None)


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class CollectorRules(ModeRules):
    mode = GameMode.COLLECTOR

    def setup(self, state: "GameState") -> None:
        state.active = ActiveEntity(
            CellType.SNAKE_HEAD, position=(5, 10), facing=(0, -1), next_facing=(0, -1)
        )
        state.snake_body = deque([(5, 11), (5, 12)])
        self.spawn_food(state)

    def spawn_food(self, state: "GameState") -> Optional[Tuple[int, int]]:
        taken = set(state.snake_body)
        taken.add(state.active.position)
        free = [cell for cell in state.board.empty_cells() if cell not in taken]
        if not free:
            return None
        x, y = state.rng.choice(free)
        state.board.set_cell(x, y, CellType.FOOD)
        return x, y

    def move(self, state: "GameState", dx: int, dy: int) -> bool:
        active = state.active
        fx, fy = active.facing
        if (dx, dy) == (-fx, -fy):
            return False
        active.next_facing = (dx, dy)
        return True

    def tick(self, state: "GameState") -> None:
        active = state.active
        board = state.board
        active.facing = active.next_facing or active.facing
        head = active.moved(*active.facing)
        if not board.in_bounds(*head):
            state.game_over("hit the wall")
            return
        if head in state.snake_body:
            state.game_over("hit own body")
            return
        ate = board.is_cell(head[0], head[1], CellType.FOOD)
        state.snake_body.appendleft(active.position)
        active.position = head
        if ate:
            board.set_cell(head[0], head[1], None)
            self.spawn_food(state)
            state.award(state.config.scoring.food)
        else:
            state.snake_body.pop()


# ---------------------------------------------------------------------------
# Defense
# ---------------------------------------------------------------------------


class DefenseRules(ModeRules):
    mode = GameMode.DEFENSE

    def setup(self, state: "GameState") -> None:
        config = state.config
        board = state.board
        for _ in range(config.defense_obstacles):
            x = state.rng.randrange(board.width)
            y = state.rng.randrange(board.height - 4) + 1
            board.set_cell(x, y, CellType.MUSHROOM)
        for x in range(min(config.defense_segments, board.width)):
            board.set_cell(x, 0, CellType.SEGMENT)
        state.active = ActiveEntity(
            CellType.BLASTER, position=(5, board.height - 1), facing=(0, -1)
        )
        state.bullets = []

    def move(self, state: "GameState", dx: int, dy: int) -> bool:
        if dx == 0:
            return False
        active = state.active
        x, y = active.position
        if not 0 <= x + dx < state.board.width:
            return False
        active.position = (x + dx, y)
        return True

    def act(self, state: "GameState") -> None:
        x, y = state.active.position
        state.bullet_serial += 1
        state.bullets.append(Bullet(state.bullet_serial, (x, y - 1)))

    def tick(self, state: "GameState") -> None:
        board = state.board
        state.bullets = [
            Bullet(b.id, (b.position[0], b.position[1] - 1), b.active)
            for b in state.bullets
            if b.position[1] - 1 >= 0
        ]
        self._advance_segments(board)
        self._resolve_hits(state)
        x, y = state.active.position
        if board.is_cell(x, y, CellType.SEGMENT):
            state.game_over("overrun")

    @staticmethod
    def _advance_segments(board: Board) -> None:
        # Lower rows first, leading segment of each row first, so a chain
        # vacates cells before its followers step into them.
        segments = sorted(
            board.cells_of(CellType.SEGMENT),
            key=lambda cell: (-cell[1], -cell[0] if cell[1] % 2 == 0 else cell[0]),
        )
        for x, y in segments:
            nx, ny = x + (1 if y % 2 == 0 else -1), y
            if (
                not 0 <= nx < board.width
                or board.is_cell(nx, ny, CellType.MUSHROOM)
                or board.is_cell(nx, ny, CellType.SEGMENT)
            ):
                nx, ny = x, y + 1
            if ny >= board.height or board.is_cell(nx, ny, CellType.SEGMENT):
                continue
            board.set_cell(x, y, None)
            board.set_cell(nx, ny, CellType.SEGMENT)

    @staticmethod
    def _resolve_hits(state: "GameState") -> None:
        board = state.board
        scoring = state.config.scoring
        survivors: List[Bullet] = []
        for bullet in state.bullets:
            x, y = bullet.position
            target = board.get_cell(x, y)
            if target is CellType.SEGMENT:
                board.set_cell(x, y, CellType.MUSHROOM)
                bullet.active = False
                state.award(scoring.segment)
                state.events.emit(x, y, COLORS[CellType.SEGMENT])
            elif target is CellType.MUSHROOM:
                board.set_cell(x, y, None)
                bullet.active = False
                state.award(scoring.obstacle)
                state.events.emit(x, y, COLORS[CellType.MUSHROOM])
            if bullet.active:
                survivors.append(bullet)
        state.bullets = survivors


RULES: Dict[GameMode, ModeRules] = {
    rules.mode: rules
    for rules in (
        PuzzleRules(),
        ConstructionRules(),
        RecipeRules(),
        TunnelingRules(),
        CollectorRules(),
        DefenseRules(),
    )
}


def rules_for(mode: GameMode) -> ModeRules:
    """Return the rule set for ``mode``."""

    return RULES[GameMode(mode)]
