"""Utility helpers for the arcade engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np

from .board import CELL_VALUES, Board
from .catalog import Blueprint, CellType, GameMode, Mask
from .config import ArcadeConfig

if TYPE_CHECKING:  # pragma: no cover
    from .game_state import GameState


def tick_interval_ms(mode: GameMode, level: int, config: Optional[ArcadeConfig] = None) -> float:
    """Return the tick period in milliseconds for ``mode`` at ``level``.

    Tunneling runs on a fixed clock.  Every other mode speeds up by
    ``tick_step_ms`` per level down to ``min_tick_ms``.
    """

    config = config or ArcadeConfig()
    if mode is GameMode.TUNNELING:
        return float(config.tunneling_tick_ms)
    return float(
        max(config.min_tick_ms, config.base_tick_ms - (level - 1) * config.tick_step_ms)
    )


def collides(shape: Mask, anchor: Tuple[int, int], board: Board) -> bool:
    """Return ``True`` if ``shape`` placed at ``anchor`` does not fit on ``board``.

    A set cell collides when it lies left or right of the board, below the
    floor, or over an occupied cell.  Cells above the top row are allowed so
    pieces may spawn and rotate partly outside the visible grid.
    """

    ax, ay = anchor
    for r, row in enumerate(shape):
        for c, value in enumerate(row):
            if not value:
                continue
            x = ax + c
            y = ay + r
            if x < 0 or x >= board.width or y >= board.height:
                return True
            if y >= 0 and board.grid[y, x] != 0:
                return True
    return False


def blueprint_satisfied(board: Board, blueprint: Optional[Blueprint]) -> bool:
    """Return ``True`` if every required cell of ``blueprint`` is filled.

    The blueprint sits on the bottom row of the board and is centred
    horizontally.  Don't-care cells impose no constraint.
    """

    if blueprint is None or blueprint.height == 0:
        return False
    start_y = board.height - blueprint.height
    start_x = (board.width - blueprint.width) // 2
    for r, row in enumerate(blueprint.shape):
        for c, required in enumerate(row):
            if required == 1 and board.grid[start_y + r, start_x + c] == 0:
                return False
    return True


def landing_anchor(shape: Mask, anchor: Tuple[int, int], board: Board) -> Tuple[int, int]:
    """Return the anchor ``shape`` would come to rest at if hard-dropped."""

    x, y = anchor
    while not collides(shape, (x, y + 1), board):
        y += 1
    return x, y


def render_grid(state: "GameState") -> List[List[int]]:
    """Return a copy of the board codes with every live entity overlaid.

    Renderers get a single 2D array to draw without the underlying board
    being touched.  Snake segments, bullets and the active entity receive the
    mapped integer value of their cell type.
    """

    grid = np.array(state.board.grid, copy=True)
    board = state.board

    def paint(x: int, y: int, cell: CellType) -> None:
        if board.in_bounds(x, y):
            grid[y, x] = CELL_VALUES[cell]

    for x, y in state.snake_body:
        paint(x, y, CellType.SNAKE_BODY)
    for bullet in state.bullets:
        if bullet.active:
            paint(bullet.position[0], bullet.position[1], CellType.BULLET)
    if state.active is not None:
        for x, y in state.active.cells():
            paint(x, y, state.active.type)
    return grid.tolist()
