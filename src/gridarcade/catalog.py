"""Static catalog data shared by every game mode.

This module only holds data: the closed set of cell types that may appear on
the grid, their shape masks and display colours, the construction blueprints,
the power-up catalog and the recipe sequence.  Nothing here has behaviour
beyond small lookup helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

Mask = NDArray[np.uint8]


class GameMode(str, Enum):
    """The six interchangeable rule sets."""

    PUZZLE = "puzzle"
    CONSTRUCTION = "construction"
    RECIPE = "recipe"
    TUNNELING = "tunneling"
    COLLECTOR = "collector"
    DEFENSE = "defense"


class GameStatus(str, Enum):
    """Finite status of a game session.

    ``VICTORY`` and ``SHOP`` are reserved and never entered.
    """

    MENU = "MENU"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"
    PAUSED = "PAUSED"
    POWERUP_SELECT = "POWERUP_SELECT"
    VICTORY = "VICTORY"
    SHOP = "SHOP"


class CellType(str, Enum):
    """Every identifier that may occupy a grid cell or name an entity."""

    # Falling blocks
    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"
    # Recipe ingredients
    BUN_BOTTOM = "B_BOTTOM"
    MEAT = "B_MEAT"
    LETTUCE = "B_LETTUCE"
    BUN_TOP = "B_TOP"
    # Tunneling
    DIGGER = "D_DIGDUG"
    DIRT = "D_DIRT"
    ROCK = "D_ROCK"
    POOKA = "D_POOKA"
    FYGAR = "D_FYGAR"
    # Collector
    SNAKE_HEAD = "S_HEAD"
    SNAKE_BODY = "S_BODY"
    FOOD = "S_FOOD"
    # Defense
    BLASTER = "C_BLASTER"
    SEGMENT = "C_SEGMENT"
    MUSHROOM = "C_MUSHROOM"
    BULLET = "C_BULLET"


def _mask(rows: List[List[int]]) -> Mask:
    mask = np.array(rows, dtype=np.uint8)
    mask.setflags(write=False)
    return mask


_SINGLE = [[1]]

# Spawn-orientation masks.  Rotation is derived with :func:`rotate_mask`.
SHAPES: Dict[CellType, Mask] = {
    CellType.I: _mask([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    CellType.J: _mask([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    CellType.L: _mask([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
    CellType.O: _mask([[1, 1], [1, 1]]),
    CellType.S: _mask([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    CellType.T: _mask([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    CellType.Z: _mask([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
}
for _cell in CellType:
    SHAPES.setdefault(_cell, _mask(_SINGLE))

COLORS: Dict[CellType, str] = {
    CellType.I: "#00ffff",
    CellType.J: "#2979ff",
    CellType.L: "#ff9100",
    CellType.O: "#ffea00",
    CellType.S: "#00e676",
    CellType.T: "#d500f9",
    CellType.Z: "#ff1744",
    CellType.BUN_BOTTOM: "#d2b48c",
    CellType.MEAT: "#633917",
    CellType.LETTUCE: "#2ecc71",
    CellType.BUN_TOP: "#d2b48c",
    CellType.DIGGER: "#ffffff",
    CellType.DIRT: "#5d4037",
    CellType.ROCK: "#757575",
    CellType.POOKA: "#ff1744",
    CellType.FYGAR: "#00e676",
    CellType.SNAKE_HEAD: "#00ffcc",
    CellType.SNAKE_BODY: "#00aaff",
    CellType.FOOD: "#ff00ff",
    CellType.BLASTER: "#ffffff",
    CellType.SEGMENT: "#ff0055",
    CellType.MUSHROOM: "#ffea00",
    CellType.BULLET: "#00ffff",
}

TETROMINOES: Tuple[CellType, ...] = (
    CellType.I,
    CellType.J,
    CellType.L,
    CellType.O,
    CellType.S,
    CellType.T,
    CellType.Z,
)

# Bottom-to-top order of a completed recipe stack.
RECIPE: Tuple[CellType, ...] = (
    CellType.BUN_BOTTOM,
    CellType.MEAT,
    CellType.LETTUCE,
    CellType.BUN_TOP,
)

MONSTERS = frozenset({CellType.POOKA, CellType.FYGAR})


def rotate_mask(mask: Mask) -> Mask:
    """Return ``mask`` rotated 90 degrees clockwise.

    Equivalent to transposing the matrix and reversing each row.
    """

    return np.ascontiguousarray(np.rot90(mask, k=-1))


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert ``#rrggbb`` into an ``(r, g, b)`` tuple."""

    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


@dataclass(frozen=True)
class Blueprint:
    """Target fill pattern for construction mode.

    ``shape`` holds ``1`` for required cells and ``0`` for don't-care cells.
    """

    name: str
    shape: Tuple[Tuple[int, ...], ...]

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    @property
    def height(self) -> int:
        return len(self.shape)


BLUEPRINTS: Tuple[Blueprint, ...] = (
    Blueprint("Small Square", ((1, 1), (1, 1))),
    Blueprint("Tower", ((1,), (1,), (1,), (1,))),
    Blueprint("Bridge", ((1, 1, 1), (1, 0, 1))),
    Blueprint("Pyramid", ((0, 1, 0), (1, 1, 1))),
)


def blueprint_for_level(level: int) -> Blueprint:
    """Blueprints cycle with the level; level 1 starts on the first one."""

    if level <= 1:
        return BLUEPRINTS[0]
    return BLUEPRINTS[level % len(BLUEPRINTS)]


@dataclass(frozen=True)
class PowerUp:
    id: str
    name: str
    description: str
    icon: str


POWERUPS: Tuple[PowerUp, ...] = (
    PowerUp("master", "Master Builder", "Next 5 pieces are I-blocks", "🏗️"),
    PowerUp("hammer", "Jackhammer", "Landings destroy 2 rows", "🔨"),
    PowerUp("warp", "Time Warp", "Permanent slow motion", "⏳"),
    PowerUp("nuke", "Neon Nuke", "Clears bottom 5 rows", "☢️"),
    PowerUp("hack", "Blueprint Hack", "Skip current shape", "💾"),
    PowerUp("glue", "Glue Gun", "Double score for 1 min", "🔫"),
    PowerUp("switch", "Spectrum Switch", "Active piece becomes \"Wild\"", "🌈"),
    PowerUp("flip", "Gravity Flip", "Pieces fall slower", "🆙"),
    PowerUp("pulse", "Score Pulse", "Level multiplier x2", "📈"),
    PowerUp("ghost", "Ghost Vision", "Show perfect landing spot", "👻"),
)

POWERUPS_BY_ID: Dict[str, PowerUp] = {p.id: p for p in POWERUPS}
