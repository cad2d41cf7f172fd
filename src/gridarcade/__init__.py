"""Grid arcade engine: six rule sets over one shared 10x20 grid."""

from .board import Board
from .catalog import (
    BLUEPRINTS,
    POWERUPS,
    RECIPE,
    Blueprint,
    CellType,
    GameMode,
    GameStatus,
    PowerUp,
)
from .config import ArcadeConfig, ScoringRules
from .entities import ActiveEntity, Bullet
from .events import EventQueue, VisualBurst
from .game_state import GameState
from .driver import TickDriver
from .modes import ModeRules, rules_for
from .utils import blueprint_satisfied, collides, render_grid, tick_interval_ms

__all__ = [
    "Board",
    "BLUEPRINTS",
    "POWERUPS",
    "RECIPE",
    "Blueprint",
    "CellType",
    "GameMode",
    "GameStatus",
    "PowerUp",
    "ArcadeConfig",
    "ScoringRules",
    "ActiveEntity",
    "Bullet",
    "EventQueue",
    "VisualBurst",
    "GameState",
    "TickDriver",
    "ModeRules",
    "rules_for",
    "blueprint_satisfied",
    "collides",
    "render_grid",
    "tick_interval_ms",
]
