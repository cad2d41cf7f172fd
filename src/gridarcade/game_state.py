"""High level game state container and action surface."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional, Tuple

from .board import Board
from .catalog import (
    POWERUPS_BY_ID,
    Blueprint,
    CellType,
    GameMode,
    GameStatus,
    PowerUp,
    blueprint_for_level,
)
from .config import ArcadeConfig
from .entities import ActiveEntity, Bullet
from .events import EventQueue
from .modes import ModeRules, rules_for
from .utils import landing_anchor, tick_interval_ms


LOGGER = logging.getLogger(__name__)

# Statuses from which a new session may be started.
_STARTABLE = frozenset({GameStatus.MENU, GameStatus.GAME_OVER})

# Tick interval multipliers applied by slow-motion power-ups.
_SLOWDOWN = {"warp": 2.0, "flip": 1.5}


@dataclass
class GameState:
    """Mutable state for one arcade session.

    The store is the only writer of its fields.  Input handlers and the
    periodic driver call :meth:`start`, :meth:`move`, :meth:`act`,
    :meth:`hard_drop`, :meth:`tick` and :meth:`select_powerup`; each call is
    forwarded to the rule set of the current mode.  Every action other than
    ``start`` is ignored unless the status is ``PLAYING``.
    """

    config: ArcadeConfig = field(default_factory=ArcadeConfig)
    board: Board = field(default_factory=Board)
    mode: GameMode = GameMode.PUZZLE
    status: GameStatus = GameStatus.MENU
    active: Optional[ActiveEntity] = None
    upcoming: Optional[CellType] = None
    score: int = 0
    level: int = 1
    lines: int = 0
    items: int = 0
    blueprint: Optional[Blueprint] = None
    powerup_pool: List[PowerUp] = field(default_factory=list)
    active_powerups: List[str] = field(default_factory=list)
    forced_pieces: int = 0
    snake_body: Deque[Tuple[int, int]] = field(default_factory=deque)
    bullets: List[Bullet] = field(default_factory=list)
    bullet_serial: int = 0

    def __post_init__(self) -> None:
        self.rng = random.Random(self.config.random_seed)
        self.events = EventQueue(self.config.event_queue_size)
        self.rules: ModeRules = rules_for(self.mode)

    # Session lifecycle -------------------------------------------------
    def start(self, mode: GameMode = GameMode.PUZZLE) -> bool:
        """Start a fresh session in ``mode``.

        Only allowed from ``MENU`` or ``GAME_OVER``; everything is
        reinitialised, so restarting is also the way to switch modes.
        """

        if self.status not in _STARTABLE:
            return False
        mode = GameMode(mode)
        self.mode = mode
        self.rules = rules_for(mode)
        self.board = Board()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.items = 0
        self.active = None
        self.upcoming = None
        self.blueprint = blueprint_for_level(1) if mode is GameMode.CONSTRUCTION else None
        self.powerup_pool = []
        self.active_powerups = []
        self.forced_pieces = 0
        self.snake_body = deque()
        self.bullets = []
        self.bullet_serial = 0
        self.events.clear()
        self.status = GameStatus.PLAYING
        self.rules.setup(self)
        LOGGER.info("Started %s (seed=%s)", mode.value, self.config.random_seed)
        return True

    def pause(self) -> bool:
        if self.status is not GameStatus.PLAYING:
            return False
        self.status = GameStatus.PAUSED
        return True

    def resume(self) -> bool:
        if self.status is not GameStatus.PAUSED:
            return False
        self.status = GameStatus.PLAYING
        return True

    @property
    def playing(self) -> bool:
        return self.status is GameStatus.PLAYING and self.active is not None

    @property
    def next_piece(self) -> Optional[CellType]:
        """The piece the next spawn will produce; forced I pieces come first."""

        if self.forced_pieces > 0:
            return CellType.I
        return self.upcoming

    # Action surface ----------------------------------------------------
    def move(self, dx: int, dy: int) -> bool:
        """Request a unit move; returns whether it was accepted."""

        if not self.playing or abs(dx) + abs(dy) != 1:
            return False
        return self.rules.move(self, dx, dy)

    def act(self) -> None:
        """Rotate, fire or dig depending on the mode."""

        if self.playing:
            self.rules.act(self)

    def hard_drop(self) -> None:
        if self.playing:
            self.rules.hard_drop(self)

    def tick(self) -> None:
        """Advance the simulation by one autonomous step."""

        if self.playing:
            self.rules.tick(self)

    def select_powerup(self, powerup_id: str) -> bool:
        """Apply one of the offered power-ups and resume play.

        Advances the level, swaps in the next blueprint, clears the board and
        awards the selection bonus.  Returns ``False`` when not selecting or
        when ``powerup_id`` was not offered.
        """

        if self.status is not GameStatus.POWERUP_SELECT:
            return False
        powerup = POWERUPS_BY_ID.get(powerup_id)
        if powerup is None or powerup not in self.powerup_pool:
            return False
        self.set_level(self.level + 1)
        self.blueprint = blueprint_for_level(self.level)
        self.board.clear()
        self.active_powerups.append(powerup.id)
        if powerup.id == "master":
            self.forced_pieces += self.config.master_builder_pieces
        self.award(self.config.scoring.powerup_bonus)
        self.powerup_pool = []
        self.status = GameStatus.PLAYING
        LOGGER.info("Power-up %s selected, next blueprint %r", powerup.id, self.blueprint.name)
        self.rules.after_powerup(self)
        return True

    # Helpers used by the rule sets ------------------------------------
    def award(self, points: int) -> None:
        self.score += max(0, points)

    def set_level(self, level: int) -> None:
        if level != self.level:
            LOGGER.info("Level %d -> %d", self.level, level)
        self.level = level

    def game_over(self, reason: str = "") -> None:
        """Enter ``GAME_OVER``; score and level keep their last values."""

        self.status = GameStatus.GAME_OVER
        self.active = None
        LOGGER.info(
            "Game over in %s (%s): score=%d level=%d",
            self.mode.value,
            reason or "no reason",
            self.score,
            self.level,
        )

    # Observation -------------------------------------------------------
    def tick_interval_ms(self) -> float:
        interval = tick_interval_ms(self.mode, self.level, self.config)
        for powerup_id in self.active_powerups:
            interval *= _SLOWDOWN.get(powerup_id, 1.0)
        return interval

    def ghost_position(self) -> Optional[Tuple[int, int]]:
        """Landing anchor of the active piece when Ghost Vision is active."""

        if "ghost" not in self.active_powerups or not self.rules.gravity:
            return None
        if self.active is None:
            return None
        return landing_anchor(self.active.shape, self.active.position, self.board)

    def snapshot(self) -> Dict[str, Any]:
        """Return the observable state as plain Python data."""

        active = None
        if self.active is not None:
            active = {
                "type": self.active.type.value,
                "position": self.active.position,
                "shape": self.active.shape.tolist(),
                "facing": self.active.facing,
            }
        return {
            "grid": self.board.to_lists(),
            "active": active,
            "snake_body": list(self.snake_body),
            "bullets": [
                {"id": b.id, "position": b.position, "active": b.active}
                for b in self.bullets
            ],
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "items": self.items,
            "mode": self.mode.value,
            "status": self.status.value,
            "upcoming": self.next_piece.value if self.next_piece else None,
            "blueprint": (
                {"name": self.blueprint.name, "shape": [list(r) for r in self.blueprint.shape]}
                if self.blueprint
                else None
            ),
            "powerup_pool": [p.id for p in self.powerup_pool],
            "active_powerups": list(self.active_powerups),
            "ghost": self.ghost_position(),
        }
