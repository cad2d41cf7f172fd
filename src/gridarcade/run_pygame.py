"""Simple pygame front-end for the arcade engine.

A flat 2D view plus keyboard bindings glued onto :class:`GameState` and
:class:`TickDriver`.  It holds no game rules; every key press becomes one call
on the store's action surface.

Keys: arrows move, Up rotates in the falling-block modes, Enter acts, Space
hard-drops, P pauses, 1-6 start a mode, 0-9 pick a power-up.
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from .board import CELL_TYPES, Board
from .catalog import COLORS, GameMode, GameStatus, hex_to_rgb
from .config import ArcadeConfig
from .driver import TickDriver
from .game_state import GameState
from .utils import render_grid

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

LOGGER = logging.getLogger(__name__)

MODE_KEYS = {
    pygame.K_1: GameMode.PUZZLE,
    pygame.K_2: GameMode.CONSTRUCTION,
    pygame.K_3: GameMode.RECIPE,
    pygame.K_4: GameMode.TUNNELING,
    pygame.K_5: GameMode.COLLECTOR,
    pygame.K_6: GameMode.DEFENSE,
}

# Modes where Up is a movement rather than a rotation.
_FREE_MOVING = {GameMode.TUNNELING, GameMode.COLLECTOR}


def draw_state(screen: pygame.Surface, state: GameState) -> None:
    """Render the board with every entity overlaid."""

    for r, row in enumerate(render_grid(state)):
        for c, value in enumerate(row):
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            color = hex_to_rgb(COLORS[CELL_TYPES[value]]) if value else (0, 0, 0)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, (50, 50, 50), rect, 1)


def handle_key(event: pygame.event.Event, state: GameState) -> None:
    """Translate one key press into a store action."""

    key = event.key
    if key in MODE_KEYS:
        state.start(MODE_KEYS[key])
    elif key == pygame.K_p:
        if not state.pause():
            state.resume()
    elif state.status is GameStatus.POWERUP_SELECT and pygame.K_0 <= key <= pygame.K_9:
        index = key - pygame.K_0
        if index < len(state.powerup_pool):
            state.select_powerup(state.powerup_pool[index].id)
    elif key == pygame.K_LEFT:
        state.move(-1, 0)
    elif key == pygame.K_RIGHT:
        state.move(1, 0)
    elif key == pygame.K_DOWN:
        state.move(0, 1)
    elif key == pygame.K_UP:
        if state.mode in _FREE_MOVING:
            state.move(0, -1)
        else:
            state.act()
    elif key == pygame.K_RETURN:
        state.act()
    elif key == pygame.K_SPACE:
        state.hard_drop()


def _caption(state: GameState) -> str:
    parts = [f"{state.mode.value.title()}", f"Score: {state.score}", f"Level: {state.level}"]
    if state.status is GameStatus.POWERUP_SELECT:
        offers = ", ".join(f"{i}:{p.name}" for i, p in enumerate(state.powerup_pool))
        parts.append(f"Pick: {offers}")
    elif state.status is not GameStatus.PLAYING:
        parts.append(state.status.value)
    return " - ".join(parts)


def main(mode: GameMode = GameMode.PUZZLE, seed: Optional[int] = None) -> None:
    pygame.init()
    screen = pygame.display.set_mode((Board.width * CELL_SIZE, Board.height * CELL_SIZE))
    clock = pygame.time.Clock()
    state = GameState(config=ArcadeConfig(random_seed=seed))
    state.start(mode)
    driver = TickDriver(state)
    LOGGER.info("Window opened in %s mode", state.mode.value)

    running = True
    while running:
        dt = clock.tick(FPS)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                handle_key(event, state)
        driver.advance(dt)
        state.events.drain()
        screen.fill((0, 0, 0))
        draw_state(screen, state)
        pygame.display.set_caption(_caption(state))
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
