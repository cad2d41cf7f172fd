"""Periodic tick driver.

Front-ends feed wall-clock deltas into :class:`TickDriver`, which turns them
into a serial stream of ``GameState.tick`` calls at the mode's interval.
"""

from __future__ import annotations

from dataclasses import dataclass

from .catalog import GameStatus
from .game_state import GameState


@dataclass
class TickDriver:
    state: GameState
    drop_accum: float = 0.0

    def reset(self) -> None:
        self.drop_accum = 0.0

    def advance(self, dt_ms: float) -> int:
        """Accumulate ``dt_ms`` and run every tick that has come due.

        Returns how many ticks were executed.  The accumulator is cleared
        whenever the session is not playing so a resumed or restarted game
        does not fire a burst of stale ticks.
        """

        if self.state.status is not GameStatus.PLAYING:
            self.reset()
            return 0
        self.drop_accum += dt_ms
        ticks = 0
        while self.state.status is GameStatus.PLAYING:
            # Re-read every time: a tick may change the level or mode speed.
            delay = self.state.tick_interval_ms()
            if self.drop_accum < delay:
                break
            self.drop_accum -= delay
            self.state.tick()
            ticks += 1
        if self.state.status is not GameStatus.PLAYING:
            self.reset()
        return ticks
