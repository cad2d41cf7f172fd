"""Outbound side-channel for visual effects.

The game core appends :class:`VisualBurst` notifications when hazards or
obstacles are destroyed.  An effects layer drains the queue once per frame.
Whether or not anything drains it has no influence on game logic.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List


@dataclass(frozen=True)
class VisualBurst:
    x: int
    y: int
    color: str


class EventQueue:
    """Bounded FIFO of pending :class:`VisualBurst` events.

    When full, the oldest event is discarded.
    """

    def __init__(self, maxlen: int = 256) -> None:
        self._events: Deque[VisualBurst] = deque(maxlen=maxlen)

    def emit(self, x: int, y: int, color: str) -> None:
        self._events.append(VisualBurst(x, y, color))

    def drain(self) -> List[VisualBurst]:
        """Return and remove every pending event, oldest first."""

        events = list(self._events)
        self._events.clear()
        return events

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
