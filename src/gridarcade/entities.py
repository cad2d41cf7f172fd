"""Player-controlled and auxiliary entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .catalog import SHAPES, CellType, Mask, rotate_mask

Vector = Tuple[int, int]


@dataclass
class ActiveEntity:
    """The single player-controlled object.

    ``position`` is the top-left anchor of ``shape`` for falling pieces and the
    occupied cell for single-cell entities (digger, snake head, blaster).
    """

    type: CellType
    position: Tuple[int, int] = (0, 0)  # (x, y)
    shape: Mask = field(default=None)  # type: ignore[assignment]
    facing: Optional[Vector] = None
    next_facing: Optional[Vector] = None

    def __post_init__(self) -> None:
        if self.shape is None:
            self.shape = SHAPES[self.type]

    def moved(self, dx: int, dy: int) -> Tuple[int, int]:
        """Return the position translated by ``(dx, dy)``."""

        x, y = self.position
        return x + dx, y + dy

    def rotated_shape(self) -> Mask:
        return rotate_mask(self.shape)

    def cells(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` coordinates of every set mask cell."""

        x, y = self.position
        return [
            (x + c, y + r)
            for r, row in enumerate(self.shape)
            for c, value in enumerate(row)
            if value
        ]


@dataclass
class Bullet:
    """A defense-mode projectile travelling upwards."""

    id: int
    position: Tuple[int, int]
    active: bool = True
