"""Board representation for the shared playfield."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .catalog import CellType, Mask


# Dimensions of the playfield shared by every mode.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]
Coordinate = Tuple[int, int]  # (x, y), row 0 is the top

# Mapping from ``CellType`` to the integer stored in the grid.  ``0`` always
# represents an empty cell.
CELL_VALUES: Dict[CellType, int] = {t: i + 1 for i, t in enumerate(CellType)}
CELL_TYPES: Dict[int, CellType] = {v: t for t, v in CELL_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Fixed 10x20 grid mapping each cell to an optional :class:`CellType`.

    Coordinates are ``(x, y)`` with ``y`` growing downwards.  Internally the
    grid is a ``(HEIGHT, WIDTH)`` numpy array indexed ``[y, x]``.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[CellType]:
        """Return the cell type at ``(x, y)`` or ``None`` when empty.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            return CELL_TYPES.get(int(self.grid[y, x]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, x: int, y: int, cell: Optional[CellType]) -> None:
        """Set ``(x, y)`` to ``cell``; ``None`` empties it.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            self.grid[y, x] = np.uint8(0 if cell is None else CELL_VALUES[cell])
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, x: int, y: int) -> bool:
        """Return ``True`` if the cell at ``(x, y)`` is empty.

        Any coordinates outside the board are treated as occupied so callers
        get off-board rejection for free.
        """

        if self.in_bounds(x, y):
            return bool(self.grid[y, x] == 0)
        return False

    def is_cell(self, x: int, y: int, cell: CellType) -> bool:
        """Return ``True`` if ``(x, y)`` is on the board and holds ``cell``."""

        return self.in_bounds(x, y) and int(self.grid[y, x]) == CELL_VALUES[cell]

    def clear(self) -> None:
        self.grid = create_empty_grid()

    def copy(self) -> "Board":
        other = Board()
        other.grid = self.grid.copy()
        return other

    def lock(self, mask: Mask, anchor: Coordinate, cell: CellType) -> None:
        """Merge the set cells of ``mask`` anchored at ``anchor`` into the grid.

        Cells above the visible grid are dropped; anything else must already
        have passed the collision check.
        """

        ys, xs = np.nonzero(mask)
        ys = ys + anchor[1]
        xs = xs + anchor[0]
        visible = ys >= 0
        self.grid[ys[visible], xs[visible]] = np.uint8(CELL_VALUES[cell])

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed."""

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def cells_of(self, cell: CellType) -> List[Coordinate]:
        """Return every ``(x, y)`` currently holding ``cell`` in row-major order."""

        ys, xs = np.nonzero(self.grid == CELL_VALUES[cell])
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def empty_cells(self) -> Iterator[Coordinate]:
        ys, xs = np.nonzero(self.grid == 0)
        for y, x in zip(ys, xs):
            yield int(x), int(y)

    def to_lists(self) -> List[List[Optional[str]]]:
        """Return the grid as nested lists of cell identifiers (``None`` = empty)."""

        return [
            [CELL_TYPES[int(v)].value if v else None for v in row]
            for row in self.grid
        ]
