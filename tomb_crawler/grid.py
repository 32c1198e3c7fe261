"""Tile grid.

The level layout is three boolean ``numpy`` arrays of shape
``(height, width)`` indexed ``[y, x]``:

* ``blocked``: movement is impossible.
* ``block_sight``: the tile stops line of sight.
* ``explored``: the tile has been seen at least once. Only ever set.

A fresh grid is solid wall; the dungeon generator carves rooms and corridors
out of it.
"""

from dataclasses import dataclass, field
from typing import Callable

import numpy as np


@dataclass(frozen=True)
class Tile:
    """Read-only view of a single cell."""

    blocked: bool
    block_sight: bool
    explored: bool


@dataclass
class TileGrid:
    width: int
    height: int

    blocked: np.ndarray = field(init=False, repr=False)
    block_sight: np.ndarray = field(init=False, repr=False)
    explored: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        shape = (self.height, self.width)
        self.blocked = np.ones(shape, dtype=bool)
        self.block_sight = np.ones(shape, dtype=bool)
        self.explored = np.zeros(shape, dtype=bool)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        self._check_bounds(x, y)
        return Tile(
            blocked=bool(self.blocked[y, x]),
            block_sight=bool(self.block_sight[y, x]),
            explored=bool(self.explored[y, x]),
        )

    def is_blocked(self, x: int, y: int) -> bool:
        """Walls and anything outside the grid block movement."""
        return not self.in_bounds(x, y) or bool(self.blocked[y, x])

    def carve(self, x: int, y: int) -> None:
        """Turn a single tile into open floor."""
        self._check_bounds(x, y)
        self.blocked[y, x] = False
        self.block_sight[y, x] = False

    def carve_area(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Open the half-open rectangle ``[x1, x2) x [y1, y2)``."""
        if x2 <= x1 or y2 <= y1:
            return
        self._check_bounds(x1, y1)
        self._check_bounds(x2 - 1, y2 - 1)
        self.blocked[y1:y2, x1:x2] = False
        self.block_sight[y1:y2, x1:x2] = False

    def explore(self, is_visible: Callable[[int, int], bool]) -> None:
        """Mark every tile for which ``is_visible(x, y)`` holds as explored."""
        for y in range(self.height):
            for x in range(self.width):
                if is_visible(x, y):
                    self.explored[y, x] = True

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Out of bounds: {(x, y)} for grid {self.width}x{self.height}"
            )
