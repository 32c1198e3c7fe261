"""Visibility (field of view) interface.

Line-of-sight computation is a collaborator outside the simulation core. The
core only needs the :class:`Visibility` protocol: rebuild for a new level,
recompute from an origin, and answer per-tile queries.

:class:`RadiusVisibility` is a headless stand-in that treats every tile within
the radius as visible, ignoring walls entirely. It is good enough for tests and
the gymnasium environment; a real frontend supplies a proper FOV service.
"""

from typing import Optional, Protocol

import numpy as np

from tomb_crawler.grid import TileGrid


class Visibility(Protocol):
    def reset(self, grid: TileGrid) -> None:
        """Forget all results and adopt the layout of ``grid``."""
        ...

    def recompute(
        self, origin_x: int, origin_y: int, radius: int, light_walls: bool
    ) -> None: ...

    def is_visible(self, x: int, y: int) -> bool: ...


class RadiusVisibility:
    """Disc-shaped visibility without occlusion."""

    def __init__(self, grid: Optional[TileGrid] = None) -> None:
        self._grid: Optional[TileGrid] = None
        self.visible: np.ndarray = np.zeros((0, 0), dtype=bool)
        if grid is not None:
            self.reset(grid)

    def reset(self, grid: TileGrid) -> None:
        self._grid = grid
        self.visible = np.zeros((grid.height, grid.width), dtype=bool)

    def recompute(
        self, origin_x: int, origin_y: int, radius: int, light_walls: bool
    ) -> None:
        if self._grid is None:
            raise ValueError("RadiusVisibility.recompute called before reset")
        ys, xs = np.ogrid[: self._grid.height, : self._grid.width]
        mask = (xs - origin_x) ** 2 + (ys - origin_y) ** 2 <= radius**2
        if not light_walls:
            mask &= ~self._grid.block_sight
        self.visible = mask

    def is_visible(self, x: int, y: int) -> bool:
        height, width = self.visible.shape
        return 0 <= x < width and 0 <= y < height and bool(self.visible[y, x])
