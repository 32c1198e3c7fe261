"""Rectangular rooms and the corridors that join them.

A room spans ``x1..x2`` by ``y1..y2`` inclusive, but only its interior
(``x1 < x < x2`` and ``y1 < y < y2``) is carved, leaving a wall ring. Two rooms
whose inclusive rectangles do not intersect therefore never share a floor
tile.
"""

import random
from dataclasses import dataclass

from tomb_crawler.grid import TileGrid
from tomb_crawler.types import Point


@dataclass(frozen=True)
class Rect:
    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def center(self) -> Point:
        return (self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2

    def intersects(self, other: "Rect") -> bool:
        """Inclusive-bound overlap test."""
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def contains_strictly(self, x: int, y: int) -> bool:
        """True if ``(x, y)`` lies on the carved interior."""
        return self.x1 < x < self.x2 and self.y1 < y < self.y2


def create_room(room: Rect, grid: TileGrid) -> None:
    grid.carve_area(room.x1 + 1, room.y1 + 1, room.x2, room.y2)


def create_h_tunnel(x1: int, x2: int, y: int, grid: TileGrid) -> None:
    """Carve a horizontal corridor between ``x1`` and ``x2`` inclusive."""
    grid.carve_area(min(x1, x2), y, max(x1, x2) + 1, y + 1)


def create_v_tunnel(y1: int, y2: int, x: int, grid: TileGrid) -> None:
    """Carve a vertical corridor between ``y1`` and ``y2`` inclusive."""
    grid.carve_area(x, min(y1, y2), x + 1, max(y1, y2) + 1)


def connect_rooms(
    previous: Rect, new: Rect, grid: TileGrid, rng: random.Random
) -> None:
    """Join two room centers with an L-shaped corridor.

    The bend goes horizontal-then-vertical or vertical-then-horizontal on a
    coin flip.
    """
    prev_x, prev_y = previous.center
    new_x, new_y = new.center
    if rng.random() < 0.5:
        create_h_tunnel(prev_x, new_x, prev_y, grid)
        create_v_tunnel(prev_y, new_y, new_x, grid)
    else:
        create_v_tunnel(prev_y, new_y, prev_x, grid)
        create_h_tunnel(prev_x, new_x, new_y, grid)
