"""Movement helpers.

Pure collision predicates plus the in-place ``move_*`` operations used by the
player and by monster AI. A move into a wall, off the map, or onto a tile held
by a blocking entity is a silent no-op.
"""

from typing import Iterable

from tomb_crawler.entity import EntityStore, Entity
from tomb_crawler.grid import TileGrid
from tomb_crawler.types import EntityIndex


def is_blocked(x: int, y: int, grid: TileGrid, entities: Iterable[Entity]) -> bool:
    """Return True if terrain or any blocking entity occupies ``(x, y)``."""
    if grid.is_blocked(x, y):
        return True
    return any(entity.blocks and entity.pos == (x, y) for entity in entities)


def move_by(
    index: EntityIndex, dx: int, dy: int, grid: TileGrid, store: EntityStore
) -> bool:
    """Shift an entity by ``(dx, dy)`` if the destination is free.

    Returns:
        bool: Whether the entity moved.
    """
    entity = store[index]
    x, y = entity.x + dx, entity.y + dy
    if is_blocked(x, y, grid, store):
        return False
    entity.set_pos(x, y)
    return True


def move_towards(
    index: EntityIndex,
    target_x: int,
    target_y: int,
    grid: TileGrid,
    store: EntityStore,
) -> bool:
    """Take one grid step along the straight line to the target.

    The direction vector is normalized to length 1 and each component rounded,
    so diagonal steps happen whenever the target is roughly diagonal.
    """
    entity = store[index]
    dx = target_x - entity.x
    dy = target_y - entity.y
    distance = entity.distance(target_x, target_y)
    if distance == 0:
        return False
    step_x = int(round(dx / distance))
    step_y = int(round(dy / distance))
    return move_by(index, step_x, step_y, grid, store)
