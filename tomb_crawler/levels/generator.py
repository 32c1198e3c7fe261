"""Procedural dungeon generator.

Rooms are placed by rejection sampling: each of ``max_rooms`` attempts draws a
random size and position and keeps the room only if it does not touch any
room accepted so far. Every accepted room is carved, populated from the spawn
tables for the current depth, and joined to the previously accepted room by
an L-shaped corridor, so consecutive rooms (and hence all rooms) are
connected.

The player starts at the center of the first room; the stairs down sit at the
center of the last one. The attempt budget gives no hard guarantee that any
room fits; when none does, :class:`DungeonGenerationError` is raised instead
of returning an unusable level.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from tomb_crawler.config import DEFAULT_CONFIG, GameConfig
from tomb_crawler.content import (
    SpawnTables,
    from_dungeon_level,
    loot_chances,
    monster_chances,
    weighted_choice,
)
from tomb_crawler.entity import Entity
from tomb_crawler.grid import TileGrid
from tomb_crawler.levels.factories import (
    LOOT_FACTORIES,
    MONSTER_FACTORIES,
    create_stairs,
)
from tomb_crawler.levels.rooms import Rect, connect_rooms, create_room
from tomb_crawler.systems.movement import is_blocked
from tomb_crawler.types import Point

logger = logging.getLogger(__name__)


class DungeonGenerationError(Exception):
    """Raised when no room could be placed within the attempt budget."""


@dataclass(frozen=True)
class GeneratedLevel:
    """Result of :func:`generate`.

    Attributes:
        grid: Carved tile grid.
        entities: Spawned monsters and items, followed by the stairs.
        player_start: Center of the first room.
        stairs: Center of the last room.
        rooms: Accepted rooms in acceptance order.
    """

    grid: TileGrid
    entities: Tuple[Entity, ...]
    player_start: Point
    stairs: Point
    rooms: Tuple[Rect, ...]


def generate(
    level_depth: int,
    config: GameConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> GeneratedLevel:
    """Build a new level for ``level_depth``.

    Raises:
        DungeonGenerationError: If not a single room was accepted.
    """
    if rng is None:
        rng = random.Random()

    grid = TileGrid(config.map_width, config.map_height)
    rooms: List[Rect] = []
    entities: List[Entity] = []
    player_start: Optional[Point] = None

    for _ in range(config.max_rooms):
        w = rng.randint(config.room_min_size, config.room_max_size)
        h = rng.randint(config.room_min_size, config.room_max_size)
        max_x = config.map_width - w - 1
        max_y = config.map_height - h - 1
        if max_x < 0 or max_y < 0:
            continue  # room cannot fit on this map at all
        new_room = Rect.from_size(rng.randint(0, max_x), rng.randint(0, max_y), w, h)

        if any(new_room.intersects(other) for other in rooms):
            continue

        create_room(new_room, grid)
        if not rooms:
            player_start = new_room.center
        else:
            connect_rooms(rooms[-1], new_room, grid, rng)

        spawned = place_objects(
            new_room,
            grid,
            entities,
            player_start,
            level_depth,
            config.spawn_tables,
            rng,
        )
        logger.debug(
            "Room %d at %s with %d entities", len(rooms), new_room, len(spawned)
        )
        entities.extend(spawned)
        rooms.append(new_room)

    if not rooms or player_start is None:
        raise DungeonGenerationError(
            f"No room fits a {config.map_width}x{config.map_height} map "
            f"after {config.max_rooms} attempts"
        )

    stairs = rooms[-1].center
    entities.append(create_stairs(*stairs))

    logger.info(
        "Generated dungeon level %d: %d rooms, %d entities",
        level_depth,
        len(rooms),
        len(entities),
    )
    return GeneratedLevel(
        grid=grid,
        entities=tuple(entities),
        player_start=player_start,
        stairs=stairs,
        rooms=tuple(rooms),
    )


def place_objects(
    room: Rect,
    grid: TileGrid,
    existing: Sequence[Entity],
    reserved: Optional[Point],
    level_depth: int,
    tables: SpawnTables,
    rng: random.Random,
) -> List[Entity]:
    """Roll monsters and items for ``room``.

    Candidates land on a random interior tile and are dropped if that tile is
    blocked (by terrain or a blocking entity) or is the ``reserved`` player
    start.
    """
    placed: List[Entity] = []

    def free(x: int, y: int) -> bool:
        if (x, y) == reserved:
            return False
        return not is_blocked(x, y, grid, [*existing, *placed])

    max_monsters = from_dungeon_level(tables.max_monsters, level_depth)
    monsters = monster_chances(tables, level_depth)
    for _ in range(rng.randint(0, max_monsters)):
        x, y = _random_interior_tile(room, rng)
        if free(x, y):
            kind = weighted_choice(monsters, rng)
            placed.append(MONSTER_FACTORIES[kind](x, y))

    max_items = from_dungeon_level(tables.max_items, level_depth)
    loot = loot_chances(tables, level_depth)
    for _ in range(rng.randint(0, max_items)):
        x, y = _random_interior_tile(room, rng)
        if free(x, y):
            kind = weighted_choice(loot, rng)
            placed.append(LOOT_FACTORIES[kind](x, y))

    return placed


def _random_interior_tile(room: Rect, rng: random.Random) -> Point:
    return rng.randint(room.x1 + 1, room.x2 - 1), rng.randint(room.y1 + 1, room.y2 - 1)
