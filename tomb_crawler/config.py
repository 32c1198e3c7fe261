"""Game configuration.

All tunable constants live on the frozen :class:`GameConfig`. Systems receive
the config as an explicit argument, so tests can shrink the map or change
spell values without touching module state.
"""

from dataclasses import dataclass, field

from tomb_crawler.content import SpawnTables


@dataclass(frozen=True)
class GameConfig:
    # Map
    map_width: int = 80
    map_height: int = 43

    # Dungeon generator
    room_min_size: int = 6
    room_max_size: int = 10
    max_rooms: int = 30

    # Spells
    heal_amount: int = 40
    lightning_damage: int = 40
    lightning_range: int = 5
    confuse_range: int = 8
    confuse_num_turns: int = 10
    fireball_radius: int = 3
    fireball_damage: int = 25

    # Experience
    level_up_base: int = 200
    level_up_factor: int = 150

    # Field of view
    torch_radius: int = 10
    fov_light_walls: bool = True

    # Player bookkeeping
    inventory_capacity: int = 26
    message_capacity: int = 6

    spawn_tables: SpawnTables = field(default_factory=SpawnTables)


DEFAULT_CONFIG = GameConfig()
