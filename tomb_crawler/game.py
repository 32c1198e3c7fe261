"""The ``Game`` aggregate.

Everything about a run that is not an entity on the map: the current level's
tile grid, the message log, the player's inventory, the dungeon depth and the
game-over flag. The map's entities live separately in an
:class:`tomb_crawler.entity.EntityStore`; the two together make up a full
snapshot (see :mod:`tomb_crawler.persistence`).

New games and level changes are built by
:mod:`tomb_crawler.systems.progression`.
"""

from dataclasses import dataclass, field
from typing import List

from tomb_crawler.entity import Entity
from tomb_crawler.grid import TileGrid
from tomb_crawler.messages import MessageLog
from tomb_crawler.types import GameState


@dataclass
class Game:
    """Mutable per-run state.

    Attributes:
        tile_grid: Layout of the current level; replaced on every descent.
        log: Narration shown to the player.
        inventory: Entities carried by the player, at most
            ``GameConfig.inventory_capacity`` of them.
        dungeon_level: Depth, starting at 1 and only ever increasing.
        state: ``DEATH`` once the player has died.
    """

    tile_grid: TileGrid
    log: MessageLog = field(default_factory=MessageLog)
    inventory: List[Entity] = field(default_factory=list)
    dungeon_level: int = 1
    state: GameState = GameState.PLAYING

    @property
    def is_over(self) -> bool:
        return self.state is GameState.DEATH
