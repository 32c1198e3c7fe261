"""Entities and the index-addressed entity store.

Every positioned thing in a level (player, monsters, items, stairs, corpses)
is an :class:`Entity`. Entities are kept in a single :class:`EntityStore` and
addressed only by their position in it; there is no stable identity.

Index discipline:

* The player always occupies slot :data:`PLAYER` (0).
* :meth:`EntityStore.swap_remove` moves the last entity into the removed slot.
  Any index computed before a removal must be looked up again (by position
  and liveness) before use.
* Dead monsters are never removed; they stay behind as corpses.

Examples
--------
>>> from tomb_crawler.entity import Entity, EntityStore
>>> store = EntityStore([Entity(1, 1, "@", "player", (255, 255, 255), blocks=True)])
>>> store.append(Entity(2, 1, "o", "orc", (63, 127, 63), blocks=True))
1
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from tomb_crawler.components import AI, Equipment, Fighter
from tomb_crawler.types import Color, EntityIndex, ItemKind, Point

PLAYER: EntityIndex = 0


@dataclass
class Entity:
    """Mutable actor / object record.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
        glyph: Display character.
        name: Display name, also used in narration.
        color: Display color.
        blocks: Occupies its tile exclusively for movement.
        alive: Cleared exactly once when a fighter dies.
        always_visible: Drawn on explored tiles even outside the field of view.
        level: Character level (the player starts at 1).
        fighter: Optional combat capability.
        ai: Optional autonomous behavior.
        item: Optional usable effect.
        equipment: Optional wearable bonuses.
    """

    x: int
    y: int
    glyph: str
    name: str
    color: Color
    blocks: bool = False
    alive: bool = True
    always_visible: bool = False
    level: int = 0
    fighter: Optional[Fighter] = None
    ai: Optional[AI] = None
    item: Optional[ItemKind] = None
    equipment: Optional[Equipment] = None

    @property
    def pos(self) -> Point:
        return self.x, self.y

    def set_pos(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance_to(self, other: "Entity") -> float:
        """Euclidean distance to another entity."""
        return self.distance(other.x, other.y)

    def distance(self, x: int, y: int) -> float:
        """Euclidean distance to a tile."""
        return math.hypot(x - self.x, y - self.y)

    @property
    def is_collectible(self) -> bool:
        """True for entities that can be carried in the inventory."""
        return self.item is not None or self.equipment is not None


class EntityStore:
    """Insertion-ordered, index-addressed collection of entities."""

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._entities: List[Entity] = list(entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self, index: EntityIndex) -> Entity:
        self._check_index(index)
        return self._entities[index]

    @property
    def player(self) -> Entity:
        return self[PLAYER]

    def append(self, entity: Entity) -> EntityIndex:
        """Add ``entity`` at the end and return its index."""
        self._entities.append(entity)
        return len(self._entities) - 1

    def extend(self, entities: Iterable[Entity]) -> None:
        self._entities.extend(entities)

    def pair(self, first: EntityIndex, second: EntityIndex) -> Tuple[Entity, Entity]:
        """Return two distinct entities for simultaneous mutation.

        Raises:
            ValueError: If ``first == second``.
            IndexError: If either index is out of bounds.
        """
        if first == second:
            raise ValueError(f"Cannot borrow entity {first} twice")
        self._check_index(first)
        self._check_index(second)
        return self._entities[first], self._entities[second]

    def swap_remove(self, index: EntityIndex) -> Entity:
        """Remove and return the entity at ``index`` in O(1).

        The last entity takes the freed slot, so its previous index is no
        longer valid after this call.
        """
        self._check_index(index)
        entities = self._entities
        entities[index], entities[-1] = entities[-1], entities[index]
        return entities.pop()

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` entities."""
        del self._entities[length:]

    def index_at(
        self,
        x: int,
        y: int,
        predicate: Optional[Callable[[Entity], bool]] = None,
    ) -> Optional[EntityIndex]:
        """Return the first index at ``(x, y)`` matching ``predicate``."""
        for index, entity in enumerate(self._entities):
            if entity.pos == (x, y) and (predicate is None or predicate(entity)):
                return index
        return None

    def indices(self, predicate: Callable[[Entity], bool]) -> List[EntityIndex]:
        """Return all indices whose entity matches ``predicate``, in store order."""
        return [i for i, entity in enumerate(self._entities) if predicate(entity)]

    def _check_index(self, index: EntityIndex) -> None:
        if not 0 <= index < len(self._entities):
            raise IndexError(
                f"Entity index {index} out of bounds for store of {len(self._entities)}"
            )
