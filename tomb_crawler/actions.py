"""Player intents and action enumerations.

Raw keyboard or mouse input is mapped upstream into an :class:`Intent`: an
:class:`Action` plus either a :class:`Direction` (movement) or an inventory
slot (use / drop). The turn engine only ever sees intents.

:class:`GymAction` is the stable integer mapping used by the Gymnasium
environment, where inventory slots cannot be chosen freely.
"""

from dataclasses import dataclass
from enum import IntEnum, StrEnum, auto
from typing import Dict, Optional

from tomb_crawler.types import Point


class Direction(StrEnum):
    """The eight compass directions."""

    NORTH = auto()
    SOUTH = auto()
    WEST = auto()
    EAST = auto()
    NORTH_WEST = auto()
    NORTH_EAST = auto()
    SOUTH_WEST = auto()
    SOUTH_EAST = auto()


DIRECTION_DELTAS: Dict[Direction, Point] = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.EAST: (1, 0),
    Direction.NORTH_WEST: (-1, -1),
    Direction.NORTH_EAST: (1, -1),
    Direction.SOUTH_WEST: (-1, 1),
    Direction.SOUTH_EAST: (1, 1),
}


class Action(StrEnum):
    """String enum of player actions.

    Members:
        MOVE: Step (or attack) in a direction.
        WAIT: Pass the turn.
        PICK_UP: Collect an item on the player's tile.
        OPEN_INVENTORY: Show the inventory menu.
        USE_ITEM, DROP_ITEM: Act on an inventory slot.
        DESCEND: Take the stairs.
        CHARACTER_INFO: Show the character sheet.
        NONE: No input this frame.
        EXIT: Leave the game.
    """

    MOVE = auto()
    WAIT = auto()
    PICK_UP = auto()
    OPEN_INVENTORY = auto()
    USE_ITEM = auto()
    DROP_ITEM = auto()
    DESCEND = auto()
    CHARACTER_INFO = auto()
    NONE = auto()
    EXIT = auto()


@dataclass(frozen=True)
class Intent:
    action: Action
    direction: Optional[Direction] = None
    slot: Optional[int] = None

    @classmethod
    def move(cls, direction: Direction) -> "Intent":
        return cls(Action.MOVE, direction=direction)

    @classmethod
    def use(cls, slot: int) -> "Intent":
        return cls(Action.USE_ITEM, slot=slot)

    @classmethod
    def drop(cls, slot: int) -> "Intent":
        return cls(Action.DROP_ITEM, slot=slot)


class GymAction(IntEnum):
    """Stable integer mapping for integration with Gymnasium ``Discrete`` spaces."""

    NORTH = 0
    SOUTH = auto()
    WEST = auto()
    EAST = auto()
    NORTH_WEST = auto()
    NORTH_EAST = auto()
    SOUTH_WEST = auto()
    SOUTH_EAST = auto()
    WAIT = auto()
    PICK_UP = auto()
    DESCEND = auto()
    USE_FIRST_ITEM = auto()
    DROP_FIRST_ITEM = auto()


def intent_from_gym(action: GymAction) -> Intent:
    """Translate a gym action; item actions address inventory slot 0."""
    action = GymAction(action)
    if action <= GymAction.SOUTH_EAST:
        return Intent.move(Direction[action.name])
    if action is GymAction.WAIT:
        return Intent(Action.WAIT)
    if action is GymAction.PICK_UP:
        return Intent(Action.PICK_UP)
    if action is GymAction.DESCEND:
        return Intent(Action.DESCEND)
    if action is GymAction.USE_FIRST_ITEM:
        return Intent.use(0)
    return Intent.drop(0)
