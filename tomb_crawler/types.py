"""Common type aliases and enumerations.

``DeathKind`` and ``ItemKind`` are the closed tagged variants stored on
entities in place of callbacks; systems dispatch on them (see
:mod:`tomb_crawler.systems.combat` and :mod:`tomb_crawler.systems.spells`).
"""

from enum import StrEnum, auto
from typing import Tuple

EntityIndex = int
Point = Tuple[int, int]
Color = Tuple[int, int, int]


class DeathKind(StrEnum):
    """Death-resolution behavior selected by a ``Fighter``."""

    PLAYER = auto()
    MONSTER = auto()


class ItemKind(StrEnum):
    """Usable item effects."""

    HEAL = auto()
    LIGHTNING = auto()
    FIREBALL = auto()
    CONFUSE = auto()


class GameState(StrEnum):
    """Coarse game status; ``DEATH`` is terminal."""

    PLAYING = auto()
    DEATH = auto()


class UseResult(StrEnum):
    """Outcome of using an item. ``CANCELLED`` leaves the item in the inventory."""

    USED = auto()
    CANCELLED = auto()
