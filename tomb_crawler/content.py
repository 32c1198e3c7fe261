"""Depth-scaled content tables.

Two primitives drive every spawn decision:

* :func:`from_dungeon_level` turns a *transition table* (a sorted sequence of
  ``(threshold_level, value)`` pairs) into a step function of the dungeon
  level.
* :func:`weighted_choice` picks one candidate with probability proportional to
  its integer weight.

:class:`SpawnTables` bundles the tables used by the dungeon generator. The
tables are persistent vectors so a configuration value can be shared freely
between levels and tests.

Examples
--------
>>> table = transition_table((1, 2), (4, 3), (6, 5))
>>> [from_dungeon_level(table, level) for level in (0, 1, 4, 5, 6, 9)]
[0, 2, 3, 3, 5, 5]
"""

import random
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import List, Sequence, Tuple, TypeVar

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap, PVector

T = TypeVar("T")

TransitionTable = PVector[Tuple[int, int]]
Weighted = Tuple[int, T]


class MonsterKind(StrEnum):
    ORC = auto()
    TROLL = auto()


class LootKind(StrEnum):
    HEAL = auto()
    LIGHTNING = auto()
    FIREBALL = auto()
    CONFUSE = auto()
    SWORD = auto()
    SHIELD = auto()


def transition_table(*entries: Tuple[int, int]) -> TransitionTable:
    """Build a table from ``(threshold_level, value)`` pairs, kept in given order."""
    return pvector(entries)


def from_dungeon_level(table: Sequence[Tuple[int, int]], level: int) -> int:
    """Return the value of the highest threshold not above ``level`` (default 0).

    The table must be sorted ascending by threshold; that is the caller's
    responsibility.
    """
    for threshold, value in reversed(table):
        if level >= threshold:
            return value
    return 0


def weighted_choice(candidates: Sequence[Weighted[T]], rng: random.Random) -> T:
    """Pick a candidate value with probability ``weight / total``.

    Raises:
        ValueError: If a weight is negative or all weights are zero.
    """
    total = 0
    for weight, _ in candidates:
        if weight < 0:
            raise ValueError(f"Negative weight: {weight}")
        total += weight
    if total <= 0:
        raise ValueError("weighted_choice needs at least one positive weight")

    roll = rng.randrange(total)
    for weight, value in candidates:
        if roll < weight:
            return value
        roll -= weight
    raise AssertionError("unreachable: roll exceeded total weight")


def _default_monster_weights() -> PMap[MonsterKind, TransitionTable]:
    return pmap(
        {
            MonsterKind.ORC: transition_table((0, 80)),
            MonsterKind.TROLL: transition_table((3, 15), (5, 30), (7, 60)),
        }
    )


def _default_loot_weights() -> PMap[LootKind, TransitionTable]:
    return pmap(
        {
            LootKind.HEAL: transition_table((0, 35)),
            LootKind.LIGHTNING: transition_table((4, 25)),
            LootKind.FIREBALL: transition_table((6, 25)),
            LootKind.CONFUSE: transition_table((2, 10)),
            LootKind.SWORD: transition_table((4, 5)),
            LootKind.SHIELD: transition_table((8, 15)),
        }
    )


@dataclass(frozen=True)
class SpawnTables:
    """Per-room spawn caps and per-kind spawn weights, keyed by dungeon level.

    Attributes:
        max_monsters: Cap on monsters rolled per room.
        max_items: Cap on items rolled per room.
        monster_weights: Weight table for each monster kind.
        loot_weights: Weight table for each item kind.
    """

    max_monsters: TransitionTable = field(
        default_factory=lambda: transition_table((1, 2), (4, 3), (6, 5))
    )
    max_items: TransitionTable = field(
        default_factory=lambda: transition_table((1, 1), (4, 2))
    )
    monster_weights: PMap[MonsterKind, TransitionTable] = field(
        default_factory=_default_monster_weights
    )
    loot_weights: PMap[LootKind, TransitionTable] = field(
        default_factory=_default_loot_weights
    )


def monster_chances(tables: SpawnTables, level: int) -> List[Weighted[MonsterKind]]:
    """Weighted monster candidates for ``level`` in declaration order."""
    return [
        (from_dungeon_level(tables.monster_weights[kind], level), kind)
        for kind in MonsterKind
        if kind in tables.monster_weights
    ]


def loot_chances(tables: SpawnTables, level: int) -> List[Weighted[LootKind]]:
    """Weighted item candidates for ``level`` in declaration order."""
    return [
        (from_dungeon_level(tables.loot_weights[kind], level), kind)
        for kind in LootKind
        if kind in tables.loot_weights
    ]
