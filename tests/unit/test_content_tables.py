# tests/unit/test_content_tables.py

import random
from collections import Counter

import pytest

from tomb_crawler.content import (
    LootKind,
    MonsterKind,
    SpawnTables,
    from_dungeon_level,
    loot_chances,
    monster_chances,
    transition_table,
    weighted_choice,
)


@pytest.mark.parametrize(
    "level, expected",
    [(0, 0), (1, 2), (3, 2), (4, 3), (5, 3), (6, 5), (50, 5)],
)
def test_from_dungeon_level_steps(level: int, expected: int) -> None:
    table = transition_table((1, 2), (4, 3), (6, 5))
    assert from_dungeon_level(table, level) == expected


def test_from_dungeon_level_empty_table() -> None:
    assert from_dungeon_level(transition_table(), 10) == 0


def test_from_dungeon_level_is_monotonic() -> None:
    table = transition_table((3, 15), (5, 30), (7, 60))
    values = [from_dungeon_level(table, level) for level in range(12)]
    assert values == sorted(values)


def test_weighted_choice_skips_zero_weights() -> None:
    rng = random.Random(1)
    picks = {weighted_choice([(0, "a"), (5, "b"), (0, "c")], rng) for _ in range(50)}
    assert picks == {"b"}


def test_weighted_choice_roughly_proportional() -> None:
    rng = random.Random(7)
    counts = Counter(weighted_choice([(1, "a"), (3, "b")], rng) for _ in range(4000))
    assert 0.7 < counts["b"] / 4000 < 0.8


def test_weighted_choice_all_zero_raises() -> None:
    with pytest.raises(ValueError):
        weighted_choice([(0, "a"), (0, "b")], random.Random(0))


def test_weighted_choice_negative_raises() -> None:
    with pytest.raises(ValueError):
        weighted_choice([(5, "a"), (-1, "b")], random.Random(0))


def test_weighted_choice_empty_raises() -> None:
    with pytest.raises(ValueError):
        weighted_choice([], random.Random(0))


def test_monster_chances_by_depth() -> None:
    tables = SpawnTables()
    assert monster_chances(tables, 1) == [(80, MonsterKind.ORC), (0, MonsterKind.TROLL)]
    assert monster_chances(tables, 7) == [
        (80, MonsterKind.ORC),
        (60, MonsterKind.TROLL),
    ]


def test_loot_chances_unlock_with_depth() -> None:
    tables = SpawnTables()
    shallow = dict((kind, weight) for weight, kind in loot_chances(tables, 1))
    deep = dict((kind, weight) for weight, kind in loot_chances(tables, 8))
    assert shallow[LootKind.HEAL] == 35
    assert shallow[LootKind.SWORD] == 0
    assert shallow[LootKind.SHIELD] == 0
    assert deep[LootKind.FIREBALL] == 25
    assert deep[LootKind.SHIELD] == 15


def test_default_room_caps() -> None:
    tables = SpawnTables()
    assert from_dungeon_level(tables.max_monsters, 1) == 2
    assert from_dungeon_level(tables.max_items, 1) == 1
    assert from_dungeon_level(tables.max_items, 4) == 2
