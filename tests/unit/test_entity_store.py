# tests/unit/test_entity_store.py

import pytest

from tomb_crawler.entity import PLAYER, EntityStore
from tomb_crawler.levels.factories import create_healing_potion, create_stairs
from tests.test_utils import make_orc, make_player


def make_store() -> EntityStore:
    return EntityStore(
        [
            make_player(1, 1),
            make_orc(2, 1),
            create_healing_potion(3, 1),
            create_stairs(4, 1),
        ]
    )


def test_player_is_slot_zero() -> None:
    store = make_store()
    assert store.player is store[PLAYER]
    assert store.player.name == "player"


def test_append_returns_new_index() -> None:
    store = make_store()
    assert store.append(make_orc(5, 5)) == 4
    assert len(store) == 5


def test_pair_returns_two_distinct_entities() -> None:
    store = make_store()
    first, second = store.pair(0, 1)
    assert first is store[0]
    assert second is store[1]
    first.x = 9
    assert store[0].x == 9
    assert store[1].x == 2


def test_pair_same_index_raises() -> None:
    store = make_store()
    with pytest.raises(ValueError):
        store.pair(1, 1)


@pytest.mark.parametrize("first, second", [(0, 4), (7, 1), (-1, 1), (0, -2)])
def test_pair_out_of_bounds_raises(first: int, second: int) -> None:
    store = make_store()
    with pytest.raises(IndexError):
        store.pair(first, second)


def test_getitem_rejects_negative_index() -> None:
    store = make_store()
    with pytest.raises(IndexError):
        store[-1]


def test_swap_remove_moves_last_into_slot() -> None:
    store = make_store()
    stairs = store[3]
    removed = store.swap_remove(1)
    assert removed.name == "orc"
    assert len(store) == 3
    assert store[1] is stairs


def test_swap_remove_last_entity() -> None:
    store = make_store()
    removed = store.swap_remove(3)
    assert removed.name == "stairs"
    assert [e.name for e in store] == ["player", "orc", "healing potion"]


def test_truncate_keeps_prefix() -> None:
    store = make_store()
    store.truncate(1)
    assert len(store) == 1
    assert store.player.name == "player"


def test_index_at_with_predicate() -> None:
    store = make_store()
    store.append(create_healing_potion(2, 1))
    assert store.index_at(2, 1) == 1
    assert store.index_at(2, 1, lambda e: e.is_collectible) == 4
    assert store.index_at(8, 8) is None


def test_indices_in_store_order() -> None:
    store = make_store()
    assert store.indices(lambda e: e.fighter is not None) == [0, 1]


def test_distance_is_euclidean() -> None:
    store = make_store()
    assert store[0].distance(4, 5) == pytest.approx(5.0)
    assert store[0].distance_to(store[1]) == pytest.approx(1.0)
