# tests/systems/test_inventory_system.py

from tomb_crawler.config import DEFAULT_CONFIG
from tomb_crawler.entity import Entity
from tomb_crawler.levels.factories import (
    create_dagger,
    create_healing_potion,
    create_lightning_scroll,
    create_shield,
    create_sword,
)
from tomb_crawler.systems.inventory import (
    drop_item,
    equip,
    get_equipped_in_slot,
    pick_item_up,
    pick_up_at_player,
    toggle_equip,
    use_item,
)
from tomb_crawler.systems.stats import full_defense, full_power
from tomb_crawler.types import UseResult
from tests.test_utils import (
    FakeVisibility,
    ScriptedPrompts,
    make_orc,
    make_player,
    make_world,
    message_texts,
)


def test_pickup_into_inventory() -> None:
    game, store = make_world(create_healing_potion(5, 5))
    assert pick_up_at_player(game, store, DEFAULT_CONFIG)
    assert len(store) == 1
    assert [item.name for item in game.inventory] == ["healing potion"]
    assert message_texts(game.log) == ["You picked up a healing potion!"]


def test_pickup_swaps_last_into_slot() -> None:
    game, store = make_world(create_healing_potion(5, 5), make_orc(8, 8))
    orc = store[2]
    pick_item_up(1, game, store, DEFAULT_CONFIG)
    assert store[1] is orc


def test_full_inventory_leaves_item_on_map() -> None:
    game, store = make_world(create_healing_potion(5, 5))
    game.inventory.extend(create_healing_potion(0, 0) for _ in range(26))
    assert not pick_item_up(1, game, store, DEFAULT_CONFIG)
    assert len(game.inventory) == 26
    assert store[1].name == "healing potion"
    assert store[1].pos == (5, 5)
    assert message_texts(game.log) == [
        "Your inventory is full, cannot pick up healing potion."
    ]


def test_nothing_to_pick_up() -> None:
    game, store = make_world(make_orc(5, 6))
    assert not pick_up_at_player(game, store, DEFAULT_CONFIG)
    assert len(game.log) == 0


def test_equipment_auto_equips_into_free_slot() -> None:
    game, store = make_world(create_sword(5, 5), create_shield(5, 5))
    pick_up_at_player(game, store, DEFAULT_CONFIG)
    pick_up_at_player(game, store, DEFAULT_CONFIG)
    assert all(item.equipment.is_equipped for item in game.inventory)
    assert full_power(0, store, game) == 5
    assert full_defense(0, store, game) == 2


def test_equipment_stays_off_when_slot_taken() -> None:
    game, store = make_world(create_sword(5, 5))
    game.inventory.append(create_dagger())
    equip(0, game)
    pick_up_at_player(game, store, DEFAULT_CONFIG)
    assert game.inventory[0].equipment.is_equipped
    assert not game.inventory[1].equipment.is_equipped


def test_equip_replaces_slot_occupant() -> None:
    game, _ = make_world()
    game.inventory.extend([create_dagger(), create_sword(0, 0)])
    equip(0, game)
    equip(1, game)
    assert get_equipped_in_slot("right hand", game) == 1
    assert not game.inventory[0].equipment.is_equipped


def test_toggle_equip() -> None:
    game, _ = make_world()
    game.inventory.append(create_shield(0, 0))
    toggle_equip(0, game)
    assert game.inventory[0].equipment.is_equipped
    toggle_equip(0, game)
    assert not game.inventory[0].equipment.is_equipped
    assert game.log.last.text == "Dequipped shield from left hand."


def test_drop_dequips_and_places_at_player() -> None:
    game, store = make_world(player=make_player(3, 4))
    game.inventory.append(create_sword(0, 0))
    equip(0, game)
    drop_item(0, game, store)
    assert game.inventory == []
    dropped = store[1]
    assert dropped.pos == (3, 4)
    assert not dropped.equipment.is_equipped
    assert game.log.last.text == "You dropped a sword."


def test_used_potion_is_consumed() -> None:
    game, store = make_world(player=make_player(hp=50))
    game.inventory.append(create_healing_potion(0, 0))
    result = use_item(
        0, game, store, FakeVisibility(), ScriptedPrompts(), DEFAULT_CONFIG
    )
    assert result is UseResult.USED
    assert game.inventory == []
    assert store.player.fighter.hp == 90


def test_cancelled_spell_keeps_item() -> None:
    game, store = make_world()
    game.inventory.append(create_lightning_scroll(0, 0))
    result = use_item(
        0, game, store, FakeVisibility(), ScriptedPrompts(), DEFAULT_CONFIG
    )
    assert result is UseResult.CANCELLED
    assert len(game.inventory) == 1
    assert game.log.last.text == "Cancelled"


def test_unusable_item() -> None:
    game, store = make_world()
    game.inventory.append(Entity(0, 0, "?", "rock", (127, 127, 127)))
    result = use_item(
        0, game, store, FakeVisibility(), ScriptedPrompts(), DEFAULT_CONFIG
    )
    assert result is None
    assert len(game.inventory) == 1
    assert message_texts(game.log) == ["The rock cannot be used."]


def test_using_equipment_toggles_it() -> None:
    game, store = make_world()
    game.inventory.append(create_dagger())
    result = use_item(
        0, game, store, FakeVisibility(), ScriptedPrompts(), DEFAULT_CONFIG
    )
    assert result is UseResult.USED
    assert game.inventory[0].equipment.is_equipped
