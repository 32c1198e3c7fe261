"""Inventory and equipment system.

Items move by value between the map's :class:`EntityStore` and the player's
inventory list on :class:`Game`:

1. Pickup removes the item from the store with ``swap_remove`` (invalidating
   the index of the entity that used to be last) and appends it to the
   inventory. A full inventory leaves the item on the ground.
2. Dropping appends the item back to the store at the player's position.
3. Using dispatches on the item's :class:`ItemKind` through
   :data:`tomb_crawler.systems.spells.SPELLS`; a used item is destroyed.
   Equipment is "used" by toggling it on or off.

Failures the player can cause (full inventory, unusable item, cancelled
spell) only add a message.
"""

from dataclasses import replace
from typing import Optional

from tomb_crawler import colors
from tomb_crawler.config import GameConfig
from tomb_crawler.entity import EntityStore
from tomb_crawler.game import Game
from tomb_crawler.prompts import Prompts
from tomb_crawler.systems.spells import SPELLS
from tomb_crawler.types import EntityIndex, UseResult
from tomb_crawler.visibility import Visibility


def pick_item_up(
    index: EntityIndex, game: Game, store: EntityStore, config: GameConfig
) -> bool:
    """Move the entity at ``index`` into the inventory.

    Returns:
        bool: Whether the item was picked up. On success the store index of
        the previously last entity is no longer valid.
    """
    if len(game.inventory) >= config.inventory_capacity:
        game.log.add(
            f"Your inventory is full, cannot pick up {store[index].name}.", colors.RED
        )
        return False

    item = store.swap_remove(index)
    game.log.add(f"You picked up a {item.name}!", colors.GREEN)
    game.inventory.append(item)
    inventory_index = len(game.inventory) - 1

    # equip straight away when the slot is free
    if item.equipment is not None:
        if get_equipped_in_slot(item.equipment.slot, game) is None:
            equip(inventory_index, game)
    return True


def pick_up_at_player(game: Game, store: EntityStore, config: GameConfig) -> bool:
    """Pick up the first collectible on the player's tile, if any."""
    player = store.player
    index = store.index_at(player.x, player.y, lambda e: e.is_collectible)
    if index is None:
        return False
    return pick_item_up(index, game, store, config)


def drop_item(inventory_index: int, game: Game, store: EntityStore) -> None:
    if game.inventory[inventory_index].equipment is not None:
        dequip(inventory_index, game)
    item = game.inventory.pop(inventory_index)
    item.set_pos(*store.player.pos)
    game.log.add(f"You dropped a {item.name}.", colors.YELLOW)
    store.append(item)


def use_item(
    inventory_index: int,
    game: Game,
    store: EntityStore,
    visibility: Visibility,
    prompts: Prompts,
    config: GameConfig,
) -> Optional[UseResult]:
    """Use an inventory item.

    Returns:
        Optional[UseResult]: The spell's result, ``USED`` for an equipment
        toggle, or ``None`` if the item cannot be used at all.
    """
    item = game.inventory[inventory_index]
    if item.equipment is not None:
        toggle_equip(inventory_index, game)
        return UseResult.USED
    if item.item is None:
        game.log.add(f"The {item.name} cannot be used.")
        return None

    result = SPELLS[item.item](game, store, visibility, prompts, config)
    if result is UseResult.USED:
        del game.inventory[inventory_index]
    else:
        game.log.add("Cancelled")
    return result


def get_equipped_in_slot(slot: str, game: Game) -> Optional[int]:
    """Inventory index of the equipped item in ``slot``, if any."""
    for inventory_index, item in enumerate(game.inventory):
        if (
            item.equipment is not None
            and item.equipment.is_equipped
            and item.equipment.slot == slot
        ):
            return inventory_index
    return None


def toggle_equip(inventory_index: int, game: Game) -> None:
    equipment = game.inventory[inventory_index].equipment
    if equipment is not None and equipment.is_equipped:
        dequip(inventory_index, game)
    else:
        equip(inventory_index, game)


def equip(inventory_index: int, game: Game) -> None:
    """Equip an item, first taking off whatever occupies its slot."""
    item = game.inventory[inventory_index]
    if item.equipment is None:
        return
    old = get_equipped_in_slot(item.equipment.slot, game)
    if old is not None:
        dequip(old, game)
    item.equipment = replace(item.equipment, is_equipped=True)
    game.log.add(
        f"Equipped {item.name} on {item.equipment.slot}.", colors.LIGHT_GREEN
    )


def dequip(inventory_index: int, game: Game) -> None:
    item = game.inventory[inventory_index]
    if item.equipment is None or not item.equipment.is_equipped:
        return
    item.equipment = replace(item.equipment, is_equipped=False)
    game.log.add(
        f"Dequipped {item.name} from {item.equipment.slot}.", colors.LIGHT_YELLOW
    )
