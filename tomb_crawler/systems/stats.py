"""Effective fighter statistics.

A fighter's base stats live on its :class:`tomb_crawler.components.Fighter`.
The player additionally benefits from every equipped item in the inventory;
no other entity carries equipment.
"""

from typing import List

from tomb_crawler.components import Equipment
from tomb_crawler.entity import PLAYER, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.types import EntityIndex


def get_all_equipped(index: EntityIndex, game: Game) -> List[Equipment]:
    if index != PLAYER:
        return []
    return [
        item.equipment
        for item in game.inventory
        if item.equipment is not None and item.equipment.is_equipped
    ]


def full_power(index: EntityIndex, store: EntityStore, game: Game) -> int:
    fighter = store[index].fighter
    base = fighter.power if fighter is not None else 0
    return base + sum(e.power_bonus for e in get_all_equipped(index, game))


def full_defense(index: EntityIndex, store: EntityStore, game: Game) -> int:
    fighter = store[index].fighter
    base = fighter.defense if fighter is not None else 0
    return base + sum(e.defense_bonus for e in get_all_equipped(index, game))


def full_max_hp(index: EntityIndex, store: EntityStore, game: Game) -> int:
    fighter = store[index].fighter
    base = fighter.max_hp if fighter is not None else 0
    return base + sum(e.max_hp_bonus for e in get_all_equipped(index, game))
