"""Factory functions for the entities the game knows about.

Each helper returns a fresh :class:`tomb_crawler.entity.Entity` with a
preconfigured capability set (player, orc, troll, potions and scrolls,
equipment, stairs). The generator maps spawn-table kinds to these through
:data:`MONSTER_FACTORIES` and :data:`LOOT_FACTORIES`.
"""

from typing import Callable, Dict

from tomb_crawler import colors
from tomb_crawler.components import BasicAI, Equipment, Fighter
from tomb_crawler.content import LootKind, MonsterKind
from tomb_crawler.entity import Entity
from tomb_crawler.types import DeathKind, ItemKind

EntityFactory = Callable[[int, int], Entity]


def create_player(x: int = 0, y: int = 0) -> Entity:
    """Player at level 1 with 100 hp, defense 1 and power 2."""
    return Entity(
        x,
        y,
        "@",
        "player",
        colors.WHITE,
        blocks=True,
        level=1,
        fighter=Fighter(
            max_hp=100, hp=100, defense=1, power=2, on_death=DeathKind.PLAYER
        ),
    )


def create_orc(x: int, y: int) -> Entity:
    return Entity(
        x,
        y,
        "o",
        "orc",
        colors.DESATURATED_GREEN,
        blocks=True,
        fighter=Fighter(max_hp=20, hp=20, defense=0, power=4, xp_reward=35),
        ai=BasicAI(),
    )


def create_troll(x: int, y: int) -> Entity:
    return Entity(
        x,
        y,
        "T",
        "troll",
        colors.DARKER_GREEN,
        blocks=True,
        fighter=Fighter(max_hp=30, hp=30, defense=2, power=8, xp_reward=100),
        ai=BasicAI(),
    )


def create_healing_potion(x: int, y: int) -> Entity:
    return Entity(x, y, "!", "healing potion", colors.VIOLET, item=ItemKind.HEAL)


def create_lightning_scroll(x: int, y: int) -> Entity:
    return Entity(
        x,
        y,
        "#",
        "scroll of lightning bolt",
        colors.LIGHT_YELLOW,
        item=ItemKind.LIGHTNING,
    )


def create_fireball_scroll(x: int, y: int) -> Entity:
    return Entity(
        x, y, "#", "scroll of fireball", colors.LIGHT_YELLOW, item=ItemKind.FIREBALL
    )


def create_confuse_scroll(x: int, y: int) -> Entity:
    return Entity(
        x, y, "#", "scroll of confusion", colors.LIGHT_YELLOW, item=ItemKind.CONFUSE
    )


def create_sword(x: int, y: int) -> Entity:
    return Entity(
        x,
        y,
        "/",
        "sword",
        colors.SKY,
        equipment=Equipment(slot="right hand", power_bonus=3),
    )


def create_shield(x: int, y: int) -> Entity:
    return Entity(
        x,
        y,
        "[",
        "shield",
        colors.DARKER_ORANGE,
        equipment=Equipment(slot="left hand", defense_bonus=1),
    )


def create_dagger(x: int = 0, y: int = 0) -> Entity:
    """Starting weapon."""
    return Entity(
        x,
        y,
        "-",
        "dagger",
        colors.SKY,
        equipment=Equipment(slot="right hand", power_bonus=2),
    )


def create_stairs(x: int, y: int) -> Entity:
    """Non-blocking landmark that stays drawn once its tile is explored."""
    return Entity(x, y, "<", "stairs", colors.WHITE, always_visible=True)


MONSTER_FACTORIES: Dict[MonsterKind, EntityFactory] = {
    MonsterKind.ORC: create_orc,
    MonsterKind.TROLL: create_troll,
}

LOOT_FACTORIES: Dict[LootKind, EntityFactory] = {
    LootKind.HEAL: create_healing_potion,
    LootKind.LIGHTNING: create_lightning_scroll,
    LootKind.FIREBALL: create_fireball_scroll,
    LootKind.CONFUSE: create_confuse_scroll,
    LootKind.SWORD: create_sword,
    LootKind.SHIELD: create_shield,
}
