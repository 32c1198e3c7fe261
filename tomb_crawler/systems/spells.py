"""Spell effects for usable items.

Every spell has the signature :data:`SpellFn` and answers ``USED`` or
``CANCELLED``. Target selection (and the full-health check for healing)
happens before any state changes, so a cancelled spell leaves the world
exactly as it was and the item stays in the inventory. The only side effect a
cancelled spell may have is a message explaining why.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from tomb_crawler import colors
from tomb_crawler.components import ConfusedAI
from tomb_crawler.config import GameConfig
from tomb_crawler.entity import PLAYER, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.prompts import Prompts
from tomb_crawler.systems.combat import apply_damage, gain_xp, heal
from tomb_crawler.systems.stats import full_max_hp
from tomb_crawler.types import EntityIndex, ItemKind, UseResult
from tomb_crawler.visibility import Visibility

logger = logging.getLogger(__name__)

SpellFn = Callable[[Game, EntityStore, Visibility, Prompts, GameConfig], UseResult]


def closest_monster(
    max_range: int, store: EntityStore, visibility: Visibility
) -> Optional[EntityIndex]:
    """Index of the nearest visible fighter (not the player) within range."""
    player = store.player
    closest: Optional[EntityIndex] = None
    closest_distance = float(max_range + 1)
    for index, entity in enumerate(store):
        if index == PLAYER or entity.fighter is None:
            continue
        if not visibility.is_visible(entity.x, entity.y):
            continue
        distance = player.distance_to(entity)
        if distance < closest_distance:
            closest, closest_distance = index, distance
    return closest


def cast_heal(
    game: Game,
    store: EntityStore,
    visibility: Visibility,
    prompts: Prompts,
    config: GameConfig,
) -> UseResult:
    player = store.player
    if player.fighter is None:
        return UseResult.CANCELLED
    max_hp = full_max_hp(PLAYER, store, game)
    if player.fighter.hp >= max_hp:
        game.log.add("You are already at full health.", colors.RED)
        return UseResult.CANCELLED
    game.log.add("Your wounds start to feel better!", colors.LIGHT_VIOLET)
    heal(player, config.heal_amount, max_hp)
    return UseResult.USED


def cast_lightning(
    game: Game,
    store: EntityStore,
    visibility: Visibility,
    prompts: Prompts,
    config: GameConfig,
) -> UseResult:
    target = closest_monster(config.lightning_range, store, visibility)
    if target is None:
        game.log.add("No enemy is close enough to strike.", colors.RED)
        return UseResult.CANCELLED

    monster = store[target]
    game.log.add(
        f"A lightning bolt strikes the {monster.name} with a loud thunder! "
        f"The damage is {config.lightning_damage} hit points.",
        colors.LIGHT_BLUE,
    )
    xp = apply_damage(monster, config.lightning_damage, game)
    if xp is not None:
        gain_xp(store.player, xp)
    return UseResult.USED


def cast_fireball(
    game: Game,
    store: EntityStore,
    visibility: Visibility,
    prompts: Prompts,
    config: GameConfig,
) -> UseResult:
    """Burn every fighter around a chosen tile, the caster included.

    Experience from kills is summed over the sweep and credited once at the
    end, never for the caster's own death.
    """
    game.log.add(
        "Left-click a target tile for the fireball, or right-click to cancel.",
        colors.LIGHT_CYAN,
    )
    target = prompts.target_tile(None)
    if target is None or not visibility.is_visible(*target):
        return UseResult.CANCELLED
    x, y = target

    game.log.add(
        f"The fireball explodes, burning everything within "
        f"{config.fireball_radius} tiles!",
        colors.ORANGE,
    )
    burned: List[Tuple[EntityIndex, str]] = [
        (index, entity.name)
        for index, entity in enumerate(store)
        if entity.fighter is not None
        and entity.distance(x, y) <= config.fireball_radius
    ]
    earned = 0
    for index, name in burned:
        game.log.add(
            f"The {name} gets burned for {config.fireball_damage} hit points.",
            colors.ORANGE,
        )
        xp = apply_damage(store[index], config.fireball_damage, game)
        if xp is not None and index != PLAYER:
            earned += xp
    gain_xp(store.player, earned)
    logger.debug("Fireball at %s hit %d fighters", target, len(burned))
    return UseResult.USED


def cast_confuse(
    game: Game,
    store: EntityStore,
    visibility: Visibility,
    prompts: Prompts,
    config: GameConfig,
) -> UseResult:
    target = closest_monster(config.confuse_range, store, visibility)
    if target is None:
        game.log.add("No enemy is close enough to confuse.", colors.RED)
        return UseResult.CANCELLED

    monster = store[target]
    monster.ai = ConfusedAI(
        previous_ai=monster.ai, turns_remaining=config.confuse_num_turns
    )
    game.log.add(
        f"The eyes of the {monster.name} look vacant, as he starts to stumble around!",
        colors.LIGHT_GREEN,
    )
    return UseResult.USED


SPELLS: Dict[ItemKind, SpellFn] = {
    ItemKind.HEAL: cast_heal,
    ItemKind.LIGHTNING: cast_lightning,
    ItemKind.FIREBALL: cast_fireball,
    ItemKind.CONFUSE: cast_confuse,
}
