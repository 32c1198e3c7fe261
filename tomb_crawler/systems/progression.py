"""Run setup and character progression.

* :func:`new_game` builds a fresh :class:`Game` and entity store on dungeon
  level 1, with the player carrying an equipped dagger.
* :func:`next_level` descends the stairs: the player rests (healing half of
  their maximum hp), the depth goes up by one and a new level replaces the
  old one. Everything except the player is dropped from the store.
* :func:`check_level_up` spends experience on a new character level once the
  threshold ``level_up_base + level * level_up_factor`` is reached and asks
  the player which stat to raise.
"""

import logging
import random
from dataclasses import replace
from typing import List, Optional, Tuple

from tomb_crawler import colors
from tomb_crawler.config import DEFAULT_CONFIG, GameConfig
from tomb_crawler.entity import PLAYER, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.grid import TileGrid
from tomb_crawler.levels.factories import create_dagger, create_player
from tomb_crawler.levels.generator import GeneratedLevel, generate
from tomb_crawler.messages import MessageLog
from tomb_crawler.prompts import Prompts
from tomb_crawler.systems.combat import heal
from tomb_crawler.systems.inventory import equip
from tomb_crawler.systems.stats import full_defense, full_max_hp, full_power

logger = logging.getLogger(__name__)

LEVEL_UP_HP = 20


def populate_level(
    game: Game,
    store: EntityStore,
    config: GameConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> GeneratedLevel:
    """Generate ``game.dungeon_level`` and install it.

    The store is cut back to just the player, who is moved to the start
    position; spawned entities (and the stairs) are appended after it.
    """
    level = generate(game.dungeon_level, config, rng)
    store.truncate(PLAYER + 1)
    store.player.set_pos(*level.player_start)
    store.extend(level.entities)
    game.tile_grid = level.grid
    return level


def new_game(
    config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None
) -> Tuple[Game, EntityStore]:
    store = EntityStore([create_player()])
    game = Game(
        tile_grid=TileGrid(config.map_width, config.map_height),
        log=MessageLog(config.message_capacity),
    )
    populate_level(game, store, config, rng)
    game.log.add(
        "Welcome stranger! Prepare to perish in the Tombs of the Ancient Kings.",
        colors.RED,
    )
    game.inventory.append(create_dagger())
    equip(len(game.inventory) - 1, game)
    logger.info("New game started")
    return game, store


def player_on_stairs(store: EntityStore) -> bool:
    player = store.player
    return (
        store.index_at(player.x, player.y, lambda e: e.name == "stairs") is not None
    )


def next_level(
    game: Game,
    store: EntityStore,
    config: GameConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> GeneratedLevel:
    """Rest, then descend to a freshly generated, deeper level."""
    game.log.add(
        "You take a moment to rest, and recover your strength.", colors.LIGHT_VIOLET
    )
    max_hp = full_max_hp(PLAYER, store, game)
    heal(store.player, max_hp // 2, max_hp)
    game.log.add(
        "After a rare moment of peace, you descend deeper into the heart of the dungeon...",
        colors.RED,
    )
    game.dungeon_level += 1
    level = populate_level(game, store, config, rng)
    logger.info("Descended to dungeon level %d", game.dungeon_level)
    return level


def level_up_xp(level: int, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Experience needed to advance from character ``level``."""
    return config.level_up_base + level * config.level_up_factor


def level_up_options(game: Game, store: EntityStore) -> List[str]:
    return [
        f"Constitution (+{LEVEL_UP_HP} HP, from {full_max_hp(PLAYER, store, game)})",
        f"Strength (+1 attack, from {full_power(PLAYER, store, game)})",
        f"Agility (+1 defense, from {full_defense(PLAYER, store, game)})",
    ]


def check_level_up(
    game: Game,
    store: EntityStore,
    prompts: Prompts,
    config: GameConfig = DEFAULT_CONFIG,
) -> bool:
    """Level the player up if they have enough experience.

    Blocks on ``prompts.choose_level_up`` until it returns a valid option.

    Returns:
        bool: Whether a level was gained.
    """
    player = store.player
    fighter = player.fighter
    if fighter is None:
        return False
    required = level_up_xp(player.level, config)
    if fighter.xp < required:
        return False

    player.level += 1
    game.log.add(
        f"Your battle skills grow stronger! You reached level {player.level}!",
        colors.YELLOW,
    )
    options = level_up_options(game, store)
    choice = prompts.choose_level_up(options)
    while choice not in (0, 1, 2):
        choice = prompts.choose_level_up(options)

    fighter = replace(fighter, xp=fighter.xp - required)
    if choice == 0:
        fighter = replace(
            fighter, max_hp=fighter.max_hp + LEVEL_UP_HP, hp=fighter.hp + LEVEL_UP_HP
        )
    elif choice == 1:
        fighter = replace(fighter, power=fighter.power + 1)
    else:
        fighter = replace(fighter, defense=fighter.defense + 1)
    player.fighter = fighter
    logger.info("Player reached level %d (choice %d)", player.level, choice)
    return True


def character_info(
    game: Game, store: EntityStore, config: GameConfig = DEFAULT_CONFIG
) -> str:
    """Text of the character sheet."""
    player = store.player
    xp = player.fighter.xp if player.fighter is not None else 0
    return (
        "Character information\n\n"
        f"Level: {player.level}\n"
        f"Experience: {xp}\n"
        f"Experience to level up: {level_up_xp(player.level, config)}\n\n"
        f"Maximum HP: {full_max_hp(PLAYER, store, game)}\n"
        f"Attack: {full_power(PLAYER, store, game)}\n"
        f"Defense: {full_defense(PLAYER, store, game)}"
    )
