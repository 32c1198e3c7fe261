"""Monster AI system.

Runs once per time-consuming player turn. Every entity holding an AI acts
once, in store order, according to its variant:

* ``BasicAI``: a monster standing on a visible tile sees the player. It walks
  toward the player while two or more tiles away and attacks when adjacent
  (as long as the player is alive).
* ``ConfusedAI``: stumbles one tile in a random direction (never attacking)
  and counts down; on its last confused turn the previous AI is restored.

The AI value is read at the start of an entity's turn and the replacement (if
any) written back at the end, so the variant never changes mid-decision.
"""

import logging
import random
from dataclasses import replace
from typing import Optional

from tomb_crawler import colors
from tomb_crawler.components import AI, BasicAI, ConfusedAI
from tomb_crawler.entity import PLAYER, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.systems.combat import attack
from tomb_crawler.systems.movement import move_by, move_towards
from tomb_crawler.types import EntityIndex
from tomb_crawler.visibility import Visibility

logger = logging.getLogger(__name__)


def basic_turn(
    index: EntityIndex, game: Game, store: EntityStore, visibility: Visibility
) -> None:
    monster = store[index]
    if not visibility.is_visible(monster.x, monster.y):
        return
    player = store.player
    if monster.distance_to(player) >= 2:
        move_towards(index, player.x, player.y, game.tile_grid, store)
    elif player.alive and player.fighter is not None and player.fighter.hp > 0:
        attack(index, PLAYER, game, store)


def confused_turn(
    index: EntityIndex,
    ai: ConfusedAI,
    game: Game,
    store: EntityStore,
    rng: random.Random,
) -> Optional[AI]:
    """Stumble around; return the AI the monster should hold afterwards."""
    monster = store[index]
    if ai.turns_remaining > 0:
        move_by(index, rng.randint(-1, 1), rng.randint(-1, 1), game.tile_grid, store)
        ai = replace(ai, turns_remaining=ai.turns_remaining - 1)
        if ai.turns_remaining > 0:
            return ai
    game.log.add(f"The {monster.name} is no longer confused!", colors.RED)
    return ai.previous_ai


def take_turn(
    index: EntityIndex,
    game: Game,
    store: EntityStore,
    visibility: Visibility,
    rng: random.Random,
) -> None:
    monster = store[index]
    ai = monster.ai
    if isinstance(ai, ConfusedAI):
        monster.ai = confused_turn(index, ai, game, store, rng)
    elif isinstance(ai, BasicAI):
        basic_turn(index, game, store, visibility)


def run_ai_turns(
    game: Game, store: EntityStore, visibility: Visibility, rng: random.Random
) -> None:
    """Give every AI-capable entity its turn, in store order."""
    acted = 0
    for index in range(len(store)):
        if store[index].ai is not None:
            take_turn(index, game, store, visibility, rng)
            acted += 1
    logger.debug("%d monsters acted", acted)
