"""Combat resolution.

Damage flows through two entry points:

* :func:`attack` resolves a melee exchange between two store indices. It
  narrates the hit, applies damage and credits any experience to the attacker
  when the attacker is the player.
* :func:`apply_damage` removes hit points from a single entity without any
  attacker bookkeeping (spells, traps). It returns the experience yielded by a
  kill so the caller can decide who earns it.

Both funnel into the same death transition: the first time a fighter's hit
points reach zero its ``alive`` flag is cleared and the handler registered for
its :class:`tomb_crawler.types.DeathKind` runs. Later damage never re-triggers
it. Dead monsters stay in the store as non-blocking corpses.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

from tomb_crawler import colors
from tomb_crawler.entity import PLAYER, Entity, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.systems.movement import move_by
from tomb_crawler.systems.stats import full_defense, full_power
from tomb_crawler.types import DeathKind, EntityIndex, GameState

logger = logging.getLogger(__name__)

DeathHandler = Callable[[Entity, Game], Optional[int]]


@dataclass(frozen=True)
class AttackOutcome:
    """Summary of one :func:`attack`.

    Attributes:
        damage: Hit points removed (0 when the blow had no effect).
        killed: Whether the defender died from this blow.
        xp: Experience credited to the attacker.
    """

    damage: int
    killed: bool
    xp: int = 0


def player_death(player: Entity, game: Game) -> Optional[int]:
    game.log.add("You died!", colors.RED)
    game.state = GameState.DEATH
    player.glyph = "%"
    player.color = colors.DARK_RED
    logger.info("Player died on dungeon level %d", game.dungeon_level)
    return None


def monster_death(monster: Entity, game: Game) -> Optional[int]:
    """Turn a monster into an inert corpse and return its experience yield."""
    xp = monster.fighter.xp_reward if monster.fighter is not None else 0
    game.log.add(
        f"{monster.name} is dead! You gain {xp} experience points.", colors.ORANGE
    )
    monster.glyph = "%"
    monster.color = colors.DARK_RED
    monster.blocks = False
    monster.fighter = None
    monster.ai = None
    monster.name = f"remains of {monster.name}"
    return xp


DEATH_HANDLERS: Dict[DeathKind, DeathHandler] = {
    DeathKind.PLAYER: player_death,
    DeathKind.MONSTER: monster_death,
}


def apply_damage(entity: Entity, damage: int, game: Game) -> Optional[int]:
    """Remove ``damage`` hit points and resolve death.

    Non-positive damage changes nothing but still lets an already-lethal hp
    value trigger the death transition once.

    Returns:
        Optional[int]: Experience yielded if this call killed the entity.
    """
    fighter = entity.fighter
    if fighter is None:
        return None
    if damage > 0:
        fighter = replace(fighter, hp=fighter.hp - damage)
        entity.fighter = fighter
    if fighter.hp <= 0 and entity.alive:
        entity.alive = False
        return DEATH_HANDLERS[fighter.on_death](entity, game)
    return None


def gain_xp(entity: Entity, amount: int) -> None:
    if entity.fighter is not None and amount:
        entity.fighter = replace(entity.fighter, xp=entity.fighter.xp + amount)


def heal(entity: Entity, amount: int, max_hp: int) -> None:
    """Restore hit points without exceeding ``max_hp``."""
    if entity.fighter is not None:
        hp = min(entity.fighter.hp + amount, max_hp)
        entity.fighter = replace(entity.fighter, hp=hp)


def attack(
    attacker_index: EntityIndex,
    defender_index: EntityIndex,
    game: Game,
    store: EntityStore,
) -> AttackOutcome:
    """Resolve a melee attack; damage is power minus defense, floored at 0."""
    attacker, defender = store.pair(attacker_index, defender_index)
    damage = full_power(attacker_index, store, game) - full_defense(
        defender_index, store, game
    )
    if damage <= 0:
        game.log.add(f"{attacker.name} attacks {defender.name} but it has no effect!")
        return AttackOutcome(damage=0, killed=False)

    game.log.add(f"{attacker.name} attacks {defender.name} for {damage} hit points.")
    was_alive = defender.alive
    xp = apply_damage(defender, damage, game)
    killed = was_alive and not defender.alive
    credited = 0
    if xp is not None and attacker_index == PLAYER:
        gain_xp(attacker, xp)
        credited = xp
    logger.debug(
        "%s hit %s for %d (killed=%s)", attacker.name, defender.name, damage, killed
    )
    return AttackOutcome(damage=damage, killed=killed, xp=credited)


def player_move_or_attack(
    dx: int, dy: int, game: Game, store: EntityStore
) -> Optional[AttackOutcome]:
    """Attack a fighter on the destination tile, otherwise step there.

    Returns:
        Optional[AttackOutcome]: The attack outcome, or ``None`` if the player
        moved (or bumped into terrain).
    """
    player = store.player
    x, y = player.x + dx, player.y + dy
    target = store.index_at(x, y, lambda e: e.fighter is not None)
    if target is not None and target != PLAYER:
        return attack(PLAYER, target, game, store)
    move_by(PLAYER, dx, dy, game.tile_grid, store)
    return None
