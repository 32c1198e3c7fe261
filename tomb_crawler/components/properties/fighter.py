from dataclasses import dataclass

from tomb_crawler.types import DeathKind


@dataclass(frozen=True)
class Fighter:
    """Combat capability: hit points, attack and defense.

    Attributes:
        max_hp:
            Base maximum hit points (equipment bonuses are added by
            :mod:`tomb_crawler.systems.stats`).
        hp:
            Current hit points. May drop below zero on a killing blow.
        defense:
            Base defense subtracted from incoming attack power.
        power:
            Base attack power.
        xp_reward:
            Experience granted to the killer when this fighter dies.
        on_death:
            Death-resolution behavior interpreted by the combat system.
        xp:
            Experience accumulated by this fighter (only the player earns any).
    """

    max_hp: int
    hp: int
    defense: int
    power: int
    xp_reward: int = 0
    on_death: DeathKind = DeathKind.MONSTER
    xp: int = 0
