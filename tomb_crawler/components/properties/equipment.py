from dataclasses import dataclass


@dataclass(frozen=True)
class Equipment:
    """Wearable bonus provider. At most one equipped item per ``slot``.

    Attributes:
        slot: Body slot name, e.g. ``"right hand"``.
        is_equipped: Whether the bonuses currently apply.
        power_bonus: Added to the wearer's power.
        defense_bonus: Added to the wearer's defense.
        max_hp_bonus: Added to the wearer's maximum hit points.
    """

    slot: str
    is_equipped: bool = False
    power_bonus: int = 0
    defense_bonus: int = 0
    max_hp_bonus: int = 0
