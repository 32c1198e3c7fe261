"""Property component aggregates.

Capability slots carried by :class:`tomb_crawler.entity.Entity`. All of them
are immutable dataclasses; systems express a change by storing a new instance
(``dataclasses.replace``) into the owning entity's slot.
"""

from .ai import AI, BasicAI, ConfusedAI
from .equipment import Equipment
from .fighter import Fighter

__all__ = [
    "AI",
    "BasicAI",
    "ConfusedAI",
    "Equipment",
    "Fighter",
]
