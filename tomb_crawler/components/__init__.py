"""tomb_crawler.components
==========================

Aggregate import surface for the capability dataclasses an entity may carry::

    from tomb_crawler.components import Fighter, BasicAI, ConfusedAI

The set is closed: an entity has at most one of each (fighter, AI, equipment),
plus the ``ItemKind`` tag from :mod:`tomb_crawler.types`.
"""

from .properties import AI
from .properties import BasicAI, ConfusedAI
from .properties import Equipment
from .properties import Fighter

__all__ = [
    "AI",
    "BasicAI",
    "ConfusedAI",
    "Equipment",
    "Fighter",
]
