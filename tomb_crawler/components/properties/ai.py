"""Monster AI variants.

An entity's ``ai`` slot holds one of these immutable values. ``ConfusedAI``
wraps the variant it replaced so the AI system can restore it when the
countdown expires.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class BasicAI:
    """Approach the player when visible and attack when adjacent."""

    pass


@dataclass(frozen=True)
class ConfusedAI:
    """Stumble randomly for ``turns_remaining`` of the entity's own turns.

    Attributes:
        previous_ai: Variant restored once the confusion wears off.
        turns_remaining: Own turns left before the restore.
    """

    previous_ai: Optional["AI"]
    turns_remaining: int


AI = Union[BasicAI, ConfusedAI]
