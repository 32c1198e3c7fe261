"""Interactive suspend points.

Some actions need a decision from the player in the middle of a turn: where
to throw a fireball, which stat to raise on level-up. The core asks through
the :class:`Prompts` protocol and blocks until it answers; a ``None`` answer
means the player cancelled.

Menus are letter-addressed, one letter per option, which caps them at 26
options. :func:`menu_options` enforces that cap.
"""

import string
from typing import List, Optional, Protocol, Sequence

from tomb_crawler.entity import PLAYER, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.types import Point
from tomb_crawler.visibility import Visibility

MENU_LETTERS = string.ascii_uppercase


class Prompts(Protocol):
    def target_tile(self, max_range: Optional[float]) -> Optional[Point]:
        """Ask for a visible tile; ``None`` when the player cancels."""
        ...

    def choose_level_up(self, options: Sequence[str]) -> Optional[int]:
        """Ask for one of ``options`` by index; ``None`` for no valid choice."""
        ...

    def message_box(self, text: str) -> None: ...


def menu_options(options: Sequence[str]) -> List[str]:
    """Label options ``(A)`` to ``(Z)``.

    Raises:
        ValueError: If there are more options than letters.
    """
    if len(options) > len(MENU_LETTERS):
        raise ValueError(
            f"Cannot have a menu with more than {len(MENU_LETTERS)} options."
        )
    return [f"({letter}) {text}" for letter, text in zip(MENU_LETTERS, options)]


def menu_index(letter: str, option_count: int) -> Optional[int]:
    """Map a pressed letter back to an option index, or ``None``."""
    if len(letter) != 1 or not letter.isalpha():
        return None
    index = ord(letter.upper()) - ord("A")
    return index if 0 <= index < option_count else None


def inventory_options(game: Game) -> List[str]:
    """Menu lines for the inventory, noting where equipment is worn."""
    if not game.inventory:
        return menu_options(["Inventory is empty."])
    lines = []
    for item in game.inventory:
        if item.equipment is not None and item.equipment.is_equipped:
            lines.append(f"{item.name} (on {item.equipment.slot})")
        else:
            lines.append(item.name)
    return menu_options(lines)


class AutoPrompts:
    """Non-interactive answers for headless play.

    Targets the closest visible fighter other than the player (cancelling when
    there is none) and always picks the first level-up option.
    """

    def __init__(
        self,
        store: Optional[EntityStore] = None,
        visibility: Optional[Visibility] = None,
    ) -> None:
        self.store = store
        self.visibility = visibility

    def target_tile(self, max_range: Optional[float]) -> Optional[Point]:
        if self.store is None or self.visibility is None:
            return None
        player = self.store.player
        best: Optional[Point] = None
        best_distance = float("inf")
        for index, entity in enumerate(self.store):
            if index == PLAYER or entity.fighter is None:
                continue
            if not self.visibility.is_visible(entity.x, entity.y):
                continue
            distance = player.distance_to(entity)
            if max_range is not None and distance > max_range:
                continue
            if distance < best_distance:
                best, best_distance = entity.pos, distance
        return best

    def choose_level_up(self, options: Sequence[str]) -> Optional[int]:
        return 0

    def message_box(self, text: str) -> None:
        pass
