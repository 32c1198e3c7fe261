"""Turn engine.

:class:`TurnEngine` owns one run (a :class:`Game` plus its entity store) and
advances it one player intent at a time. A call to :meth:`TurnEngine.step`
walks the phases below and always returns to ``AWAITING_INPUT`` unless the
player died:

1. ``RESOLVING_PLAYER_ACTION``: the intent is applied. Moving (or attacking),
   waiting, using an item and taking the stairs consume the turn. Picking up,
   opening the inventory, dropping, the character sheet and anything the
   player cancelled do not.
2. ``DESCENDING``: entered while a new level replaces the current one.
3. ``RUNNING_MONSTER_TURNS``: only after a turn was consumed. Every AI acts
   once in store order, then the level-up check runs.
4. The field of view is recomputed if the player moved or the level changed,
   and every visible tile becomes explored.

Once the player is dead the engine stays in ``GAME_OVER`` and ignores all
intents except ``EXIT``.
"""

import logging
import random
from enum import StrEnum, auto
from typing import Optional

from tomb_crawler.actions import DIRECTION_DELTAS, Action, Intent
from tomb_crawler.config import DEFAULT_CONFIG, GameConfig
from tomb_crawler.entity import EntityStore
from tomb_crawler.game import Game
from tomb_crawler.grid import TileGrid
from tomb_crawler.prompts import Prompts, inventory_options
from tomb_crawler.systems.ai import run_ai_turns
from tomb_crawler.systems.combat import player_move_or_attack
from tomb_crawler.systems.inventory import drop_item, pick_up_at_player, use_item
from tomb_crawler.systems.progression import (
    character_info,
    check_level_up,
    next_level,
    player_on_stairs,
)
from tomb_crawler.types import UseResult
from tomb_crawler.visibility import Visibility

logger = logging.getLogger(__name__)


class TurnPhase(StrEnum):
    AWAITING_INPUT = auto()
    RESOLVING_PLAYER_ACTION = auto()
    RUNNING_MONSTER_TURNS = auto()
    DESCENDING = auto()
    GAME_OVER = auto()


class PlayerAction(StrEnum):
    """What the player's intent amounted to."""

    TOOK_TURN = auto()
    DIDNT_TAKE_TURN = auto()
    EXIT = auto()


class TurnEngine:
    """Drives one run turn by turn.

    Args:
        game: Per-run state.
        store: Entities of the current level, player at index 0.
        visibility: Field-of-view service, reset on every new level.
        prompts: Answers mid-turn questions (fireball target, level-up stat).
        config: Game constants.
        rng: Source of randomness for AI and level generation.
    """

    def __init__(
        self,
        game: Game,
        store: EntityStore,
        visibility: Visibility,
        prompts: Prompts,
        config: GameConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.game = game
        self.store = store
        self.visibility = visibility
        self.prompts = prompts
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.phase = TurnPhase.GAME_OVER if game.is_over else TurnPhase.AWAITING_INPUT
        self._grid: Optional[TileGrid] = None
        self.refresh_visibility()

    def refresh_visibility(self) -> None:
        """Recompute the field of view around the player and explore it."""
        grid = self.game.tile_grid
        if grid is not self._grid:
            self.visibility.reset(grid)
            self._grid = grid
        player = self.store.player
        self.visibility.recompute(
            player.x, player.y, self.config.torch_radius, self.config.fov_light_walls
        )
        grid.explore(self.visibility.is_visible)

    def step(self, intent: Intent) -> PlayerAction:
        """Resolve one intent and, if it took time, the monsters' replies."""
        if intent.action is Action.EXIT:
            return PlayerAction.EXIT
        if self.game.is_over:
            self.phase = TurnPhase.GAME_OVER
            return PlayerAction.DIDNT_TAKE_TURN

        player = self.store.player
        start = player.pos
        self.phase = TurnPhase.RESOLVING_PLAYER_ACTION
        result = self._resolve(intent)

        if result is PlayerAction.TOOK_TURN and not self.game.is_over:
            self.phase = TurnPhase.RUNNING_MONSTER_TURNS
            run_ai_turns(self.game, self.store, self.visibility, self.rng)
            if not self.game.is_over:
                check_level_up(self.game, self.store, self.prompts, self.config)

        if self.game.tile_grid is not self._grid or player.pos != start:
            self.refresh_visibility()

        self.phase = (
            TurnPhase.GAME_OVER if self.game.is_over else TurnPhase.AWAITING_INPUT
        )
        logger.debug("%s -> %s (phase %s)", intent.action, result, self.phase)
        return result

    def _resolve(self, intent: Intent) -> PlayerAction:
        action = intent.action
        if action is Action.MOVE:
            if intent.direction is None:
                raise ValueError("MOVE intent requires a direction")
            dx, dy = DIRECTION_DELTAS[intent.direction]
            player_move_or_attack(dx, dy, self.game, self.store)
            return PlayerAction.TOOK_TURN
        if action is Action.WAIT:
            return PlayerAction.TOOK_TURN
        if action is Action.PICK_UP:
            pick_up_at_player(self.game, self.store, self.config)
            return PlayerAction.DIDNT_TAKE_TURN
        if action is Action.USE_ITEM:
            if not self._valid_slot(intent.slot):
                return PlayerAction.DIDNT_TAKE_TURN
            result = use_item(
                intent.slot,
                self.game,
                self.store,
                self.visibility,
                self.prompts,
                self.config,
            )
            if result is UseResult.USED:
                return PlayerAction.TOOK_TURN
            return PlayerAction.DIDNT_TAKE_TURN
        if action is Action.DROP_ITEM:
            if self._valid_slot(intent.slot):
                drop_item(intent.slot, self.game, self.store)
            return PlayerAction.DIDNT_TAKE_TURN
        if action is Action.DESCEND:
            if not player_on_stairs(self.store):
                return PlayerAction.DIDNT_TAKE_TURN
            self.phase = TurnPhase.DESCENDING
            next_level(self.game, self.store, self.config, self.rng)
            return PlayerAction.TOOK_TURN
        if action is Action.OPEN_INVENTORY:
            self.prompts.message_box("\n".join(inventory_options(self.game)))
            return PlayerAction.DIDNT_TAKE_TURN
        if action is Action.CHARACTER_INFO:
            self.prompts.message_box(
                character_info(self.game, self.store, self.config)
            )
            return PlayerAction.DIDNT_TAKE_TURN
        if action is Action.NONE:
            return PlayerAction.DIDNT_TAKE_TURN
        raise ValueError(f"Action is not valid: {action}")

    def _valid_slot(self, slot: Optional[int]) -> bool:
        return slot is not None and 0 <= slot < len(self.game.inventory)
