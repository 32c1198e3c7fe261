"""Gymnasium environment wrapper for the dungeon crawler.

Runs a headless :class:`tomb_crawler.step.TurnEngine` with
:class:`RadiusVisibility` and :class:`AutoPrompts` (fireballs aim at the
closest visible monster, level-ups always pick constitution).

Observation schema:

``{"tiles": np.ndarray(H, W) uint8, "info": {"hp", "max_hp", "level", "xp",
"dungeon_level", "inventory"}}``

Tile codes are listed in :data:`TILE_CODES`; entity codes overwrite terrain
codes, with fighters drawn last. Reward is the experience gained during the
step plus :data:`DESCENT_REWARD` per dungeon level descended. ``terminated``
is ``True`` once the player dies; episodes are never truncated here (wrap with
``gymnasium.wrappers.TimeLimit`` if needed).
"""

import random
import string
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from tomb_crawler.actions import GymAction, intent_from_gym
from tomb_crawler.config import DEFAULT_CONFIG, GameConfig
from tomb_crawler.entity import PLAYER, Entity, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.observation import is_drawn
from tomb_crawler.prompts import AutoPrompts
from tomb_crawler.step import TurnEngine
from tomb_crawler.systems.progression import level_up_xp, new_game
from tomb_crawler.systems.stats import full_max_hp
from tomb_crawler.visibility import RadiusVisibility

ObsType = Dict[str, Any]

DESCENT_REWARD = 100

ITEM_NAME_CHARSET = string.ascii_letters + string.digits + " "

TILE_CODES: Dict[str, int] = {
    "unexplored": 0,
    "wall": 1,
    "floor": 2,
    "visible_wall": 3,
    "visible_floor": 4,
    "item": 5,
    "stairs": 6,
    "corpse": 7,
    "monster": 8,
    "player": 9,
}


def entity_code(index: int, entity: Entity) -> int:
    if index == PLAYER:
        return TILE_CODES["player"]
    if entity.fighter is not None:
        return TILE_CODES["monster"]
    if entity.is_collectible:
        return TILE_CODES["item"]
    if entity.always_visible:
        return TILE_CODES["stairs"]
    return TILE_CODES["corpse"]


def tiles_observation(
    game: Game, store: EntityStore, visibility: RadiusVisibility
) -> np.ndarray:
    """Encode what the player knows about the level as a uint8 array."""
    grid = game.tile_grid
    visible = visibility.visible
    tiles = np.zeros((grid.height, grid.width), dtype=np.uint8)
    explored = grid.explored
    tiles[explored & grid.blocked] = TILE_CODES["wall"]
    tiles[explored & ~grid.blocked] = TILE_CODES["floor"]
    tiles[visible & grid.blocked] = TILE_CODES["visible_wall"]
    tiles[visible & ~grid.blocked] = TILE_CODES["visible_floor"]
    drawn = [
        (index, entity)
        for index, entity in enumerate(store)
        if is_drawn(entity, game, visibility)
    ]
    drawn.sort(key=lambda pair: pair[1].fighter is not None)
    for index, entity in drawn:
        if grid.in_bounds(entity.x, entity.y):
            tiles[entity.y, entity.x] = entity_code(index, entity)
    return tiles


class TombCrawlerEnv(gym.Env[ObsType, np.integer]):
    """Gymnasium ``Env`` implementation of the dungeon crawler.

    The action space is ``Discrete(len(GymAction))``; see
    :mod:`tomb_crawler.actions`.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        seed: Optional[int] = None,
        render_mode: str = "ansi",
    ):
        self.config = config
        self.render_mode = render_mode
        self._seed = seed

        self.game: Optional[Game] = None
        self.store: Optional[EntityStore] = None
        self.engine: Optional[TurnEngine] = None
        self.visibility = RadiusVisibility()

        def int_box(low: int, high: int) -> spaces.Box:
            return spaces.Box(
                low=np.array(low, dtype=np.int64),
                high=np.array(high, dtype=np.int64),
                shape=(),
                dtype=np.int64,
            )

        self.observation_space = spaces.Dict(
            {
                "tiles": spaces.Box(
                    low=0,
                    high=max(TILE_CODES.values()),
                    shape=(config.map_height, config.map_width),
                    dtype=np.uint8,
                ),
                "info": spaces.Dict(
                    {
                        "hp": int_box(-1_000_000, 1_000_000),
                        "max_hp": int_box(0, 1_000_000),
                        "level": int_box(0, 1_000_000),
                        "xp": int_box(0, 1_000_000_000),
                        "dungeon_level": int_box(1, 1_000_000),
                        "inventory": spaces.Sequence(
                            spaces.Text(max_length=64, charset=ITEM_NAME_CHARSET)
                        ),
                    }
                ),
            }
        )
        self.action_space = spaces.Discrete(len(GymAction))

        self.reset(seed=seed)

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, object]] = None
    ) -> Tuple[ObsType, Dict[str, object]]:
        """Start a new run, seeded by ``seed`` (or the constructor's seed)."""
        super().reset(seed=seed)
        rng = random.Random(seed if seed is not None else self._seed)
        self.game, self.store = new_game(self.config, rng)
        self.engine = TurnEngine(
            self.game,
            self.store,
            self.visibility,
            AutoPrompts(self.store, self.visibility),
            self.config,
            rng,
        )
        return self._get_obs(), self._get_info()

    def step(
        self, action: np.integer
    ) -> Tuple[ObsType, float, bool, bool, Dict[str, object]]:
        """Apply one environment step.

        Returns:
            (observation, reward, terminated, truncated, info)
        """
        assert self.engine is not None and self.game is not None
        if not 0 <= int(action) < len(GymAction):
            raise ValueError(f"Invalid action: {action}")

        xp_before = self._total_xp()
        depth_before = self.game.dungeon_level
        result = self.engine.step(intent_from_gym(GymAction(int(action))))
        reward = float(
            self._total_xp()
            - xp_before
            + DESCENT_REWARD * (self.game.dungeon_level - depth_before)
        )
        info = self._get_info()
        info["player_action"] = result.value
        return self._get_obs(), reward, self.game.is_over, False, info

    def render(self) -> Optional[str]:  # type: ignore[override]
        """Render the known map as text, one glyph per tile."""
        assert self.game is not None and self.store is not None
        grid = self.game.tile_grid
        rows = [
            [
                ("#" if grid.blocked[y, x] else ".") if grid.explored[y, x] else " "
                for x in range(grid.width)
            ]
            for y in range(grid.height)
        ]
        drawn = sorted(
            (e for e in self.store if is_drawn(e, self.game, self.visibility)),
            key=lambda e: e.fighter is not None,
        )
        for entity in drawn:
            rows[entity.y][entity.x] = entity.glyph
        return "\n".join("".join(row) for row in rows)

    def state_info(self) -> Dict[str, Any]:
        assert self.game is not None and self.store is not None
        fighter = self.store.player.fighter
        return {
            "hp": fighter.hp if fighter is not None else 0,
            "max_hp": full_max_hp(PLAYER, self.store, self.game),
            "level": self.store.player.level,
            "xp": fighter.xp if fighter is not None else 0,
            "dungeon_level": self.game.dungeon_level,
            "inventory": tuple(item.name for item in self.game.inventory),
        }

    def _total_xp(self) -> int:
        """Experience earned so far, counting what level-ups consumed."""
        assert self.store is not None
        player = self.store.player
        spent = sum(level_up_xp(level, self.config) for level in range(1, player.level))
        xp = player.fighter.xp if player.fighter is not None else 0
        return xp + spent

    def _get_obs(self) -> ObsType:
        assert self.game is not None and self.store is not None
        return {
            "tiles": tiles_observation(self.game, self.store, self.visibility),
            "info": self.state_info(),
        }

    def _get_info(self) -> Dict[str, object]:
        return {}

    def close(self) -> None:
        pass
