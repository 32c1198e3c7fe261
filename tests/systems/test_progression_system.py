# tests/systems/test_progression_system.py

import random
from dataclasses import replace

import pytest

from tomb_crawler.config import DEFAULT_CONFIG, GameConfig
from tomb_crawler.entity import PLAYER
from tomb_crawler.systems.progression import (
    character_info,
    check_level_up,
    level_up_xp,
    new_game,
    next_level,
    player_on_stairs,
)
from tomb_crawler.systems.stats import full_power
from tests.test_utils import ScriptedPrompts, make_player, make_world, message_texts


@pytest.mark.parametrize("level, expected", [(1, 350), (2, 500), (5, 950)])
def test_level_up_xp(level: int, expected: int) -> None:
    assert level_up_xp(level) == expected


def test_no_level_up_below_threshold() -> None:
    game, store = make_world(player=make_player(xp=349))
    prompts = ScriptedPrompts()
    assert not check_level_up(game, store, prompts, DEFAULT_CONFIG)
    assert store.player.level == 1
    assert prompts.level_up_asks == 0


@pytest.mark.parametrize(
    "choice, field, expected",
    [(0, "max_hp", 120), (1, "power", 3), (2, "defense", 2)],
)
def test_level_up_choice(choice: int, field: str, expected: int) -> None:
    game, store = make_world(player=make_player(xp=400))
    assert check_level_up(game, store, ScriptedPrompts(choices=[choice]))
    fighter = store.player.fighter
    assert store.player.level == 2
    assert fighter.xp == 50
    assert getattr(fighter, field) == expected
    assert message_texts(game.log) == [
        "Your battle skills grow stronger! You reached level 2!"
    ]


def test_constitution_also_heals() -> None:
    game, store = make_world(player=make_player(xp=350, hp=60))
    check_level_up(game, store, ScriptedPrompts(choices=[0]))
    assert store.player.fighter.hp == 80


def test_level_up_asks_until_valid() -> None:
    game, store = make_world(player=make_player(xp=350))
    prompts = ScriptedPrompts(choices=[None, 7, 1])
    check_level_up(game, store, prompts)
    assert prompts.level_up_asks == 3
    assert store.player.fighter.power == 3


def test_new_game() -> None:
    game, store = new_game(DEFAULT_CONFIG, random.Random(4))
    player = store[PLAYER]
    assert player.name == "player"
    assert player.level == 1
    assert game.dungeon_level == 1
    assert not game.tile_grid.is_blocked(player.x, player.y)
    assert [item.name for item in game.inventory] == ["dagger"]
    assert game.inventory[0].equipment.is_equipped
    assert full_power(PLAYER, store, game) == 4
    assert (
        "Welcome stranger! Prepare to perish in the Tombs of the Ancient Kings."
        in message_texts(game.log)
    )
    assert store[len(store) - 1].name == "stairs"


def test_player_on_stairs() -> None:
    game, store = new_game(DEFAULT_CONFIG, random.Random(4))
    stairs = store[len(store) - 1]
    assert player_on_stairs(store) is (store.player.pos == stairs.pos)
    store.player.set_pos(*stairs.pos)
    assert player_on_stairs(store)


def test_next_level_rests_and_regenerates() -> None:
    rng = random.Random(9)
    game, store = new_game(DEFAULT_CONFIG, rng)
    old_grid = game.tile_grid
    store.player.fighter = replace(store.player.fighter, hp=30)
    level = next_level(game, store, DEFAULT_CONFIG, rng)
    assert game.dungeon_level == 2
    assert store.player.fighter.hp == 80
    assert game.tile_grid is level.grid
    assert game.tile_grid is not old_grid
    assert store.player.pos == level.player_start
    assert len(store) == 1 + len(level.entities)
    texts = message_texts(game.log)
    assert "You take a moment to rest, and recover your strength." in texts
    assert texts[-1].startswith("After a rare moment of peace")


def test_next_level_heal_is_capped() -> None:
    game, store = new_game(DEFAULT_CONFIG, random.Random(2))
    next_level(game, store, DEFAULT_CONFIG, random.Random(3))
    assert store.player.fighter.hp == 100


def test_new_game_on_custom_map() -> None:
    config = GameConfig(map_width=30, map_height=20, max_rooms=8)
    game, store = new_game(config, random.Random(1))
    assert game.tile_grid.width == 30
    assert game.log.capacity == config.message_capacity


def test_character_info() -> None:
    game, store = make_world(player=make_player(xp=12))
    info = character_info(game, store)
    assert "Level: 1" in info
    assert "Experience: 12" in info
    assert "Experience to level up: 350" in info
    assert "Attack: 2" in info
