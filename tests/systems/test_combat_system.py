# tests/systems/test_combat_system.py

import pytest

from tomb_crawler import colors
from tomb_crawler.entity import PLAYER
from tomb_crawler.levels.factories import create_dagger
from tomb_crawler.systems.combat import (
    apply_damage,
    attack,
    player_move_or_attack,
)
from tomb_crawler.systems.inventory import equip
from tomb_crawler.types import GameState
from tests.test_utils import make_orc, make_player, make_world, message_texts


def test_zero_damage_when_defense_exceeds_power() -> None:
    game, store = make_world(make_orc(6, 5, defense=5), player=make_player(power=3))
    outcome = attack(PLAYER, 1, game, store)
    assert outcome.damage == 0
    assert not outcome.killed
    assert store[1].fighter.hp == 20
    assert message_texts(game.log) == ["player attacks orc but it has no effect!"]


def test_hit_leaves_monster_alive() -> None:
    game, store = make_world(
        make_orc(6, 5, defense=2, hp=4), player=make_player(power=5)
    )
    outcome = attack(PLAYER, 1, game, store)
    assert outcome.damage == 3
    assert not outcome.killed
    assert store[1].alive
    assert store[1].fighter.hp == 1
    assert message_texts(game.log) == ["player attacks orc for 3 hit points."]


def test_second_hit_kills_and_credits_xp() -> None:
    game, store = make_world(
        make_orc(6, 5, defense=2, hp=4), player=make_player(power=5)
    )
    attack(PLAYER, 1, game, store)
    outcome = attack(PLAYER, 1, game, store)
    corpse = store[1]
    assert outcome.killed
    assert outcome.xp == 35
    assert not corpse.alive
    assert corpse.glyph == "%"
    assert corpse.color == colors.DARK_RED
    assert corpse.name == "remains of orc"
    assert not corpse.blocks
    assert corpse.fighter is None and corpse.ai is None
    assert store.player.fighter.xp == 35
    assert game.log.last.text == "orc is dead! You gain 35 experience points."


def test_death_runs_exactly_once() -> None:
    game, store = make_world(make_orc(6, 5))
    orc = store[1]
    assert apply_damage(orc, 25, game) == 35
    logged = len(game.log)
    assert apply_damage(orc, 25, game) is None
    assert len(game.log) == logged


def test_player_death_sets_game_over_once() -> None:
    game, store = make_world(make_orc(6, 5), player=make_player(hp=3))
    attack(1, PLAYER, game, store)
    player = store.player
    assert not player.alive
    assert game.state is GameState.DEATH
    assert player.glyph == "%"
    assert player.color == colors.DARK_RED
    attack(1, PLAYER, game, store)
    assert message_texts(game.log).count("You died!") == 1


def test_monster_kill_credits_no_xp() -> None:
    game, store = make_world(make_orc(6, 5, power=200))
    outcome = attack(1, PLAYER, game, store)
    assert outcome.killed
    assert outcome.xp == 0
    assert store[1].fighter.xp == 0


def test_equipment_adds_power() -> None:
    game, store = make_world(make_orc(6, 5))
    game.inventory.append(create_dagger())
    equip(0, game)
    outcome = attack(PLAYER, 1, game, store)
    assert outcome.damage == 4  # power 2 + dagger 2 vs defense 0


def test_attack_same_index_raises() -> None:
    game, store = make_world(make_orc(6, 5))
    with pytest.raises(ValueError):
        attack(1, 1, game, store)


def test_move_or_attack() -> None:
    game, store = make_world(make_orc(7, 5))
    assert player_move_or_attack(1, 0, game, store) is None
    assert store.player.pos == (6, 5)
    outcome = player_move_or_attack(1, 0, game, store)
    assert outcome is not None
    assert store.player.pos == (6, 5)
    assert store[1].fighter.hp == 18


def test_move_into_wall_is_noop() -> None:
    game, store = make_world(player=make_player(1, 1))
    assert player_move_or_attack(-1, 0, game, store) is None
    assert store.player.pos == (1, 1)


def test_corpse_does_not_block() -> None:
    game, store = make_world(make_orc(6, 5, hp=1))
    player_move_or_attack(1, 0, game, store)
    player_move_or_attack(1, 0, game, store)
    assert store.player.pos == (6, 5)
