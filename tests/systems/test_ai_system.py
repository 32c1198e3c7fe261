# tests/systems/test_ai_system.py

import random

from tomb_crawler.components import BasicAI, ConfusedAI
from tomb_crawler.systems.ai import run_ai_turns, take_turn
from tomb_crawler.types import GameState
from tests.test_utils import (
    FakeVisibility,
    make_orc,
    make_player,
    make_world,
    message_texts,
)


def test_visible_monster_approaches() -> None:
    game, store = make_world(make_orc(9, 5))
    take_turn(1, game, store, FakeVisibility(), random.Random(0))
    assert store[1].pos == (8, 5)


def test_diagonal_approach() -> None:
    game, store = make_world(make_orc(8, 8))
    take_turn(1, game, store, FakeVisibility(), random.Random(0))
    assert store[1].pos == (7, 7)


def test_invisible_monster_stays_put() -> None:
    game, store = make_world(make_orc(9, 5))
    take_turn(1, game, store, FakeVisibility({(5, 5)}), random.Random(0))
    assert store[1].pos == (9, 5)


def test_adjacent_monster_attacks() -> None:
    game, store = make_world(make_orc(6, 6))
    take_turn(1, game, store, FakeVisibility(), random.Random(0))
    assert store.player.fighter.hp == 97  # power 4 vs defense 1
    assert message_texts(game.log) == ["orc attacks player for 3 hit points."]


def test_monsters_leave_dead_player_alone() -> None:
    game, store = make_world(make_orc(6, 5), player=make_player(hp=3))
    run_ai_turns(game, store, FakeVisibility(), random.Random(0))
    assert game.state is GameState.DEATH
    logged = len(game.log)
    run_ai_turns(game, store, FakeVisibility(), random.Random(0))
    assert len(game.log) == logged


def test_monsters_act_in_store_order() -> None:
    game, store = make_world(make_orc(6, 5), make_orc(4, 5), player=make_player(hp=4))
    run_ai_turns(game, store, FakeVisibility(), random.Random(0))
    texts = message_texts(game.log)
    assert texts == [
        "orc attacks player for 3 hit points.",
        "orc attacks player for 3 hit points.",
        "You died!",
    ]
    assert store.player.fighter.hp == -2


def test_confusion_reverts_after_exactly_its_turns() -> None:
    game, store = make_world(make_orc(9, 9))
    store[1].ai = ConfusedAI(previous_ai=BasicAI(), turns_remaining=3)
    rng = random.Random(5)
    take_turn(1, game, store, FakeVisibility(), rng)
    assert store[1].ai == ConfusedAI(previous_ai=BasicAI(), turns_remaining=2)
    take_turn(1, game, store, FakeVisibility(), rng)
    assert store[1].ai == ConfusedAI(previous_ai=BasicAI(), turns_remaining=1)
    take_turn(1, game, store, FakeVisibility(), rng)
    assert store[1].ai == BasicAI()
    assert game.log.last.text == "The orc is no longer confused!"


def test_confused_monster_never_attacks() -> None:
    game, store = make_world(make_orc(6, 5))
    store[1].ai = ConfusedAI(previous_ai=BasicAI(), turns_remaining=10)
    rng = random.Random(11)
    for _ in range(9):
        take_turn(1, game, store, FakeVisibility(), rng)
    assert store.player.fighter.hp == 100


def test_expired_confusion_restores_immediately() -> None:
    game, store = make_world(make_orc(9, 9))
    store[1].ai = ConfusedAI(previous_ai=BasicAI(), turns_remaining=0)
    take_turn(1, game, store, FakeVisibility(), random.Random(0))
    assert store[1].ai == BasicAI()
    assert store[1].pos == (9, 9)


def test_corpses_are_skipped() -> None:
    game, store = make_world(make_orc(9, 5))
    store[1].ai = None
    run_ai_turns(game, store, FakeVisibility(), random.Random(0))
    assert store[1].pos == (9, 5)
