"""Snapshot persistence.

A saved run is the pair ``(Game, EntityStore)`` encoded as UTF-8 JSON::

    {"version": 1,
     "game": {"dungeon_level", "state", "map", "inventory", "messages"},
     "entities": [...]}

Entities are plain dicts of their fields; the ``ai`` slot is tagged with
``{"type": "basic"}`` or ``{"type": "confused", ...}`` since ``ConfusedAI``
nests the AI it replaced. Saving never mutates the run. Any failure to read,
decode or rebuild a snapshot surfaces as :class:`SnapshotError` with the
underlying cause chained.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from tomb_crawler.components import AI, BasicAI, ConfusedAI, Equipment, Fighter
from tomb_crawler.entity import Entity, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.grid import TileGrid
from tomb_crawler.messages import Message, MessageLog
from tomb_crawler.types import DeathKind, GameState, ItemKind

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

PathLike = Union[str, Path]


class SnapshotError(Exception):
    """A snapshot could not be written or read back."""


def encode_ai(ai: Optional[AI]) -> Optional[Dict[str, Any]]:
    if ai is None:
        return None
    if isinstance(ai, ConfusedAI):
        return {
            "type": "confused",
            "previous_ai": encode_ai(ai.previous_ai),
            "turns_remaining": ai.turns_remaining,
        }
    return {"type": "basic"}


def decode_ai(data: Optional[Dict[str, Any]]) -> Optional[AI]:
    if data is None:
        return None
    kind = data["type"]
    if kind == "basic":
        return BasicAI()
    if kind == "confused":
        return ConfusedAI(
            previous_ai=decode_ai(data["previous_ai"]),
            turns_remaining=int(data["turns_remaining"]),
        )
    raise ValueError(f"Unknown AI type: {kind!r}")


def encode_entity(entity: Entity) -> Dict[str, Any]:
    return {
        "x": entity.x,
        "y": entity.y,
        "glyph": entity.glyph,
        "name": entity.name,
        "color": list(entity.color),
        "blocks": entity.blocks,
        "alive": entity.alive,
        "always_visible": entity.always_visible,
        "level": entity.level,
        "fighter": asdict(entity.fighter) if entity.fighter is not None else None,
        "ai": encode_ai(entity.ai),
        "item": entity.item.value if entity.item is not None else None,
        "equipment": (
            asdict(entity.equipment) if entity.equipment is not None else None
        ),
    }


def decode_fighter(data: Optional[Dict[str, Any]]) -> Optional[Fighter]:
    if data is None:
        return None
    return Fighter(
        max_hp=int(data["max_hp"]),
        hp=int(data["hp"]),
        defense=int(data["defense"]),
        power=int(data["power"]),
        xp_reward=int(data["xp_reward"]),
        on_death=DeathKind(data["on_death"]),
        xp=int(data["xp"]),
    )


def decode_equipment(data: Optional[Dict[str, Any]]) -> Optional[Equipment]:
    if data is None:
        return None
    return Equipment(
        slot=str(data["slot"]),
        is_equipped=bool(data["is_equipped"]),
        power_bonus=int(data["power_bonus"]),
        defense_bonus=int(data["defense_bonus"]),
        max_hp_bonus=int(data["max_hp_bonus"]),
    )


def decode_entity(data: Dict[str, Any]) -> Entity:
    item = data.get("item")
    r, g, b = data["color"]
    return Entity(
        x=int(data["x"]),
        y=int(data["y"]),
        glyph=data["glyph"],
        name=data["name"],
        color=(r, g, b),
        blocks=data["blocks"],
        alive=data["alive"],
        always_visible=data["always_visible"],
        level=int(data["level"]),
        fighter=decode_fighter(data.get("fighter")),
        ai=decode_ai(data.get("ai")),
        item=ItemKind(item) if item is not None else None,
        equipment=decode_equipment(data.get("equipment")),
    )


def encode_grid(grid: TileGrid) -> Dict[str, Any]:
    return {
        "width": grid.width,
        "height": grid.height,
        "blocked": grid.blocked.tolist(),
        "block_sight": grid.block_sight.tolist(),
        "explored": grid.explored.tolist(),
    }


def decode_grid(data: Dict[str, Any]) -> TileGrid:
    grid = TileGrid(int(data["width"]), int(data["height"]))
    shape = (grid.height, grid.width)
    for name in ("blocked", "block_sight", "explored"):
        array = np.array(data[name], dtype=bool)
        if array.shape != shape:
            raise ValueError(f"{name} has shape {array.shape}, expected {shape}")
        setattr(grid, name, array)
    return grid


def save_snapshot(game: Game, store: EntityStore) -> bytes:
    """Encode a run as JSON bytes.

    Raises:
        SnapshotError: If some value cannot be encoded.
    """
    payload = {
        "version": SNAPSHOT_VERSION,
        "game": {
            "dungeon_level": game.dungeon_level,
            "state": game.state.value,
            "map": encode_grid(game.tile_grid),
            "inventory": [encode_entity(item) for item in game.inventory],
            "messages": {
                "capacity": game.log.capacity,
                "entries": [[m.text, list(m.color)] for m in game.log],
            },
        },
        "entities": [encode_entity(entity) for entity in store],
    }
    try:
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SnapshotError("Cannot encode snapshot") from exc


def load_snapshot(blob: bytes) -> Tuple[Game, EntityStore]:
    """Rebuild a run from :func:`save_snapshot` output.

    Raises:
        SnapshotError: On malformed, truncated or incompatible data.
    """
    try:
        payload = json.loads(blob.decode("utf-8"))
        version = payload["version"]
        if version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version {version}")
        data = payload["game"]
        messages = data["messages"]
        log = MessageLog(
            int(messages["capacity"]),
            (Message(text, (r, g, b)) for text, (r, g, b) in messages["entries"]),
        )
        game = Game(
            tile_grid=decode_grid(data["map"]),
            log=log,
            inventory=[decode_entity(item) for item in data["inventory"]],
            dungeon_level=int(data["dungeon_level"]),
            state=GameState(data["state"]),
        )
        store = EntityStore(decode_entity(entity) for entity in payload["entities"])
    except (UnicodeDecodeError, KeyError, TypeError, ValueError) as exc:
        raise SnapshotError("Corrupt or incompatible snapshot") from exc
    if len(store) == 0:
        raise SnapshotError("Snapshot contains no player")
    fighter = store[0].fighter
    if fighter is None or fighter.on_death is not DeathKind.PLAYER:
        raise SnapshotError("First snapshot entity is not the player")
    return game, store


def save_game(path: PathLike, game: Game, store: EntityStore) -> None:
    blob = save_snapshot(game, store)
    try:
        Path(path).write_bytes(blob)
    except OSError as exc:
        raise SnapshotError(f"Cannot write save file {path}") from exc
    logger.info("Saved game to %s (%d bytes)", path, len(blob))


def load_game(path: PathLike) -> Tuple[Game, EntityStore]:
    try:
        blob = Path(path).read_bytes()
    except OSError as exc:
        logger.warning("Cannot read save file %s: %s", path, exc)
        raise SnapshotError(f"Cannot read save file {path}") from exc
    try:
        game, store = load_snapshot(blob)
    except SnapshotError:
        logger.warning("Save file %s is not a valid snapshot", path)
        raise
    logger.info("Loaded game from %s", path)
    return game, store
