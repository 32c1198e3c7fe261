"""Read-only view of a run for renderers and agents.

:func:`describe` flattens what a frontend needs to draw one frame into an
immutable ``pyrsistent`` map. It never mutates the game.
"""

from typing import Any, Dict

from pyrsistent import freeze, pmap
from pyrsistent.typing import PMap

from tomb_crawler.entity import PLAYER, Entity, EntityStore
from tomb_crawler.game import Game
from tomb_crawler.systems.stats import full_defense, full_max_hp, full_power
from tomb_crawler.visibility import Visibility


def entity_view(entity: Entity) -> Dict[str, Any]:
    return {
        "x": entity.x,
        "y": entity.y,
        "glyph": entity.glyph,
        "name": entity.name,
        "color": entity.color,
    }


def is_drawn(entity: Entity, game: Game, visibility: Visibility) -> bool:
    """Visible entities, plus always-visible ones on explored tiles."""
    if visibility.is_visible(entity.x, entity.y):
        return True
    grid = game.tile_grid
    return (
        entity.always_visible
        and grid.in_bounds(entity.x, entity.y)
        and bool(grid.explored[entity.y, entity.x])
    )


def describe(game: Game, store: EntityStore, visibility: Visibility) -> PMap[str, Any]:
    """Snapshot of everything a renderer draws.

    Keys:
        ``blocked`` / ``explored`` / ``visible``: Row-major tuples of booleans.
        ``entities``: Drawn entities, fighters last so they sit on top.
        ``messages``: ``(text, color)`` pairs, oldest first.
        ``player``: hp, max hp, power, defense, level, xp and dungeon level.
    """
    grid = game.tile_grid
    visible = [
        [visibility.is_visible(x, y) for x in range(grid.width)]
        for y in range(grid.height)
    ]
    drawn = sorted(
        (entity for entity in store if is_drawn(entity, game, visibility)),
        key=lambda entity: entity.fighter is not None,
    )
    player = store.player
    fighter = player.fighter
    return pmap(
        {
            "width": grid.width,
            "height": grid.height,
            "blocked": freeze(grid.blocked.tolist()),
            "explored": freeze(grid.explored.tolist()),
            "visible": freeze(visible),
            "entities": freeze([entity_view(entity) for entity in drawn]),
            "messages": freeze([(m.text, m.color) for m in game.log]),
            "player": pmap(
                {
                    "hp": fighter.hp if fighter is not None else 0,
                    "max_hp": full_max_hp(PLAYER, store, game),
                    "power": full_power(PLAYER, store, game),
                    "defense": full_defense(PLAYER, store, game),
                    "level": player.level,
                    "xp": fighter.xp if fighter is not None else 0,
                    "dungeon_level": game.dungeon_level,
                }
            ),
        }
    )
