"""Tile store: placement and removal of buildings on the bounded grid."""
from __future__ import annotations

import logging
from typing import Iterator

from skylines.catalog import BuildingKind, config_for
from skylines.config import (
    EVICTION_CORRUPTION,
    EVICTION_HAPPINESS_PENALTY,
    GRID_MAX,
    GRID_MIN,
    HAPPINESS_MIN,
)
from skylines.footprint import building_footprint
from skylines.types import (
    CityState,
    Coord,
    InsufficientFunds,
    OutOfBounds,
    Tile,
    TileOccupied,
)

log = logging.getLogger(__name__)


def in_bounds(coord: Coord) -> bool:
    x, z = coord
    return GRID_MIN <= x < GRID_MAX and GRID_MIN <= z < GRID_MAX


def anchor_of(state: CityState, coord: Coord) -> Tile | None:
    """Resolve *coord* to the anchor tile of the building covering it."""
    tile = state.tiles.get(coord)
    if tile is None:
        return None
    if tile.is_reserved:
        parent = state.tiles.get(tile.anchor)
        if parent is None or parent.is_reserved:
            return None
        return parent
    return tile


def anchors(state: CityState) -> Iterator[Tile]:
    """Every non-filler tile, in placement order."""
    for tile in state.tiles.values():
        if not tile.is_reserved:
            yield tile


def building_cells(tile: Tile) -> list[Coord]:
    """All cells covered by the building anchored at *tile*."""
    return building_footprint(tile.coord, tile.kind, tile.rotation)


def place(
    state: CityState,
    x: int,
    z: int,
    kind: BuildingKind,
    rotation: int = 0,
) -> Tile:
    """Place *kind* anchored at ``(x, z)`` and return the anchor tile.

    Preconditions are checked funds first, then bounds, then occupancy.
    Raises ``InsufficientFunds``, ``OutOfBounds`` or ``TileOccupied`` and
    leaves the state untouched when any of them fails.
    """
    if kind is BuildingKind.RESERVED:
        raise ValueError("Cannot place the reserved filler marker directly")
    if rotation not in (0, 1, 2, 3):
        raise ValueError(f"rotation must be in 0..3, got {rotation}")

    cfg = config_for(kind)
    if state.stats.money < cfg.cost:
        raise InsufficientFunds(cfg.cost, state.stats.money)

    cells = building_footprint((x, z), kind, rotation)
    for cell in cells:
        if not in_bounds(cell):
            raise OutOfBounds(cell)
        if cell in state.tiles:
            raise TileOccupied(cell)

    state.stats.money -= cfg.cost
    anchor = Tile(
        kind=kind, x=x, z=z, rotation=rotation,
        has_road_access=True, is_powered=True,
    )
    state.tiles[(x, z)] = anchor
    for cx, cz in cells[1:]:
        state.tiles[(cx, cz)] = Tile(
            kind=BuildingKind.RESERVED, x=cx, z=cz, rotation=rotation,
            parent_x=x, parent_z=z,
        )

    if kind is BuildingKind.NBK_TOWER:
        state.stats.game_won = True

    log.info("Placed %s at (%d, %d) for %d", kind.value, x, z, cfg.cost)
    return anchor


def remove(state: CityState, x: int, z: int) -> Tile | None:
    """Demolish the building covering ``(x, z)``.

    Returns the removed anchor tile, or None when nothing stands there.
    Removal is not a refund. Evicting an informal settlement costs
    happiness and adds corruption.
    """
    anchor = anchor_of(state, (x, z))
    if anchor is None:
        return None

    for cell in building_cells(anchor):
        state.tiles.pop(cell, None)
        state.fires.pop(cell, None)

    if anchor.kind is BuildingKind.INFORMAL_SETTLEMENT:
        stats = state.stats
        stats.happiness = max(HAPPINESS_MIN, stats.happiness - EVICTION_HAPPINESS_PENALTY)
        stats.corruption += EVICTION_CORRUPTION
        log.info("Evicted informal settlement at (%d, %d)", anchor.x, anchor.z)
    else:
        log.info("Removed %s at (%d, %d)", anchor.kind.value, anchor.x, anchor.z)
    return anchor
