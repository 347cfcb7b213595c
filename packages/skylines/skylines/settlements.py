"""Informal settlement growth driven by insecurity."""
from __future__ import annotations

import logging

from skylines.catalog import BuildingKind
from skylines.config import SETTLEMENT_GROWTH_INTERVAL, SETTLEMENT_INSECURITY_THRESHOLD
from skylines.footprint import orthogonal_neighbors
from skylines.grid import in_bounds
from skylines.types import CityState, Coord, System, Tile, TickContext

log = logging.getLogger(__name__)


def growth_candidates(state: CityState) -> list[Coord]:
    """Empty in-bounds cells next to any road or apartment.

    A cell bordering several qualifying tiles appears once per neighbour,
    weighting the draw towards busy corners.
    """
    candidates: list[Coord] = []
    for tile in state.tiles.values():
        if tile.kind is not BuildingKind.ROAD and tile.kind is not BuildingKind.APARTMENT:
            continue
        for coord in orthogonal_neighbors(tile.coord):
            if in_bounds(coord) and coord not in state.tiles:
                candidates.append(coord)
    return candidates


def make_settlement_system() -> System:
    """Return a system that lets one squatter camp appear on qualifying days.

    Runs after the day counter advanced; costs nothing and ignores money.
    """

    def settlement_system(state: CityState, ctx: TickContext) -> None:
        stats = state.stats
        if stats.tick_count % SETTLEMENT_GROWTH_INTERVAL != 0:
            return
        if stats.insecurity <= SETTLEMENT_INSECURITY_THRESHOLD:
            return
        candidates = growth_candidates(state)
        if not candidates:
            return
        x, z = ctx.random.choice(candidates)
        state.tiles[(x, z)] = Tile(
            kind=BuildingKind.INFORMAL_SETTLEMENT, x=x, z=z,
            rotation=ctx.random.randrange(4),
        )
        ctx.ledger.spawned = (x, z)
        log.info("Informal settlement sprang up at (%d, %d)", x, z)

    return settlement_system
