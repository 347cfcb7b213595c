"""Fire hazard model: suppression, burning, spread, and random ignition.

Fires live in ``CityState.fires`` as coordinate -> ticks burned. This is
one of the two stochastic systems of a tick; all draws come from
``ctx.random``.
"""
from __future__ import annotations

import logging

from skylines.catalog import BuildingKind
from skylines.config import (
    FIRE_EMERGENCY_COST,
    FIRE_HAPPINESS_PENALTY,
    FIRE_SPREAD_THRESHOLD,
    FIRE_SUPPRESSION_RADIUS,
    IGNITION_CHANCE,
    IGNITION_INTERVAL,
)
from skylines.footprint import manhattan, orthogonal_neighbors
from skylines.types import CityState, Coord, System, Tile, TickContext

log = logging.getLogger(__name__)


# Kinds that never burn. Expressway pillars are buildings here and do burn.
NON_FLAMMABLE = frozenset({BuildingKind.ROAD, BuildingKind.RESERVED})


def is_flammable(tile: Tile | None) -> bool:
    return tile is not None and tile.kind not in NON_FLAMMABLE


def within_suppression(coord: Coord, stations: list[Coord]) -> bool:
    return any(manhattan(coord, s) <= FIRE_SUPPRESSION_RADIUS for s in stations)


def ignite(state: CityState, coord: Coord) -> bool:
    """Start a fire at *coord*. Returns False when it is ineligible or already burning."""
    if coord in state.fires or not is_flammable(state.tiles.get(coord)):
        return False
    state.fires[coord] = 0
    return True


def make_fire_system() -> System:
    """Return a system that advances every fire by one tick.

    Tick execution order:
    1. Fires within range of a functioning fire station are put out and
       billed as emergency expenses.
    2. Remaining fires burn one tick longer and cost happiness; those past
       the spread threshold try one random orthogonal neighbour.
    3. On every ignition interval a random eligible building may catch fire.
    """

    def fire_system(state: CityState, ctx: TickContext) -> None:
        ledger = ctx.ledger
        rng = ctx.random

        for coord in list(state.fires):
            if within_suppression(coord, ledger.fire_stations):
                del state.fires[coord]
                ledger.expenses.emergency += FIRE_EMERGENCY_COST
                ledger.extinguished.append(coord)
                continue

            state.fires[coord] += 1
            ledger.happiness_penalty += FIRE_HAPPINESS_PENALTY
            if state.fires[coord] > FIRE_SPREAD_THRESHOLD:
                target = rng.choice(orthogonal_neighbors(coord))
                if ignite(state, target):
                    ledger.ignited.append(target)
                    log.info("Fire spread from %s to %s", coord, target)

        if ctx.tick_number % IGNITION_INTERVAL == 0 and rng.random() < IGNITION_CHANCE:
            eligible = [
                coord for coord, tile in state.tiles.items()
                if is_flammable(tile) and coord not in state.fires
            ]
            if eligible:
                target = rng.choice(eligible)
                ignite(state, target)
                ledger.ignited.append(target)
                log.info("Fire broke out at %s", target)

    return fire_system
