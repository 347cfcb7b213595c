"""One simulated day: the ordered system pipeline over the shared state."""
from __future__ import annotations

import logging
import random
from typing import Sequence

from skylines.events import make_tender_system
from skylines.fire import make_fire_system
from skylines.settlements import make_settlement_system
from skylines.systems import (
    make_economy_system,
    make_network_system,
    make_stats_system,
    make_tax_system,
    make_traffic_system,
)
from skylines.types import CityState, System, TickContext, TickLedger, TickReport

log = logging.getLogger(__name__)


def default_systems() -> list[System]:
    """The tick pipeline, in execution order. Each step reads the previous."""
    return [
        make_network_system(),
        make_economy_system(),
        make_tax_system(),
        make_traffic_system(),
        make_fire_system(),
        make_stats_system(),
        make_tender_system(),
        make_settlement_system(),
    ]


_DEFAULT_SYSTEMS = default_systems()


def run_tick(
    state: CityState,
    rng: random.Random,
    systems: Sequence[System] | None = None,
) -> TickReport:
    """Advance *state* by one day in place and report what happened.

    Only the fire and settlement systems draw from *rng*; seeding it makes
    the whole tick reproducible.
    """
    ledger = TickLedger()
    ctx = TickContext(tick_number=state.stats.tick_count, random=rng, ledger=ledger)
    for system in systems if systems is not None else _DEFAULT_SYSTEMS:
        system(state, ctx)

    net = state.financials.net
    log.debug(
        "Day %d: net %.2f, population %d, happiness %d",
        state.stats.tick_count, net, state.stats.population, state.stats.happiness,
    )
    return TickReport(
        tick_number=state.stats.tick_count,
        net_income=net,
        financials=state.financials,
        functioning=frozenset(ledger.functioning),
        ignited=tuple(ledger.ignited),
        extinguished=tuple(ledger.extinguished),
        spawned_settlement=ledger.spawned,
        scheduled_event=ledger.scheduled_event,
    )
