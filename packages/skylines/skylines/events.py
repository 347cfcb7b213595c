"""The scripted expressway tender: scheduling and resolution."""
from __future__ import annotations

import logging
from enum import Enum

from skylines.catalog import BuildingKind
from skylines.config import (
    EVENT_INTERVAL,
    GRID_MAX,
    GRID_MIN,
    HAPPINESS_MAX,
    TENDER_BRIBE_CORRUPTION,
    TENDER_BRIBE_COST,
    TENDER_BRIBE_KICKBACK,
    TENDER_STANDARD_COST,
    TENDER_STANDARD_HAPPINESS,
)
from skylines.types import (
    TENDER_EXPRESSWAY,
    CityState,
    InsufficientFunds,
    InvalidEventChoice,
    System,
    Tile,
    TickContext,
)

log = logging.getLogger(__name__)

# Row along which the expressway is built.
EXPRESSWAY_ROW = GRID_MIN


class TenderChoice(Enum):
    STANDARD = "standard"
    BRIBE = "bribe"
    REJECT = "reject"


def parse_choice(choice: TenderChoice | str) -> TenderChoice:
    """Accept a choice or its tag. Raises InvalidEventChoice for unknown tags."""
    if isinstance(choice, TenderChoice):
        return choice
    try:
        return TenderChoice(choice)
    except ValueError:
        raise InvalidEventChoice(f"Unknown tender choice {choice!r}") from None


def build_expressway(state: CityState) -> list[Tile]:
    """Lay expressway pillars on every free cell of the northern edge row.

    Occupied cells are skipped. Returns the pillars that were built.
    """
    built: list[Tile] = []
    for x in range(GRID_MIN, GRID_MAX):
        coord = (x, EXPRESSWAY_ROW)
        if coord in state.tiles:
            continue
        pillar = Tile(
            kind=BuildingKind.EXPRESSWAY_PILLAR, x=x, z=EXPRESSWAY_ROW,
            has_road_access=True, is_powered=True,
        )
        state.tiles[coord] = pillar
        built.append(pillar)
    return built


def resolve_tender(state: CityState, choice: TenderChoice | str) -> list[Tile]:
    """Apply the player's decision on the active tender.

    Returns the expressway pillars built (empty on reject). Raises
    ``InvalidEventChoice`` when no tender is pending or the choice is
    unknown, and ``InsufficientFunds`` when the standard option is
    unaffordable; the state is untouched in both cases. The bribe is
    always accepted, even if it leaves the treasury negative.
    """
    stats = state.stats
    if stats.active_event != TENDER_EXPRESSWAY:
        raise InvalidEventChoice("No tender is awaiting a decision")
    choice = parse_choice(choice)

    built: list[Tile] = []
    if choice is TenderChoice.STANDARD:
        if stats.money < TENDER_STANDARD_COST:
            raise InsufficientFunds(TENDER_STANDARD_COST, stats.money)
        stats.money -= TENDER_STANDARD_COST
        stats.happiness = min(HAPPINESS_MAX, stats.happiness + TENDER_STANDARD_HAPPINESS)
        built = build_expressway(state)
    elif choice is TenderChoice.BRIBE:
        stats.money -= TENDER_BRIBE_COST
        stats.corruption += TENDER_BRIBE_CORRUPTION
        stats.kickback_revenue += TENDER_BRIBE_KICKBACK
        built = build_expressway(state)

    stats.active_event = None
    log.info("Tender resolved: %s (%d pillars built)", choice.value, len(built))
    return built


def make_tender_system() -> System:
    """Advance the day counter and offer a tender every EVENT_INTERVAL days.

    A pending tender is never replaced by a new one.
    """

    def tender_system(state: CityState, ctx: TickContext) -> None:
        stats = state.stats
        stats.tick_count += 1
        if stats.tick_count % EVENT_INTERVAL == 0 and stats.active_event is None:
            stats.active_event = TENDER_EXPRESSWAY
            ctx.ledger.scheduled_event = TENDER_EXPRESSWAY
            log.info("Day %d: expressway tender offered", stats.tick_count)

    return tender_system
