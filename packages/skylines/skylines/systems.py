"""System factories for the deterministic part of a city tick.

Each factory returns a ``(state, ctx) -> None`` callable. Systems share a
``TickLedger`` through the context and run in the order assembled by
``skylines.simulation``.
"""
from __future__ import annotations

import logging
import math

from skylines.catalog import (
    TOLLS,
    BuildingKind,
    config_for,
    income_category,
    is_residential,
    needs_road,
)
from skylines.config import (
    BAR_NOISE_PENALTY,
    BASE_HAPPINESS,
    BLACKOUT_PENALTY,
    EXTORTION_TAX_PENALTY,
    EXTORTION_TAX_THRESHOLD,
    HAPPINESS_MAX,
    HAPPINESS_MIN,
    HIGH_TAX_PENALTY,
    HIGH_TAX_THRESHOLD,
    INSECURITY_PER_RESIDENTS,
    KICKBACK_CORRUPTION_DIVISOR,
    LOW_TAX_BONUS,
    LOW_TAX_THRESHOLD,
    NO_POWER_PENALTY,
    NO_ROAD_PENALTY,
    POLICE_INSECURITY_REDUCTION,
    POLLUTION_THRESHOLD,
    SETTLEMENT_HAPPINESS_PENALTY,
    SETTLEMENT_INSECURITY,
    TRAFFIC_CAPACITY_PER_ROAD,
    TRAFFIC_PENALTY_CAP,
    TRAFFIC_PENALTY_FACTOR,
)
from skylines.footprint import orthogonal_neighbors
from skylines.grid import anchors
from skylines.network import analyze_network, apply_network_status
from skylines.types import CityState, FinancialReport, System, Tile, TickContext

log = logging.getLogger(__name__)


def make_network_system() -> System:
    """Recompute road/power access and write changed flags back to tiles."""

    def network_system(state: CityState, ctx: TickContext) -> None:
        status = analyze_network(state.tiles)
        changed = apply_network_status(state.tiles, status)
        ctx.ledger.powered = status.powered
        ctx.ledger.roads = status.roads
        if changed:
            log.debug("Tick %d: %d tiles changed network status", ctx.tick_number, changed)

    return network_system


def _near_residential(state: CityState, tile: Tile) -> bool:
    for coord in orthogonal_neighbors(tile.coord):
        other = state.tiles.get(coord)
        if other is not None and is_residential(other.kind):
            return True
    return False


def make_economy_system() -> System:
    """Power capacity gate, functioning status, and per-building accumulation.

    Demand above total capacity blacks out every power consumer at once.
    """

    def economy_system(state: CityState, ctx: TickContext) -> None:
        ledger = ctx.ledger
        tax_rate = state.stats.tax_rate
        buildings = list(anchors(state))

        for tile in buildings:
            cfg = config_for(tile.kind)
            ledger.power_capacity += cfg.power_production
            ledger.power_demand += cfg.power_consumption
        ledger.power_sufficient = ledger.power_capacity >= ledger.power_demand

        for tile in buildings:
            kind = tile.kind
            cfg = config_for(kind)
            road_required = needs_road(kind)
            road_ok = tile.has_road_access if road_required else True
            functioning = road_ok and (
                not cfg.requires_power
                or (ledger.power_sufficient and tile.is_powered)
            )
            if functioning:
                ledger.functioning.add(tile.coord)

            ledger.population += cfg.population

            if functioning and cfg.revenue:
                category = income_category(kind)
                amount = cfg.revenue if category == TOLLS else cfg.revenue * tax_rate
                setattr(ledger.income, category, getattr(ledger.income, category) + amount)

            if cfg.upkeep:
                if kind is BuildingKind.ROAD:
                    ledger.expenses.infrastructure += cfg.upkeep
                else:
                    ledger.expenses.services += cfg.upkeep

            if functioning:
                ledger.happiness_delta += cfg.happiness
                ledger.pollution += cfg.pollution

            if cfg.population:
                if road_required and not tile.has_road_access:
                    ledger.happiness_penalty += NO_ROAD_PENALTY
                if road_ok and cfg.requires_power and not (
                    tile.is_powered and ledger.power_sufficient
                ):
                    ledger.happiness_penalty += NO_POWER_PENALTY

            if kind is BuildingKind.BAR and _near_residential(state, tile):
                ledger.happiness_penalty += BAR_NOISE_PENALTY
            elif kind is BuildingKind.INFORMAL_SETTLEMENT:
                ledger.settlements += 1

            if functioning:
                if kind is BuildingKind.KIOSK:
                    ledger.kiosks += 1
                elif kind is BuildingKind.POLICE_STATION:
                    ledger.police += 1
                elif kind is BuildingKind.FIRE_STATION:
                    ledger.fire_stations.append(tile.coord)

    return economy_system


def make_tax_system() -> System:
    """Happiness modifier from the tax rate. High bands stack."""

    def tax_system(state: CityState, ctx: TickContext) -> None:
        rate = state.stats.tax_rate
        if rate <= LOW_TAX_THRESHOLD:
            ctx.ledger.happiness_delta += LOW_TAX_BONUS
        if rate >= HIGH_TAX_THRESHOLD:
            ctx.ledger.happiness_penalty += HIGH_TAX_PENALTY
        if rate >= EXTORTION_TAX_THRESHOLD:
            ctx.ledger.happiness_penalty += EXTORTION_TAX_PENALTY

    return tax_system


def traffic_penalty(density: float) -> int:
    if density <= 1.0:
        return 0
    return min(TRAFFIC_PENALTY_CAP, math.floor((density - 1.0) * TRAFFIC_PENALTY_FACTOR))


def make_traffic_system() -> System:
    """Density from population against road capacity."""

    def traffic_system(state: CityState, ctx: TickContext) -> None:
        ledger = ctx.ledger
        capacity = max(1, len(ledger.roads) * TRAFFIC_CAPACITY_PER_ROAD)
        ledger.traffic_density = ledger.population / capacity
        ledger.happiness_penalty += traffic_penalty(ledger.traffic_density)

    return traffic_system


def pollution_penalty(pollution: float) -> int:
    if pollution <= POLLUTION_THRESHOLD:
        return 0
    return math.floor((pollution - POLLUTION_THRESHOLD) / 2)


def make_stats_system() -> System:
    """Derive the final city figures and settle the treasury."""

    def stats_system(state: CityState, ctx: TickContext) -> None:
        ledger = ctx.ledger
        stats = state.stats

        insecurity = max(
            0,
            ledger.population // INSECURITY_PER_RESIDENTS
            + SETTLEMENT_INSECURITY * ledger.settlements
            - POLICE_INSECURITY_REDUCTION * ledger.police,
        )
        corruption = ledger.kiosks + math.floor(
            stats.kickback_revenue / KICKBACK_CORRUPTION_DIVISOR
        )
        pollution = max(0.0, ledger.pollution)

        happiness = (
            BASE_HAPPINESS
            + ledger.happiness_delta
            - corruption
            - insecurity
            - ledger.happiness_penalty
            - pollution_penalty(pollution)
            - SETTLEMENT_HAPPINESS_PENALTY * ledger.settlements
        )
        if not ledger.power_sufficient and ledger.power_demand > 0:
            happiness -= BLACKOUT_PENALTY
        happiness = max(HAPPINESS_MIN, min(HAPPINESS_MAX, happiness))

        ledger.income.kickbacks = stats.kickback_revenue
        report = FinancialReport(income=ledger.income, expenses=ledger.expenses)

        stats.money += report.net
        stats.population = ledger.population
        stats.happiness = happiness
        stats.insecurity = insecurity
        stats.corruption = corruption
        stats.pollution = pollution
        stats.power_capacity = ledger.power_capacity
        stats.power_demand = ledger.power_demand
        stats.traffic_density = ledger.traffic_density
        state.financials = report

    return stats_system
