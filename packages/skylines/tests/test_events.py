"""Tests for the expressway tender."""
from __future__ import annotations

import random

import pytest

from skylines.catalog import BuildingKind
from skylines.config import GRID_MAX, GRID_MIN
from skylines.events import EXPRESSWAY_ROW, TenderChoice, parse_choice, resolve_tender
from skylines.simulation import run_tick
from skylines.types import (
    TENDER_EXPRESSWAY,
    CityState,
    CityStats,
    InsufficientFunds,
    InvalidEventChoice,
    Tile,
)


def pending(**stats) -> CityState:
    return CityState(stats=CityStats(active_event=TENDER_EXPRESSWAY, **stats))


class TestScheduling:
    def test_offered_on_day_24(self):
        state = CityState(stats=CityStats(tick_count=23))
        report = run_tick(state, random.Random(0))
        assert state.stats.tick_count == 24
        assert state.stats.active_event == TENDER_EXPRESSWAY
        assert report.scheduled_event == TENDER_EXPRESSWAY

    def test_not_offered_between_intervals(self):
        state = CityState(stats=CityStats(tick_count=24))
        report = run_tick(state, random.Random(0))
        assert state.stats.active_event is None
        assert report.scheduled_event is None

    def test_pending_tender_is_not_replaced(self):
        state = pending(tick_count=47)
        report = run_tick(state, random.Random(0))
        assert state.stats.tick_count == 48
        assert state.stats.active_event == TENDER_EXPRESSWAY
        assert report.scheduled_event is None


class TestResolve:
    def test_standard(self):
        state = pending()
        built = resolve_tender(state, TenderChoice.STANDARD)
        assert state.stats.money == 40000
        assert state.stats.happiness == 55
        assert state.stats.corruption == 0
        assert state.stats.active_event is None
        assert len(built) == GRID_MAX - GRID_MIN
        for x in range(GRID_MIN, GRID_MAX):
            tile = state.tiles[(x, EXPRESSWAY_ROW)]
            assert tile.kind is BuildingKind.EXPRESSWAY_PILLAR

    def test_standard_happiness_capped(self):
        state = pending(happiness=98)
        resolve_tender(state, "standard")
        assert state.stats.happiness == 100

    def test_bribe(self):
        state = pending()
        built = resolve_tender(state, "bribe")
        assert state.stats.money == 48000
        assert state.stats.corruption == 10
        assert state.stats.kickback_revenue == 500
        assert state.stats.happiness == 50
        assert len(built) == 20
        assert state.stats.active_event is None

    def test_bribe_accepted_into_debt(self):
        state = pending(money=1000)
        built = resolve_tender(state, TenderChoice.BRIBE)
        assert state.stats.money == -1000
        assert state.stats.kickback_revenue == 500
        assert state.stats.corruption == 10
        assert len(built) == 20
        assert state.stats.active_event is None

    def test_reject(self):
        state = pending()
        built = resolve_tender(state, TenderChoice.REJECT)
        assert built == []
        assert state.tiles == {}
        assert state.stats.money == 50000
        assert state.stats.active_event is None

    def test_occupied_cells_are_skipped(self):
        state = pending()
        state.tiles[(0, EXPRESSWAY_ROW)] = Tile(BuildingKind.ROAD, 0, EXPRESSWAY_ROW)
        built = resolve_tender(state, TenderChoice.STANDARD)
        assert len(built) == 19
        assert state.tiles[(0, EXPRESSWAY_ROW)].kind is BuildingKind.ROAD


class TestResolveErrors:
    def test_no_active_event(self):
        state = CityState()
        with pytest.raises(InvalidEventChoice, match="No tender"):
            resolve_tender(state, TenderChoice.STANDARD)
        assert state.stats.money == 50000

    def test_unknown_choice(self):
        state = pending()
        with pytest.raises(InvalidEventChoice, match="Unknown"):
            resolve_tender(state, "maybe")
        assert state.stats.active_event == TENDER_EXPRESSWAY

    def test_parse_choice(self):
        assert parse_choice("reject") is TenderChoice.REJECT
        assert parse_choice(TenderChoice.BRIBE) is TenderChoice.BRIBE

    def test_standard_unaffordable(self):
        state = pending(money=5000)
        with pytest.raises(InsufficientFunds):
            resolve_tender(state, TenderChoice.STANDARD)
        assert state.stats.money == 5000
        assert state.stats.active_event == TENDER_EXPRESSWAY
        assert state.tiles == {}


class TestAftermath:
    def test_bribe_corruption_persists_through_recompute(self):
        state = pending(tick_count=1)
        resolve_tender(state, TenderChoice.BRIBE)
        run_tick(state, random.Random(0))
        assert state.stats.corruption == 10

    def test_tolls_are_untaxed(self):
        state = pending(tick_count=1, tax_rate=2.0)
        resolve_tender(state, TenderChoice.STANDARD)
        report = run_tick(state, random.Random(0))
        assert report.financials.income.tolls == 500
