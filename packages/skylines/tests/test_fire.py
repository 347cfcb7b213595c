"""Tests for the fire hazard model."""
from __future__ import annotations

import random

from skylines.catalog import BuildingKind
from skylines.fire import ignite, is_flammable
from skylines.footprint import orthogonal_neighbors
from skylines.simulation import run_tick
from skylines.types import CityState, CityStats, Tile

K = BuildingKind


class FixedRandom(random.Random):
    """Random whose ``random()`` always returns *value*."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def make_state(*entries, tick_count: int = 1) -> CityState:
    state = CityState(stats=CityStats(tick_count=tick_count))
    for kind, x, z in entries:
        state.tiles[(x, z)] = Tile(kind, x, z)
    return state


class TestFlammability:
    def test_buildings_burn(self):
        assert is_flammable(Tile(K.KIOSK, 0, 0))

    def test_expressway_pillars_burn(self):
        assert is_flammable(Tile(K.EXPRESSWAY_PILLAR, 0, 0))

    def test_roads_filler_and_empty_do_not(self):
        assert not is_flammable(Tile(K.ROAD, 0, 0))
        assert not is_flammable(Tile(K.RESERVED, 0, 0, parent_x=1, parent_z=0))
        assert not is_flammable(None)

    def test_ignite(self):
        state = make_state((K.KIOSK, 0, 0), (K.ROAD, 1, 0))
        assert ignite(state, (0, 0))
        assert not ignite(state, (0, 0))
        assert not ignite(state, (1, 0))
        assert not ignite(state, (5, 5))
        assert state.fires == {(0, 0): 0}


class TestSuppression:
    def test_station_within_radius_extinguishes(self):
        state = make_state((K.ACACIA, 0, 0), (K.FIRE_STATION, 0, 3), (K.ROAD, 0, 4))
        state.fires[(0, 0)] = 1
        report = run_tick(state, random.Random(0))
        assert state.fires == {}
        assert report.extinguished == ((0, 0),)
        assert report.financials.expenses.emergency == 1000

    def test_station_out_of_radius_does_not(self):
        state = make_state((K.ACACIA, 0, 0), (K.FIRE_STATION, 0, 4), (K.ROAD, 0, 5))
        state.fires[(0, 0)] = 1
        report = run_tick(state, random.Random(0))
        assert state.fires == {(0, 0): 2}
        assert report.extinguished == ()
        assert report.financials.expenses.emergency == 0

    def test_station_without_road_does_not(self):
        state = make_state((K.ACACIA, 0, 0), (K.FIRE_STATION, 0, 1))
        state.fires[(0, 0)] = 0
        run_tick(state, random.Random(0))
        assert state.fires == {(0, 0): 1}


class TestBurning:
    def test_burning_costs_happiness(self):
        state = make_state((K.ACACIA, 0, 0))
        state.fires[(0, 0)] = 0
        run_tick(state, random.Random(0))
        # +2 from the tree, -2 from the fire.
        assert state.stats.happiness == 50

    def test_spreads_after_threshold(self):
        neighbours = orthogonal_neighbors((0, 0))
        state = make_state((K.ACACIA, 0, 0), *[(K.ACACIA, x, z) for x, z in neighbours])
        state.fires[(0, 0)] = 2
        report = run_tick(state, random.Random(0))
        assert state.fires[(0, 0)] == 3
        assert len(report.ignited) == 1
        spread_to = report.ignited[0]
        assert spread_to in neighbours
        assert state.fires[spread_to] == 0

    def test_no_spread_below_threshold(self):
        neighbours = orthogonal_neighbors((0, 0))
        state = make_state((K.ACACIA, 0, 0), *[(K.ACACIA, x, z) for x, z in neighbours])
        state.fires[(0, 0)] = 1
        run_tick(state, random.Random(0))
        assert state.fires == {(0, 0): 2}

    def test_spreads_onto_expressway(self):
        neighbours = orthogonal_neighbors((0, 0))
        state = make_state(
            (K.ACACIA, 0, 0), *[(K.EXPRESSWAY_PILLAR, x, z) for x, z in neighbours],
        )
        state.fires[(0, 0)] = 2
        report = run_tick(state, random.Random(0))
        assert len(report.ignited) == 1
        assert state.tiles[report.ignited[0]].kind is K.EXPRESSWAY_PILLAR

    def test_no_spread_onto_roads(self):
        neighbours = orthogonal_neighbors((0, 0))
        state = make_state((K.ACACIA, 0, 0), *[(K.ROAD, x, z) for x, z in neighbours])
        state.fires[(0, 0)] = 5
        report = run_tick(state, random.Random(0))
        assert state.fires == {(0, 0): 6}
        assert report.ignited == ()


class TestIgnition:
    def test_roll_on_interval_ignites(self):
        state = make_state((K.ACACIA, 0, 0), tick_count=0)
        report = run_tick(state, FixedRandom(0.0))
        assert state.fires == {(0, 0): 0}
        assert report.ignited == ((0, 0),)

    def test_failed_roll_does_not_ignite(self):
        state = make_state((K.ACACIA, 0, 0), tick_count=0)
        run_tick(state, FixedRandom(0.99))
        assert state.fires == {}

    def test_no_roll_off_interval(self):
        state = make_state((K.ACACIA, 0, 0), tick_count=3)
        run_tick(state, FixedRandom(0.0))
        assert state.fires == {}

    def test_roads_never_ignite(self):
        state = make_state((K.ROAD, 0, 0), tick_count=0)
        report = run_tick(state, FixedRandom(0.0))
        assert state.fires == {}
        assert report.ignited == ()
