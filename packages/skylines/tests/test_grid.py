"""Tests for placement and removal on the tile store."""
from __future__ import annotations

import pytest

from skylines.catalog import BuildingKind
from skylines.grid import anchor_of, in_bounds, place, remove
from skylines.types import (
    CityState,
    CityStats,
    InsufficientFunds,
    OutOfBounds,
    Tile,
    TileOccupied,
)


def rich_state() -> CityState:
    return CityState(stats=CityStats(money=1_000_000))


class TestBounds:
    def test_corners(self):
        assert in_bounds((-10, -10))
        assert in_bounds((9, 9))
        assert not in_bounds((10, 0))
        assert not in_bounds((0, -11))


class TestPlace:
    def test_place_charges_cost_and_sets_flags(self):
        state = CityState()
        tile = place(state, 0, 0, BuildingKind.ROAD)
        assert state.stats.money == 49500
        assert state.tiles[(0, 0)] is tile
        assert tile.has_road_access
        assert tile.is_powered

    def test_place_then_remove_restores_tiles_not_money(self):
        state = CityState()
        place(state, 3, 4, BuildingKind.KIOSK)
        removed = remove(state, 3, 4)
        assert removed is not None
        assert removed.kind is BuildingKind.KIOSK
        assert state.tiles == {}
        assert state.stats.money == 48000

    def test_multi_cell_writes_filler(self):
        state = rich_state()
        place(state, 0, 0, BuildingKind.NBK_TOWER)
        assert state.tiles[(0, 0)].kind is BuildingKind.NBK_TOWER
        for cell in ((0, 1), (1, 0), (1, 1)):
            filler = state.tiles[cell]
            assert filler.is_reserved
            assert filler.anchor == (0, 0)
        assert len(state.tiles) == 4

    def test_rotation_swaps_footprint(self):
        state = rich_state()
        place(state, 0, 0, BuildingKind.MALL, rotation=1)
        assert set(state.tiles) == {(0, 0), (0, 1)}

        state = rich_state()
        place(state, 0, 0, BuildingKind.MALL, rotation=0)
        assert set(state.tiles) == {(0, 0), (1, 0)}

    def test_nbk_tower_wins(self):
        state = rich_state()
        assert not state.stats.game_won
        place(state, 0, 0, BuildingKind.NBK_TOWER)
        assert state.stats.game_won

    def test_reserved_kind_rejected(self):
        with pytest.raises(ValueError, match="reserved"):
            place(CityState(), 0, 0, BuildingKind.RESERVED)

    def test_bad_rotation_rejected(self):
        with pytest.raises(ValueError, match="rotation"):
            place(CityState(), 0, 0, BuildingKind.ROAD, rotation=4)


class TestPlaceRejections:
    def test_insufficient_funds(self):
        state = CityState(stats=CityStats(money=100))
        with pytest.raises(InsufficientFunds) as info:
            place(state, 0, 0, BuildingKind.ROAD)
        assert info.value.required == 500
        assert state.tiles == {}
        assert state.stats.money == 100

    def test_funds_checked_before_bounds(self):
        state = CityState(stats=CityStats(money=100))
        with pytest.raises(InsufficientFunds):
            place(state, 50, 50, BuildingKind.ROAD)

    def test_out_of_bounds(self):
        state = CityState()
        with pytest.raises(OutOfBounds, match="outside"):
            place(state, 10, 0, BuildingKind.ROAD)
        assert state.tiles == {}
        assert state.stats.money == 50000

    def test_partially_out_of_bounds_is_atomic(self):
        state = rich_state()
        with pytest.raises(OutOfBounds):
            place(state, 9, 9, BuildingKind.NBK_TOWER)
        assert state.tiles == {}
        assert state.stats.money == 1_000_000
        assert not state.stats.game_won

    def test_occupied(self):
        state = CityState()
        place(state, 0, 0, BuildingKind.ROAD)
        with pytest.raises(TileOccupied, match="occupied"):
            place(state, 0, 0, BuildingKind.KIOSK)
        assert state.tiles[(0, 0)].kind is BuildingKind.ROAD
        assert state.stats.money == 49500

    def test_footprint_overlap_is_atomic(self):
        state = rich_state()
        place(state, 1, 1, BuildingKind.ROAD)
        money = state.stats.money
        with pytest.raises(TileOccupied) as info:
            place(state, 0, 0, BuildingKind.NBK_TOWER)
        assert info.value.coord == (1, 1)
        assert set(state.tiles) == {(1, 1)}
        assert state.stats.money == money


class TestRemove:
    def test_remove_empty_is_noop(self):
        state = CityState()
        assert remove(state, 0, 0) is None
        assert state.stats.money == 50000

    def test_remove_via_filler_clears_whole_building(self):
        state = rich_state()
        place(state, 0, 0, BuildingKind.NBK_TOWER)
        removed = remove(state, 1, 1)
        assert removed is not None
        assert removed.kind is BuildingKind.NBK_TOWER
        assert state.tiles == {}

    def test_anchor_of_resolves_filler(self):
        state = rich_state()
        place(state, 2, 2, BuildingKind.NBK_TOWER)
        assert anchor_of(state, (3, 3)).coord == (2, 2)
        assert anchor_of(state, (5, 5)) is None

    def test_remove_clears_fires(self):
        state = CityState()
        place(state, 0, 0, BuildingKind.KIOSK)
        state.fires[(0, 0)] = 1
        remove(state, 0, 0)
        assert state.fires == {}

    def test_eviction_penalty(self):
        state = CityState()
        state.tiles[(0, 0)] = Tile(BuildingKind.INFORMAL_SETTLEMENT, 0, 0)
        remove(state, 0, 0)
        assert state.stats.happiness == 30
        assert state.stats.corruption == 10
        assert state.tiles == {}

    def test_eviction_happiness_floors_at_zero(self):
        state = CityState(stats=CityStats(happiness=5))
        state.tiles[(0, 0)] = Tile(BuildingKind.INFORMAL_SETTLEMENT, 0, 0)
        remove(state, 0, 0)
        assert state.stats.happiness == 0

    def test_ordinary_removal_has_no_penalty(self):
        state = CityState()
        place(state, 0, 0, BuildingKind.ROAD)
        remove(state, 0, 0)
        assert state.stats.happiness == 50
        assert state.stats.corruption == 0
