"""Tests for footprint utilities."""
from __future__ import annotations

import pytest

from skylines.catalog import BuildingKind
from skylines.footprint import (
    building_footprint,
    expand_footprint,
    manhattan,
    orthogonal_neighbors,
)


class TestExpandFootprint:
    def test_1x1(self) -> None:
        assert expand_footprint((5, 3), (1, 1)) == [(5, 3)]

    def test_2x2_anchor_first(self) -> None:
        result = expand_footprint((5, 3), (2, 2))
        assert result[0] == (5, 3)
        assert sorted(result) == sorted([(5, 3), (5, 4), (6, 3), (6, 4)])

    def test_negative_origin(self) -> None:
        result = expand_footprint((-1, -1), (2, 2))
        assert sorted(result) == sorted([(-1, -1), (-1, 0), (0, -1), (0, 0)])

    def test_zero_dimension_raises(self) -> None:
        with pytest.raises(ValueError, match=">= 1"):
            expand_footprint((0, 0), (2, 0))


class TestBuildingFootprint:
    def test_mall_unrotated(self) -> None:
        assert sorted(building_footprint((0, 0), BuildingKind.MALL, 0)) == [(0, 0), (1, 0)]

    def test_mall_rotated(self) -> None:
        assert sorted(building_footprint((0, 0), BuildingKind.MALL, 1)) == [(0, 0), (0, 1)]


def test_orthogonal_neighbors():
    assert sorted(orthogonal_neighbors((0, 0))) == [(-1, 0), (0, -1), (0, 1), (1, 0)]


def test_manhattan():
    assert manhattan((0, 0), (3, 0)) == 3
    assert manhattan((0, 0), (2, -2)) == 4
