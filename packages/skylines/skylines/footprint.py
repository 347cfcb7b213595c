"""Footprint utilities: coordinate math for multi-cell buildings."""
from __future__ import annotations

from skylines.catalog import BuildingKind, footprint_size
from skylines.types import Coord

ORTHOGONAL: tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def expand_footprint(origin: Coord, dimensions: tuple[int, int]) -> list[Coord]:
    """Expand a rectangular footprint from *origin* with *dimensions*.

    Returns all cells in ``[origin, origin + dimensions)``, anchor first.

    >>> expand_footprint((5, 3), (2, 2))
    [(5, 3), (5, 4), (6, 3), (6, 4)]
    """
    width, depth = dimensions
    if width < 1 or depth < 1:
        raise ValueError(f"All dimensions must be >= 1, got {dimensions}")
    ox, oz = origin
    return [(ox + dx, oz + dz) for dx in range(width) for dz in range(depth)]


def building_footprint(
    origin: Coord, kind: BuildingKind, rotation: int
) -> list[Coord]:
    """Rotation-aware cells covered by *kind* anchored at *origin*."""
    return expand_footprint(origin, footprint_size(kind, rotation))


def orthogonal_neighbors(coord: Coord) -> list[Coord]:
    """The four N/S/E/W neighbours of *coord*, unbounded."""
    x, z = coord
    return [(x + dx, z + dz) for dx, dz in ORTHOGONAL]


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
