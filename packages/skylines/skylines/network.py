"""Road and power network analysis over the tile map.

Power leaves every plant and travels only along road-type tiles
(roads and expressway pillars), 4-connected. A building has road access
when any cell of its footprint touches a road-type tile, and power access
when it touches a powered road-type tile or a plant directly.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Mapping

from skylines.catalog import BuildingKind, is_road_type
from skylines.footprint import building_footprint, orthogonal_neighbors
from skylines.types import Coord, Tile


@dataclass(frozen=True)
class NetworkStatus:
    """Result of one network analysis pass."""

    powered: frozenset[Coord]
    roads: frozenset[Coord]
    access: dict[Coord, tuple[bool, bool]] = field(default_factory=dict)

    def is_road(self, coord: Coord) -> bool:
        return coord in self.roads

    def has_road_access(self, coord: Coord) -> bool:
        return self.access.get(coord, (False, False))[0]

    def has_power_access(self, coord: Coord) -> bool:
        return self.access.get(coord, (False, False))[1]


def propagate_power(tiles: Mapping[Coord, Tile]) -> tuple[frozenset[Coord], frozenset[Coord]]:
    """Multi-source BFS from every plant across road-type tiles.

    Returns ``(powered, roads)``: plant cells plus reachable road cells, and
    every road-type cell on the map.
    """
    roads: set[Coord] = set()
    sources: list[Coord] = []
    for coord, tile in tiles.items():
        if is_road_type(tile.kind):
            roads.add(coord)
        elif tile.kind is BuildingKind.POWER_PLANT:
            sources.append(coord)

    powered: set[Coord] = set(sources)
    frontier: deque[Coord] = deque(sources)
    while frontier:
        current = frontier.popleft()
        for neighbor in orthogonal_neighbors(current):
            if neighbor in roads and neighbor not in powered:
                powered.add(neighbor)
                frontier.append(neighbor)
    return frozenset(powered), frozenset(roads)


def _tile_access(
    tile: Tile,
    tiles: Mapping[Coord, Tile],
    powered: frozenset[Coord],
) -> tuple[bool, bool]:
    if is_road_type(tile.kind):
        return True, tile.coord in powered

    road = False
    power = False
    for cell in building_footprint(tile.coord, tile.kind, tile.rotation):
        for neighbor in orthogonal_neighbors(cell):
            other = tiles.get(neighbor)
            if other is None:
                continue
            if is_road_type(other.kind):
                road = True
                if neighbor in powered:
                    power = True
            elif other.kind is BuildingKind.POWER_PLANT:
                power = True

    if tile.kind is BuildingKind.POWER_PLANT:
        power = True
    return road, power


def analyze_network(tiles: Mapping[Coord, Tile]) -> NetworkStatus:
    """Pure function of the tile map; computes access for every anchor."""
    powered, roads = propagate_power(tiles)
    access: dict[Coord, tuple[bool, bool]] = {}
    for coord, tile in tiles.items():
        if tile.is_reserved:
            continue
        access[coord] = _tile_access(tile, tiles, powered)
    return NetworkStatus(powered=powered, roads=roads, access=access)


def apply_network_status(tiles: Mapping[Coord, Tile], status: NetworkStatus) -> int:
    """Write access flags back onto anchors, touching only changed tiles.

    Returns the number of tiles that changed.
    """
    changed = 0
    for coord, (road, power) in status.access.items():
        tile = tiles[coord]
        if tile.has_road_access != road or tile.is_powered != power:
            tile.has_road_access = road
            tile.is_powered = power
            changed += 1
    return changed
