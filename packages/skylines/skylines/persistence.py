"""Save/load of the city state as JSON-compatible data.

Loading fails fast: any missing field, wrong type, unknown building kind or
broken filler pointer raises ``CorruptSaveData`` instead of falling back to
defaults, so a damaged save never yields a half-default city.
"""
from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

from skylines.catalog import BuildingKind
from skylines.fire import is_flammable
from skylines.grid import in_bounds
from skylines.types import (
    CityState,
    CityStats,
    Coord,
    CorruptSaveData,
    Expenses,
    FinancialReport,
    Income,
    Tile,
)

log = logging.getLogger(__name__)

SAVE_VERSION = 1

_INT_STATS = ("population", "happiness", "insecurity", "corruption",
              "power_capacity", "power_demand", "tick_count")
_FLOAT_STATS = ("money", "pollution", "traffic_density", "tax_rate", "kickback_revenue")


def to_dict(state: CityState) -> dict[str, Any]:
    """Serialize *state*. Tile and fire order is preserved."""
    data: dict[str, Any] = {"version": SAVE_VERSION}
    data.update(dataclasses.asdict(state.stats))
    data["tiles"] = [
        {
            "kind": tile.kind.value,
            "x": tile.x,
            "z": tile.z,
            "rotation": tile.rotation,
            "parent_x": tile.parent_x,
            "parent_z": tile.parent_z,
            "has_road_access": tile.has_road_access,
            "is_powered": tile.is_powered,
        }
        for tile in state.tiles.values()
    ]
    data["fires"] = [[x, z, duration] for (x, z), duration in state.fires.items()]
    data["financials"] = {
        "income": dataclasses.asdict(state.financials.income),
        "expenses": dataclasses.asdict(state.financials.expenses),
    }
    return data


def _require(data: dict[str, Any], key: str, where: str = "save") -> Any:
    if key not in data:
        raise CorruptSaveData(f"{where} is missing field {key!r}")
    return data[key]


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptSaveData(f"Field {key!r} must be an integer, got {value!r}")
    return value


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CorruptSaveData(f"Field {key!r} must be a number, got {value!r}")
    return float(value)


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise CorruptSaveData(f"Field {key!r} must be a boolean, got {value!r}")
    return value


def _optional_int(value: Any, key: str) -> int | None:
    return None if value is None else _as_int(value, key)


def _load_tile(raw: Any) -> Tile:
    if not isinstance(raw, dict):
        raise CorruptSaveData(f"Tile entry must be an object, got {raw!r}")
    kind_tag = _require(raw, "kind", "tile")
    try:
        kind = BuildingKind(kind_tag)
    except ValueError:
        raise CorruptSaveData(f"Unknown building kind {kind_tag!r}") from None
    rotation = _as_int(_require(raw, "rotation", "tile"), "rotation")
    if rotation not in (0, 1, 2, 3):
        raise CorruptSaveData(f"Tile rotation out of range: {rotation}")
    return Tile(
        kind=kind,
        x=_as_int(_require(raw, "x", "tile"), "x"),
        z=_as_int(_require(raw, "z", "tile"), "z"),
        rotation=rotation,
        parent_x=_optional_int(_require(raw, "parent_x", "tile"), "parent_x"),
        parent_z=_optional_int(_require(raw, "parent_z", "tile"), "parent_z"),
        has_road_access=_as_bool(_require(raw, "has_road_access", "tile"), "has_road_access"),
        is_powered=_as_bool(_require(raw, "is_powered", "tile"), "is_powered"),
    )


def _load_tiles(raw: Any) -> dict[Coord, Tile]:
    if not isinstance(raw, list):
        raise CorruptSaveData("Field 'tiles' must be a list")
    tiles: dict[Coord, Tile] = {}
    for entry in raw:
        tile = _load_tile(entry)
        if not in_bounds(tile.coord):
            raise CorruptSaveData(f"Tile {tile.coord} lies outside the grid")
        if tile.coord in tiles:
            raise CorruptSaveData(f"Duplicate tile at {tile.coord}")
        tiles[tile.coord] = tile

    for tile in tiles.values():
        if not tile.is_reserved:
            continue
        parent = tiles.get(tile.anchor)
        if tile.anchor == tile.coord or parent is None or parent.is_reserved:
            raise CorruptSaveData(f"Filler tile {tile.coord} has no anchor")
    return tiles


def _load_fires(raw: Any, tiles: dict[Coord, Tile]) -> dict[Coord, int]:
    if not isinstance(raw, list):
        raise CorruptSaveData("Field 'fires' must be a list")
    fires: dict[Coord, int] = {}
    for entry in raw:
        if not isinstance(entry, list) or len(entry) != 3:
            raise CorruptSaveData(f"Fire entry must be [x, z, duration], got {entry!r}")
        x, z, duration = (_as_int(v, "fires") for v in entry)
        coord = (x, z)
        if not in_bounds(coord):
            raise CorruptSaveData(f"Fire at {coord} lies outside the grid")
        if coord in fires:
            raise CorruptSaveData(f"Duplicate fire at {coord}")
        if duration < 0:
            raise CorruptSaveData(f"Fire at {coord} has negative duration {duration}")
        if not is_flammable(tiles.get(coord)):
            raise CorruptSaveData(f"Fire at {coord} is not on a burnable building")
        fires[coord] = duration
    return fires


def _load_financials(raw: Any) -> FinancialReport:
    if not isinstance(raw, dict):
        raise CorruptSaveData("Field 'financials' must be an object")
    income_raw = _require(raw, "income", "financials")
    expenses_raw = _require(raw, "expenses", "financials")
    if not isinstance(income_raw, dict) or not isinstance(expenses_raw, dict):
        raise CorruptSaveData("Financial breakdowns must be objects")
    income = Income(**{
        f.name: _as_float(_require(income_raw, f.name, "income"), f.name)
        for f in dataclasses.fields(Income)
    })
    expenses = Expenses(**{
        f.name: _as_float(_require(expenses_raw, f.name, "expenses"), f.name)
        for f in dataclasses.fields(Expenses)
    })
    return FinancialReport(income=income, expenses=expenses)


def from_dict(data: Any) -> CityState:
    """Rebuild a state from ``to_dict`` output. Raises CorruptSaveData."""
    if not isinstance(data, dict):
        raise CorruptSaveData("Save data must be an object")
    version = data.get("version")
    if version != SAVE_VERSION:
        raise CorruptSaveData(
            f"Unsupported save version {version!r}, expected {SAVE_VERSION}"
        )

    stats_fields: dict[str, Any] = {}
    for key in _INT_STATS:
        stats_fields[key] = _as_int(_require(data, key), key)
    for key in _FLOAT_STATS:
        stats_fields[key] = _as_float(_require(data, key), key)
    stats_fields["game_won"] = _as_bool(_require(data, "game_won"), "game_won")
    active_event = _require(data, "active_event")
    if active_event is not None and not isinstance(active_event, str):
        raise CorruptSaveData("Field 'active_event' must be a string or null")
    stats_fields["active_event"] = active_event

    tiles = _load_tiles(_require(data, "tiles"))
    return CityState(
        tiles=tiles,
        fires=_load_fires(_require(data, "fires"), tiles),
        stats=CityStats(**stats_fields),
        financials=_load_financials(_require(data, "financials")),
    )


def dumps(state: CityState) -> str:
    return json.dumps(to_dict(state))


def loads(text: str) -> CityState:
    """Parse JSON text produced by ``dumps``. Raises CorruptSaveData."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        log.warning("Rejected unreadable save: %s", exc)
        raise CorruptSaveData(f"Save is not valid JSON: {exc}") from exc
    return from_dict(data)
