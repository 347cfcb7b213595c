"""skylines - Deterministic tick simulation core for a Nairobi city builder."""

from skylines.catalog import CATALOG, BuildingConfig, BuildingKind, config_for
from skylines.config import EngineConfig
from skylines.engine import CityEngine
from skylines.events import TenderChoice, resolve_tender
from skylines.grid import place, remove
from skylines.network import NetworkStatus, analyze_network
from skylines.persistence import dumps, from_dict, loads, to_dict
from skylines.policy import city_score, set_tax_rate
from skylines.signals import SignalBus
from skylines.simulation import run_tick
from skylines.types import (
    CityError,
    CityState,
    CityStats,
    CorruptSaveData,
    FinancialReport,
    InsufficientFunds,
    InvalidEventChoice,
    OutOfBounds,
    SnapshotError,
    Tile,
    TileOccupied,
    TickReport,
)

__all__ = [
    "CityEngine",
    "EngineConfig",
    "CityState",
    "CityStats",
    "FinancialReport",
    "Tile",
    "TickReport",
    "BuildingKind",
    "BuildingConfig",
    "CATALOG",
    "config_for",
    "place",
    "remove",
    "run_tick",
    "analyze_network",
    "NetworkStatus",
    "TenderChoice",
    "resolve_tender",
    "set_tax_rate",
    "city_score",
    "SignalBus",
    "to_dict",
    "from_dict",
    "dumps",
    "loads",
    "CityError",
    "InsufficientFunds",
    "OutOfBounds",
    "TileOccupied",
    "InvalidEventChoice",
    "SnapshotError",
    "CorruptSaveData",
]
