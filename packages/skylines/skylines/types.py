"""Shared data records, tick context, and error types for the simulation."""
from __future__ import annotations

import random as _random
from dataclasses import dataclass, field
from typing import Callable

from skylines.catalog import BuildingKind
from skylines.config import BASE_HAPPINESS, DEFAULT_TAX_RATE, STARTING_MONEY

Coord = tuple[int, int]

TENDER_EXPRESSWAY = "tender_expressway"


@dataclass
class Tile:
    """One grid cell. Filler cells of a multi-cell building point at their anchor."""

    kind: BuildingKind
    x: int
    z: int
    rotation: int = 0
    parent_x: int | None = None
    parent_z: int | None = None
    has_road_access: bool = False
    is_powered: bool = False

    @property
    def coord(self) -> Coord:
        return (self.x, self.z)

    @property
    def is_reserved(self) -> bool:
        return self.kind is BuildingKind.RESERVED

    @property
    def anchor(self) -> Coord:
        """Coordinate of the owning anchor tile (self for anchors)."""
        if self.parent_x is not None and self.parent_z is not None:
            return (self.parent_x, self.parent_z)
        return (self.x, self.z)


@dataclass
class Income:
    residential: float = 0.0
    commercial: float = 0.0
    industrial: float = 0.0
    agricultural: float = 0.0
    tolls: float = 0.0
    kickbacks: float = 0.0

    @property
    def total(self) -> float:
        return (self.residential + self.commercial + self.industrial
                + self.agricultural + self.tolls + self.kickbacks)


@dataclass
class Expenses:
    infrastructure: float = 0.0
    services: float = 0.0
    emergency: float = 0.0

    @property
    def total(self) -> float:
        return self.infrastructure + self.services + self.emergency


@dataclass
class FinancialReport:
    """Per-tick income/expense breakdown. A projection of the last tick."""

    income: Income = field(default_factory=Income)
    expenses: Expenses = field(default_factory=Expenses)

    @property
    def net(self) -> float:
        return self.income.total - self.expenses.total


@dataclass
class CityStats:
    """City-wide figures. Everything but the policy/sticky fields is
    recomputed from scratch every tick."""

    money: float = STARTING_MONEY
    population: int = 0
    happiness: int = BASE_HAPPINESS
    insecurity: int = 0
    corruption: int = 0
    pollution: float = 0.0
    power_capacity: int = 0
    power_demand: int = 0
    traffic_density: float = 0.0
    tick_count: int = 0
    tax_rate: float = DEFAULT_TAX_RATE
    kickback_revenue: float = 0.0
    active_event: str | None = None
    game_won: bool = False


@dataclass
class CityState:
    """The shared simulation state passed by reference into every operation."""

    tiles: dict[Coord, Tile] = field(default_factory=dict)
    fires: dict[Coord, int] = field(default_factory=dict)
    stats: CityStats = field(default_factory=CityStats)
    financials: FinancialReport = field(default_factory=FinancialReport)


@dataclass
class TickLedger:
    """Mutable accumulator shared by the systems of a single tick."""

    income: Income = field(default_factory=Income)
    expenses: Expenses = field(default_factory=Expenses)
    powered: frozenset[Coord] = frozenset()
    roads: frozenset[Coord] = frozenset()
    power_capacity: int = 0
    power_demand: int = 0
    power_sufficient: bool = True
    functioning: set[Coord] = field(default_factory=set)
    fire_stations: list[Coord] = field(default_factory=list)
    population: int = 0
    happiness_delta: int = 0
    happiness_penalty: int = 0
    pollution: float = 0.0
    kiosks: int = 0
    police: int = 0
    settlements: int = 0
    traffic_density: float = 0.0
    ignited: list[Coord] = field(default_factory=list)
    extinguished: list[Coord] = field(default_factory=list)
    spawned: Coord | None = None
    scheduled_event: str | None = None


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    random: _random.Random
    ledger: TickLedger


@dataclass(frozen=True)
class TickReport:
    """What one tick did, for UI notification and tests."""

    tick_number: int
    net_income: float
    financials: FinancialReport
    functioning: frozenset[Coord]
    ignited: tuple[Coord, ...] = ()
    extinguished: tuple[Coord, ...] = ()
    spawned_settlement: Coord | None = None
    scheduled_event: str | None = None


# --- Errors ---


class CityError(Exception):
    """Base class for recoverable, caller-facing simulation conditions."""


class InsufficientFunds(CityError):
    def __init__(self, required: float, available: float) -> None:
        self.required = required
        self.available = available
        super().__init__(f"Cannot afford {required:g} (treasury holds {available:g})")


class OutOfBounds(CityError):
    def __init__(self, coord: Coord) -> None:
        self.coord = coord
        super().__init__(f"{coord} is outside the city limits")


class TileOccupied(CityError):
    def __init__(self, coord: Coord) -> None:
        self.coord = coord
        super().__init__(f"{coord} is already occupied")


class InvalidEventChoice(CityError):
    """Resolving an event when none is active, or with an unknown choice."""


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, bad payload)."""


class CorruptSaveData(SnapshotError):
    """A persisted snapshot is missing fields or holds malformed values."""


System = Callable[[CityState, TickContext], None]
