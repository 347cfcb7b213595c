"""Building catalog: kinds, their static coefficients, and kind predicates."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class BuildingKind(Enum):
    """Every kind of thing a tile can hold."""

    RUNDA_HOUSE = "runda_house"
    KIOSK = "kiosk"
    APARTMENT = "apartment"
    ACACIA = "acacia"
    ROAD = "road"
    KICC = "kicc"
    TIMES_TOWER = "times_tower"
    JAMIA_MOSQUE = "jamia_mosque"
    UHURU_PARK = "uhuru_park"
    POLICE_STATION = "police_station"
    FIRE_STATION = "fire_station"
    BAR = "bar"
    POWER_PLANT = "power_plant"
    DUMPSITE = "dumpsite"
    INFORMAL_SETTLEMENT = "informal_settlement"
    NBK_TOWER = "nbk_tower"
    EXPRESSWAY_PILLAR = "expressway_pillar"
    FACTORY = "factory"
    MALL = "mall"
    PLANTATION = "plantation"
    OFFICE = "office"
    RESERVED = "reserved"


@dataclass(frozen=True)
class BuildingConfig:
    """Immutable per-kind coefficients.

    Attributes:
        cost: Placement price.
        label: Display name.
        population: Residents housed.
        happiness: Happiness delta while functioning.
        revenue: Untaxed income per tick while functioning.
        upkeep: Maintenance per tick, always paid.
        pollution: Signed pollution delta while functioning.
        power_consumption: Power units demanded.
        power_production: Power units supplied.
        insecurity: Informational insecurity contribution.
        width: Footprint cells along x at rotation 0.
        depth: Footprint cells along z at rotation 0.
        description: Tooltip text.
    """

    cost: int
    label: str
    population: int = 0
    happiness: int = 0
    revenue: int = 0
    upkeep: int = 0
    pollution: float = 0.0
    power_consumption: int = 0
    power_production: int = 0
    insecurity: int = 0
    width: int = 1
    depth: int = 1
    description: str = ""

    @property
    def requires_power(self) -> bool:
        return self.power_consumption > 0


K = BuildingKind

CATALOG: Mapping[BuildingKind, BuildingConfig] = MappingProxyType({
    K.RUNDA_HOUSE: BuildingConfig(
        cost=5000, label="Runda House", population=5, revenue=50,
        power_consumption=1, pollution=0.1,
        description="Low density housing. Needs 1 Power.",
    ),
    K.KIOSK: BuildingConfig(
        cost=2000, label="Kiosk", revenue=25, pollution=0.2,
        description="Small business. Adds +1 Corruption.",
    ),
    K.APARTMENT: BuildingConfig(
        cost=20000, label="Apartment", population=50, revenue=200,
        power_consumption=5, pollution=1.0,
        description="High density. Needs 5 Power.",
    ),
    K.ACACIA: BuildingConfig(
        cost=1000, label="Acacia Tree", happiness=2, pollution=-0.5,
        description="Native vegetation. Cleans air.",
    ),
    K.ROAD: BuildingConfig(
        cost=500, label="Road", upkeep=2,
        description="Basic infrastructure. Costs upkeep.",
    ),
    K.KICC: BuildingConfig(
        cost=100000, label="KICC", population=100, happiness=10,
        upkeep=500, revenue=200,
        description="Iconic conference center. High maintenance.",
    ),
    K.TIMES_TOWER: BuildingConfig(
        cost=80000, label="Times Tower", population=150, revenue=1000,
        power_consumption=20,
        description="Corporate headquarters. Huge tax generator.",
    ),
    K.JAMIA_MOSQUE: BuildingConfig(
        cost=40000, label="Jamia Mosque", happiness=15, upkeep=100,
        description="Cultural landmark.",
    ),
    K.UHURU_PARK: BuildingConfig(
        cost=10000, label="Uhuru Park", happiness=20, upkeep=200,
        pollution=-2.0,
        description="The green lung of the city.",
    ),
    K.POLICE_STATION: BuildingConfig(
        cost=15000, label="Police Station", upkeep=500,
        description="Reduces Insecurity by 5.",
    ),
    K.FIRE_STATION: BuildingConfig(
        cost=12000, label="Fire Station", upkeep=300,
        description="Extinguishes nearby fires (Cost: 1000 KES).",
    ),
    K.BAR: BuildingConfig(
        cost=5000, label="Club/Bar", revenue=100, pollution=0.5,
        description="High income. Noise reduces happiness.",
    ),
    K.POWER_PLANT: BuildingConfig(
        cost=15000, label="Geothermal Plant", upkeep=400,
        power_production=50, pollution=5.0,
        description="Generates 50 Power. Pollutes.",
    ),
    K.DUMPSITE: BuildingConfig(
        cost=8000, label="Dandora Dump", upkeep=200, pollution=-15.0,
        description="Manages waste. Reduces overall pollution.",
    ),
    K.INFORMAL_SETTLEMENT: BuildingConfig(
        cost=0, label="Squatter Camp", insecurity=5, happiness=-5,
        description="Unplanned settlement. Hard to remove.",
    ),
    K.NBK_TOWER: BuildingConfig(
        cost=500000, label="NBK Tower", revenue=5000,
        power_consumption=100, happiness=20, width=2, depth=2,
        description="The ultimate status symbol. Wins the game. Needs 2x2 space.",
    ),
    K.EXPRESSWAY_PILLAR: BuildingConfig(
        cost=0, label="Expressway", revenue=25,
        description="Elevated toll highway. Carries traffic and power.",
    ),
    K.FACTORY: BuildingConfig(
        cost=25000, label="Industrial Area Factory", revenue=300, upkeep=50,
        power_consumption=10, pollution=8.0,
        description="Industrial jobs. Needs 10 Power. Heavy polluter.",
    ),
    K.MALL: BuildingConfig(
        cost=30000, label="Shopping Mall", revenue=400, upkeep=100,
        happiness=5, power_consumption=8, pollution=1.0, width=2, depth=1,
        description="Retail hub. Needs 8 Power and 2x1 space.",
    ),
    K.PLANTATION: BuildingConfig(
        cost=3000, label="Tea Plantation", revenue=40, pollution=-1.0,
        description="Agricultural land. Works without roads.",
    ),
    K.OFFICE: BuildingConfig(
        cost=15000, label="Office Block", revenue=250,
        power_consumption=4, pollution=0.3,
        description="Commercial offices. Needs 4 Power.",
    ),
    K.RESERVED: BuildingConfig(
        cost=0, label="Reserved", description="Occupied space",
    ),
})

del K

_ROAD_TYPES = frozenset({BuildingKind.ROAD, BuildingKind.EXPRESSWAY_PILLAR})
_RESIDENTIAL = frozenset({BuildingKind.RUNDA_HOUSE, BuildingKind.APARTMENT})
_ROAD_EXEMPT = frozenset({
    BuildingKind.ACACIA,
    BuildingKind.PLANTATION,
    BuildingKind.INFORMAL_SETTLEMENT,
    BuildingKind.ROAD,
})

# Income categories used by the financial report.
RESIDENTIAL = "residential"
COMMERCIAL = "commercial"
INDUSTRIAL = "industrial"
AGRICULTURAL = "agricultural"
TOLLS = "tolls"

_INCOME_CATEGORY = {
    BuildingKind.RUNDA_HOUSE: RESIDENTIAL,
    BuildingKind.APARTMENT: RESIDENTIAL,
    BuildingKind.FACTORY: INDUSTRIAL,
    BuildingKind.PLANTATION: AGRICULTURAL,
    BuildingKind.EXPRESSWAY_PILLAR: TOLLS,
}


def config_for(kind: BuildingKind) -> BuildingConfig:
    """Look up a kind's config. Raises KeyError for unknown kinds."""
    return CATALOG[kind]


def footprint_size(kind: BuildingKind, rotation: int) -> tuple[int, int]:
    """Return (width, depth) of *kind* at *rotation*; odd rotations swap axes."""
    cfg = CATALOG[kind]
    if rotation % 2:
        return cfg.depth, cfg.width
    return cfg.width, cfg.depth


def is_road_type(kind: BuildingKind) -> bool:
    return kind in _ROAD_TYPES


def is_residential(kind: BuildingKind) -> bool:
    return kind in _RESIDENTIAL


def needs_road(kind: BuildingKind) -> bool:
    return kind not in _ROAD_EXEMPT


def income_category(kind: BuildingKind) -> str:
    """Financial report bucket for a revenue-bearing kind."""
    return _INCOME_CATEGORY.get(kind, COMMERCIAL)


def buildable_kinds() -> list[BuildingKind]:
    """Kinds a player may place directly (everything but the filler marker)."""
    return [k for k in BuildingKind if k is not BuildingKind.RESERVED]
