"""Simulation constants and the host engine configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

# Grid bounds: indices in [GRID_MIN, GRID_MAX) on both axes.
GRID_MIN = -10
GRID_MAX = 10

STARTING_MONEY = 50000
BASE_HAPPINESS = 50
HAPPINESS_MIN = 0
HAPPINESS_MAX = 100
DEFAULT_TAX_RATE = 1.0

# Service penalties for populated buildings.
NO_ROAD_PENALTY = 2
NO_POWER_PENALTY = 5
BAR_NOISE_PENALTY = 1
BLACKOUT_PENALTY = 20

# Tax bands. Both high bands apply together at extreme rates.
LOW_TAX_THRESHOLD = 0.8
LOW_TAX_BONUS = 5
HIGH_TAX_THRESHOLD = 1.2
HIGH_TAX_PENALTY = 10
EXTORTION_TAX_THRESHOLD = 1.8
EXTORTION_TAX_PENALTY = 15

TRAFFIC_CAPACITY_PER_ROAD = 15
TRAFFIC_PENALTY_FACTOR = 20
TRAFFIC_PENALTY_CAP = 30

POLLUTION_THRESHOLD = 50

INSECURITY_PER_RESIDENTS = 10  # one point per this many residents
SETTLEMENT_INSECURITY = 5
SETTLEMENT_HAPPINESS_PENALTY = 5
POLICE_INSECURITY_REDUCTION = 5
KICKBACK_CORRUPTION_DIVISOR = 50

EVICTION_HAPPINESS_PENALTY = 20
EVICTION_CORRUPTION = 10

FIRE_SPREAD_THRESHOLD = 2
FIRE_SUPPRESSION_RADIUS = 3
FIRE_EMERGENCY_COST = 1000
FIRE_HAPPINESS_PENALTY = 2
IGNITION_INTERVAL = 5
IGNITION_CHANCE = 0.05

SETTLEMENT_GROWTH_INTERVAL = 10
SETTLEMENT_INSECURITY_THRESHOLD = 30

EVENT_INTERVAL = 24
TENDER_STANDARD_COST = 10000
TENDER_STANDARD_HAPPINESS = 5
TENDER_BRIBE_COST = 2000
TENDER_BRIBE_CORRUPTION = 10
TENDER_BRIBE_KICKBACK = 500

TICK_INTERVAL = 5.0  # real-time seconds per simulated day


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for the host engine.

    Attributes:
        tick_interval: Real-time seconds between ticks in ``run_forever``.
        starting_money: Treasury of a fresh city.
        tax_rate: Initial tax rate of a fresh city.
    """

    tick_interval: float = TICK_INTERVAL
    starting_money: float = STARTING_MONEY
    tax_rate: float = DEFAULT_TAX_RATE

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
