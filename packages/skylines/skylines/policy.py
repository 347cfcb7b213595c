"""Player policy levers and the composite city score."""
from __future__ import annotations

import logging
import math

from skylines.types import CityState

log = logging.getLogger(__name__)

# Range offered by the budget slider. The model applies any value literally.
TAX_RATE_MIN = 0.5
TAX_RATE_MAX = 2.0


def set_tax_rate(state: CityState, rate: float) -> None:
    """Store *rate*; it takes effect on the next tick."""
    if not TAX_RATE_MIN <= rate <= TAX_RATE_MAX:
        log.warning("Tax rate %.2f is outside the usual %.1f-%.1f range", rate,
                    TAX_RATE_MIN, TAX_RATE_MAX)
    state.stats.tax_rate = float(rate)


def city_score(state: CityState) -> int:
    """Composite score used for the high-score board."""
    stats = state.stats
    return math.floor(stats.money + stats.population * 100 + stats.happiness * 500)
