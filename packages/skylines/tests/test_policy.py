"""Tests for tax policy and city score."""
from __future__ import annotations

import logging
import random

from skylines.policy import city_score, set_tax_rate
from skylines.simulation import run_tick
from skylines.types import CityState, CityStats


def test_set_tax_rate_stores_value():
    state = CityState()
    set_tax_rate(state, 1.5)
    assert state.stats.tax_rate == 1.5


def test_out_of_range_rate_is_applied_with_warning(caplog):
    state = CityState()
    with caplog.at_level(logging.WARNING, logger="skylines.policy"):
        set_tax_rate(state, 3.0)
    assert state.stats.tax_rate == 3.0
    assert "outside" in caplog.text


def test_in_range_rate_does_not_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="skylines.policy"):
        set_tax_rate(CityState(), 0.5)
    assert caplog.records == []


def test_new_rate_takes_effect_next_tick():
    state = CityState(stats=CityStats(tick_count=1))
    set_tax_rate(state, 1.9)
    run_tick(state, random.Random(0))
    assert state.stats.happiness == 25


def test_city_score():
    assert city_score(CityState()) == 50000 + 50 * 500
    stats = CityStats(money=1000.5, population=10, happiness=50)
    assert city_score(CityState(stats=stats)) == 27000
