"""Basics -- lay out a small neighbourhood and watch the treasury.

Demonstrates:
- Placing buildings through CityEngine and reacting to signals
- Running a fixed number of simulated days
- Reading the per-day financial breakdown
- Deciding on the expressway tender when it is offered

Run: python packages/skylines/examples/basics.py
"""
from __future__ import annotations

import logging

from skylines import CityEngine, InsufficientFunds, TenderChoice


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("=== Nairobi Skylines: basics ===\n")

    engine = CityEngine(seed=2024)
    engine.signals.subscribe(
        "tender_offered", lambda name, data: print(f"  >> {data['event']} on the table"),
    )
    engine.signals.subscribe(
        "fire_ignited", lambda name, data: print(f"  !! fire at {data['coord']}"),
    )

    engine.place(0, 0, "power_plant")
    for x in range(-3, 4):
        engine.place(x, 1, "road")
    engine.place(-2, 2, "runda_house")
    engine.place(-1, 2, "runda_house")
    engine.place(1, 2, "kiosk")
    engine.place(2, 2, "fire_station")
    engine.place(3, 0, "acacia")

    try:
        engine.place(5, 5, "nbk_tower")
    except InsufficientFunds as exc:
        print(f"NBK Tower will have to wait: {exc}\n")

    for report in engine.run(30):
        if report.tick_number % 5:
            continue
        stats = engine.stats
        print(
            f"Day {report.tick_number:>2}: money {stats.money:>9.0f}  "
            f"net {report.net_income:>+7.1f}  pop {stats.population:>3}  "
            f"happiness {stats.happiness:>3}"
        )
        if engine.active_event is not None:
            try:
                engine.resolve_tender(TenderChoice.STANDARD)
            except InsufficientFunds:
                engine.resolve_tender(TenderChoice.BRIBE if stats.money >= 2000
                                      else TenderChoice.REJECT)

    fin = engine.financials
    print("\nLast day breakdown:")
    print(f"  residential  {fin.income.residential:>8.1f}")
    print(f"  commercial   {fin.income.commercial:>8.1f}")
    print(f"  tolls        {fin.income.tolls:>8.1f}")
    print(f"  upkeep       {fin.expenses.infrastructure + fin.expenses.services:>8.1f}")
    print(f"  emergency    {fin.expenses.emergency:>8.1f}")
    print(f"\nScore: {engine.score()}")


if __name__ == "__main__":
    main()
