"""Snapshot and restore -- save a city, rewind, and replay.

Demonstrates:
- Taking an engine snapshot mid-game (city plus RNG state)
- JSON round-trip of the snapshot
- Proving that a restored city replays fires and settlements identically
- Rejecting a damaged save file

Run: python packages/skylines/examples/snapshot.py
"""
from __future__ import annotations

import json
import logging

from skylines import CityEngine, CorruptSaveData, loads


def build_city(engine: CityEngine) -> None:
    engine.place(0, 0, "power_plant")
    for x in range(8):
        engine.place(x, 1, "road")
    for x in range(1, 8):
        engine.place(x, 2, "runda_house")
    engine.place(1, 0, "bar")
    engine.place(2, 0, "kiosk")


def summary(engine: CityEngine) -> tuple:
    stats = engine.stats
    return (stats.tick_count, round(stats.money, 2), stats.happiness, sorted(engine.fires))


def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    print("=== Snapshot & Restore ===\n")

    engine = CityEngine(seed=42)
    build_city(engine)

    engine.run(10)
    snap = engine.snapshot()
    print(f"After 10 days (snapshot taken): {summary(engine)}")

    engine.run(40)
    result_a = summary(engine)
    print(f"After 50 days (continued):      {result_a}")

    snap_json = json.dumps(snap)
    print(f"\nSnapshot JSON size: {len(snap_json)} bytes")

    replay = CityEngine()
    replay.restore(json.loads(snap_json))
    replay.run(40)
    result_b = summary(replay)
    print(f"After 50 days (replayed):       {result_b}")

    print()
    assert result_a == result_b, f"Replay mismatch: {result_a} != {result_b}"
    print("Replay matches first run:  PASS")

    try:
        loads('{"version": 1, "money": "plenty"}')
    except CorruptSaveData as exc:
        print(f"Damaged save rejected:    {exc}")


if __name__ == "__main__":
    main()
