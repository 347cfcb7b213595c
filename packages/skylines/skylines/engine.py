"""CityEngine - the live city instance, its pacing loop, and input entry points."""
from __future__ import annotations

import logging
import os
import random
import threading
import time
from typing import Any, Callable

from skylines import events, grid, persistence, policy, signals
from skylines.catalog import BuildingKind
from skylines.config import EngineConfig
from skylines.events import TenderChoice
from skylines.signals import SignalBus
from skylines.simulation import run_tick
from skylines.types import (
    CityError,
    CityState,
    CityStats,
    Coord,
    FinancialReport,
    SnapshotError,
    Tile,
    TickReport,
)

log = logging.getLogger(__name__)

_SNAPSHOT_VERSION = 1

Hook = Callable[["CityEngine"], None]


class CityEngine:
    """Owns the single live ``CityState`` and serializes access to it.

    Every tick and every player action holds one coarse lock for its whole
    duration, so a placement can never interleave with a tick. Signals are
    flushed after the lock is released.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        seed: int | None = None,
        state: CityState | None = None,
    ) -> None:
        self._config = config if config is not None else EngineConfig()
        if state is None:
            state = CityState(stats=CityStats(
                money=self._config.starting_money,
                tax_rate=self._config.tax_rate,
            ))
        self._state = state
        self._lock = threading.Lock()
        self._signals = SignalBus()
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big")
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def state(self) -> CityState:
        return self._state

    @property
    def stats(self) -> CityStats:
        return self._state.stats

    @property
    def financials(self) -> FinancialReport:
        return self._state.financials

    @property
    def fires(self) -> frozenset[Coord]:
        return frozenset(self._state.fires)

    @property
    def active_event(self) -> str | None:
        return self._state.stats.active_event

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def signals(self) -> SignalBus:
        return self._signals

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def request_stop(self) -> None:
        self._stop_requested = True

    # -- Ticking --

    def _publish_tick(self, report: TickReport) -> None:
        bus = self._signals
        for coord in report.extinguished:
            bus.publish(signals.FIRE_EXTINGUISHED, coord=coord)
        for coord in report.ignited:
            bus.publish(signals.FIRE_IGNITED, coord=coord)
        if report.spawned_settlement is not None:
            bus.publish(signals.SETTLEMENT_SPAWNED, coord=report.spawned_settlement)
        if report.scheduled_event is not None:
            bus.publish(signals.TENDER_OFFERED, event=report.scheduled_event)
        bus.publish(signals.TICK, tick=report.tick_number, net_income=report.net_income)

    def step(self) -> TickReport:
        """Run exactly one tick and return its report."""
        with self._lock:
            report = run_tick(self._state, self._rng)
            self._publish_tick(report)
        self._signals.flush()
        return report

    def run(self, n: int) -> list[TickReport]:
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self)

        reports: list[TickReport] = []
        for _ in range(n):
            reports.append(self.step())
            if self._stop_requested:
                break

        for hook in self._stop_hooks:
            hook(self)
        return reports

    def run_forever(self) -> None:
        """Tick every ``config.tick_interval`` seconds until stopped.

        No tick runs while a tender is waiting for the player's decision.
        """
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self)

        interval = self._config.tick_interval
        while not self._stop_requested:
            start = time.monotonic()
            if self.active_event is None:
                self.step()
            if self._stop_requested:
                break
            elapsed = time.monotonic() - start
            sleep_time = interval - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)

        for hook in self._stop_hooks:
            hook(self)

    # -- Player actions --

    def _rejected(self, signal_name: str, exc: CityError, **data: Any) -> None:
        log.warning("%s: %s", signal_name, exc)
        self._signals.publish(signal_name, reason=type(exc).__name__, message=str(exc), **data)

    def place(
        self, x: int, z: int, kind: BuildingKind | str, rotation: int = 0
    ) -> Tile:
        kind = BuildingKind(kind)
        try:
            with self._lock:
                was_won = self._state.stats.game_won
                try:
                    tile = grid.place(self._state, x, z, kind, rotation)
                except CityError as exc:
                    self._rejected(signals.PLACEMENT_REJECTED, exc, kind=kind, coord=(x, z))
                    raise
                self._signals.publish(signals.BUILDING_PLACED, kind=kind, coord=(x, z))
                if self._state.stats.game_won and not was_won:
                    self._signals.publish(signals.GAME_WON, tick=self._state.stats.tick_count)
            return tile
        finally:
            self._signals.flush()

    def remove(self, x: int, z: int) -> Tile | None:
        with self._lock:
            tile = grid.remove(self._state, x, z)
            if tile is not None:
                self._signals.publish(signals.BUILDING_REMOVED, kind=tile.kind, coord=tile.coord)
        self._signals.flush()
        return tile

    def set_tax_rate(self, rate: float) -> None:
        with self._lock:
            policy.set_tax_rate(self._state, rate)

    def resolve_tender(self, choice: TenderChoice | str) -> list[Tile]:
        try:
            with self._lock:
                try:
                    built = events.resolve_tender(self._state, choice)
                except CityError as exc:
                    self._rejected(
                        signals.TENDER_REJECTED, exc, choice=getattr(choice, "value", choice)
                    )
                    raise
                self._signals.publish(
                    signals.TENDER_RESOLVED,
                    choice=events.parse_choice(choice).value,
                    pillars=len(built),
                )
            return built
        finally:
            self._signals.flush()

    def score(self) -> int:
        return policy.city_score(self._state)

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "version": _SNAPSHOT_VERSION,
                "seed": self._seed,
                "rng_state": _serialize_rng_state(self._rng.getstate()),
                "city": persistence.to_dict(self._state),
            }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )
        state = persistence.from_dict(data.get("city"))
        seed = data.get("seed")
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise SnapshotError(f"Snapshot seed must be an integer, got {seed!r}")
        rng = random.Random()
        try:
            rng.setstate(_deserialize_rng_state(data["rng_state"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Snapshot has no usable RNG state: {exc!r}") from exc
        with self._lock:
            self._state = state
            self._seed = seed
            self._rng = rng


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    """Convert Random.getstate() tuple to JSON-compatible list.

    The state format (version, internalstate, gauss_next) is the
    CPython Mersenne Twister representation.
    """
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    """Convert JSON list back to Random.setstate() tuple."""
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
