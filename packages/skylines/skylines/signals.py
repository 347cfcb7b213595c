"""City notifications: the signal names the engine emits and the bus that queues them.

The engine publishes what happened during a tick or a player action; UI and
rendering layers subscribe. Nothing is delivered until ``flush``, which the
engine calls only after releasing its lock, so handlers never observe a
half-applied change and may call back into the engine.
"""
from __future__ import annotations

from collections import deque
from typing import Any, Callable

Handler = Callable[[str, dict[str, Any]], None]

TICK = "tick"
FIRE_IGNITED = "fire_ignited"
FIRE_EXTINGUISHED = "fire_extinguished"
SETTLEMENT_SPAWNED = "settlement_spawned"
TENDER_OFFERED = "tender_offered"
TENDER_RESOLVED = "tender_resolved"
TENDER_REJECTED = "tender_rejected"
BUILDING_PLACED = "building_placed"
BUILDING_REMOVED = "building_removed"
PLACEMENT_REJECTED = "placement_rejected"
GAME_WON = "game_won"

ALL_SIGNALS = frozenset({
    TICK,
    FIRE_IGNITED,
    FIRE_EXTINGUISHED,
    SETTLEMENT_SPAWNED,
    TENDER_OFFERED,
    TENDER_RESOLVED,
    TENDER_REJECTED,
    BUILDING_PLACED,
    BUILDING_REMOVED,
    PLACEMENT_REJECTED,
    GAME_WON,
})


class SignalBus:
    """Queue of city notifications delivered in publish order on ``flush``.

    Only names in ``ALL_SIGNALS`` are accepted. A misspelled subscription
    raises ``ValueError`` instead of silently never firing.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {name: [] for name in ALL_SIGNALS}
        self._queue: deque[tuple[str, dict[str, Any]]] = deque()

    @staticmethod
    def _check(signal_name: str) -> None:
        if signal_name not in ALL_SIGNALS:
            raise ValueError(f"Unknown city signal {signal_name!r}")

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._check(signal_name)
        self._subscribers[signal_name].append(handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        """Remove one registration of *handler*; a no-op if it has none."""
        self._check(signal_name)
        handlers = self._subscribers[signal_name]
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, signal_name: str, **data: Any) -> None:
        self._check(signal_name)
        self._queue.append((signal_name, data))

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """Deliver everything queued so far and return the number of handler calls.

        Signals published by handlers wait for the next flush.
        """
        batch, self._queue = self._queue, deque()
        delivered = 0
        for signal_name, data in batch:
            for handler in list(self._subscribers[signal_name]):
                handler(signal_name, data)
                delivered += 1
        return delivered

    def clear(self) -> None:
        """Drop queued signals without delivering them."""
        self._queue.clear()
