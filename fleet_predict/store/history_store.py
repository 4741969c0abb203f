"""Per-vehicle telemetry history with bounded, FIFO-evicting retention.

Design notes:
    - The store is injected into the TelemetryProcessor; there is no
      process-wide history map.
    - An asyncio.Lock guards all mutations so concurrent submissions never
      corrupt a vehicle's buffer.
    - Each vehicle keeps at most ``capacity`` records.  When full, the
      oldest record is evicted first.
    - The store does NOT interpret records.  Fleet analytics live in the
      processor.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Protocol

from fleet_predict.domain.telemetry import TelemetryRecord

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000


class VehicleHistoryStore(Protocol):
    """Protocol for retained telemetry, keyed by vehicle."""

    async def append(self, record: TelemetryRecord) -> int:
        """Retain *record*; return the vehicle's history length afterwards."""
        ...

    async def history(self, vehicle_id: str) -> list[TelemetryRecord]:
        ...

    async def latest_records(self) -> dict[str, TelemetryRecord]:
        """Most recently retained record per vehicle, in first-seen order."""
        ...

    async def vehicle_count(self) -> int:
        ...


class InMemoryHistoryStore:
    """Async-safe, in-memory ring buffer per vehicle.

    Args:
        capacity: Maximum records retained per vehicle.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._lock = asyncio.Lock()
        self._history: dict[str, deque[TelemetryRecord]] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    # ── Public API ───────────────────────────────────────────────────────

    async def append(self, record: TelemetryRecord) -> int:
        async with self._lock:
            buffer = self._history.get(record.vehicle_id)
            if buffer is None:
                buffer = deque(maxlen=self._capacity)
                self._history[record.vehicle_id] = buffer
                logger.info("Tracking history for vehicle %s", record.vehicle_id)
            elif len(buffer) == self._capacity:
                logger.debug(
                    "History for vehicle %s full (%d); evicting oldest record",
                    record.vehicle_id,
                    self._capacity,
                )
            buffer.append(record)
            return len(buffer)

    async def history(self, vehicle_id: str) -> list[TelemetryRecord]:
        """Retained records for *vehicle_id*, oldest first.  Empty if unknown."""
        async with self._lock:
            return list(self._history.get(vehicle_id, ()))

    async def latest_records(self) -> dict[str, TelemetryRecord]:
        async with self._lock:
            return {
                vehicle_id: buffer[-1]
                for vehicle_id, buffer in self._history.items()
                if buffer
            }

    async def vehicle_count(self) -> int:
        async with self._lock:
            return len(self._history)

    async def clear(self) -> None:
        async with self._lock:
            self._history.clear()
