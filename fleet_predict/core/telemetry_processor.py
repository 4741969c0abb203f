"""TelemetryProcessor — per-vehicle prediction orchestration and fleet analytics.

Per call:
    1. Enqueue the record on a FIFO processing queue.  If no drain is in
       progress, mark busy and drain in fixed-size batches, each batch
       awaiting a simulated latency.  The queue models backpressure only;
       it never gates the prediction returned to the caller.
    2. Predict tire burst and engine failure for the record itself.
    3. Retain the record in the injected history store (adaptive learning).
    4. Measure wall-clock processing time; past the threshold, warn.

Concurrency:
    The queue and busy flag are guarded by one asyncio.Lock so the
    check-then-act on "busy" cannot race.  The history store carries its
    own lock.  Sleep, timer and predictors are injected so tests run with
    no real delay and with deterministic outputs.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter, deque
from dataclasses import dataclass
from typing import Awaitable, Callable

from fleet_predict.core.features import mean
from fleet_predict.domain.engine import EngineFailureInput, EngineFailureOutput
from fleet_predict.domain.telemetry import FleetInsights, TelemetryRecord, TelemetryResult
from fleet_predict.domain.tire import TireBurstInput, TireBurstOutput
from fleet_predict.engine.failure_prediction import predict_engine_failure
from fleet_predict.foundation.clock import monotonic_ms
from fleet_predict.store.history_store import InMemoryHistoryStore, VehicleHistoryStore
from fleet_predict.tire.burst_prediction import predict_tire_burst

logger = logging.getLogger(__name__)

TirePredictor = Callable[[TireBurstInput], TireBurstOutput]
EnginePredictor = Callable[[EngineFailureInput], EngineFailureOutput]
SleepFn = Callable[[float], Awaitable[None]]
BatchObserver = Callable[[list[TelemetryRecord]], None]


@dataclass(frozen=True)
class ProcessorConfig:
    """Tunables for the processor.  Defaults mirror the production settings."""

    latency_threshold_ms: float = 200.0
    adaptive_learning_enabled: bool = True
    batch_size: int = 10
    batch_delay_ms: float = 50.0
    issue_priority_cutoff: int = 7
    top_issues: int = 5


class TelemetryProcessor:
    """Runs predictions per telemetry record and aggregates them fleet-wide.

    Args:
        store: History store; defaults to a fresh in-memory store.
        config: Processor tunables.
        tire_predictor: Replaces predict_tire_burst (test doubles).
        engine_predictor: Replaces predict_engine_failure (test doubles).
        sleep: Async sleep used for simulated batch latency.
        timer: Millisecond clock used to measure processing time.
        on_batch: Called with each drained batch, in FIFO order.
    """

    def __init__(
        self,
        store: VehicleHistoryStore | None = None,
        config: ProcessorConfig | None = None,
        tire_predictor: TirePredictor = predict_tire_burst,
        engine_predictor: EnginePredictor = predict_engine_failure,
        sleep: SleepFn = asyncio.sleep,
        timer: Callable[[], float] = monotonic_ms,
        on_batch: BatchObserver | None = None,
    ) -> None:
        self._config = config or ProcessorConfig()
        if self._config.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._store: VehicleHistoryStore = store if store is not None else InMemoryHistoryStore()
        self._predict_tire = tire_predictor
        self._predict_engine = engine_predictor
        self._sleep = sleep
        self._timer = timer
        self._on_batch = on_batch

        self._lock = asyncio.Lock()
        self._queue: deque[TelemetryRecord] = deque()
        self._busy = False
        self._batches_drained = 0

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def store(self) -> VehicleHistoryStore:
        return self._store

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def batches_drained(self) -> int:
        return self._batches_drained

    async def process_telemetry(self, record: TelemetryRecord) -> TelemetryResult:
        """Predict for *record*, retain it, and report how long that took.

        Raises:
            InsufficientDataError: If the tire series cannot be scored.
                Such a record is not retained.
        """
        start = self._timer()

        async with self._lock:
            self._queue.append(record)
            should_drain = not self._busy
            if should_drain:
                self._busy = True
        if should_drain:
            await self._drain_queue()

        tire_prediction = self._predict_tire(record.tire_data)
        engine_prediction = self._predict_engine(record.engine_data)

        if self._config.adaptive_learning_enabled:
            await self._store.append(record)

        elapsed = self._timer() - start
        exceeded = elapsed > self._config.latency_threshold_ms
        if exceeded:
            logger.warning(
                "Telemetry processing exceeded latency threshold: %.2fms (threshold %.0fms, vehicle %s)",
                elapsed,
                self._config.latency_threshold_ms,
                record.vehicle_id,
            )

        return TelemetryResult(
            tire_prediction=tire_prediction,
            engine_prediction=engine_prediction,
            processing_time_ms=max(elapsed, 0.0),
            latency_exceeded=exceeded,
        )

    async def get_fleet_insights(self) -> FleetInsights:
        """Recompute fleet aggregates from the latest record per vehicle.

        Nothing is cached; every call re-runs the predictors.
        """
        if not self._config.adaptive_learning_enabled:
            return FleetInsights()

        latest = await self._store.latest_records()
        if not latest:
            return FleetInsights()

        burst_probabilities: list[float] = []
        remaining_hours: list[float] = []
        issue_counter: Counter[str] = Counter()

        for record in latest.values():
            tire = self._predict_tire(record.tire_data)
            engine = self._predict_engine(record.engine_data)
            burst_probabilities.append(tire.burst_probability)
            remaining_hours.append(engine.remaining_useful_life.hours)
            for item in engine.maintenance_priorities:
                if item.priority >= self._config.issue_priority_cutoff:
                    issue_counter[item.component] += 1

        # Counter preserves first-seen order; sorted() is stable on ties
        ranked = sorted(issue_counter.items(), key=lambda kv: kv[1], reverse=True)
        common_issues = [
            f"{component} ({count} vehicles)"
            for component, count in ranked[: self._config.top_issues]
        ]

        return FleetInsights(
            average_tire_burst_probability=mean(burst_probabilities),
            average_engine_remaining_life=mean(remaining_hours),
            common_maintenance_issues=common_issues,
            vehicle_count=len(latest),
        )

    # ── Internals ────────────────────────────────────────────────────────

    async def _drain_queue(self) -> None:
        """Drain the queue batch by batch.  Only the caller that set busy runs this."""
        try:
            while True:
                async with self._lock:
                    if not self._queue:
                        self._busy = False
                        return
                    size = min(self._config.batch_size, len(self._queue))
                    batch = [self._queue.popleft() for _ in range(size)]

                delay = self._config.batch_delay_ms / 1000.0
                await asyncio.gather(*(self._sleep(delay) for _ in batch))
                self._batches_drained += 1
                logger.debug(
                    "Drained batch %d (%d records): %s",
                    self._batches_drained,
                    len(batch),
                    [r.vehicle_id for r in batch],
                )
                if self._on_batch is not None:
                    self._on_batch(batch)
        except BaseException:
            async with self._lock:
                self._busy = False
            raise
