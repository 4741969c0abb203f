"""fleet-predict — tire-burst and engine-failure prediction service.

This is the application entry point.  It wires the history store,
TelemetryProcessor, alert sink, OEM reporter and HTTP routes together.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from fleet_predict.api.predict import create_predict_router
from fleet_predict.api.telemetry import create_telemetry_router
from fleet_predict.config import settings
from fleet_predict.core.telemetry_processor import ProcessorConfig, TelemetryProcessor
from fleet_predict.integrations.alerts import AlertConfig, AlertSystem
from fleet_predict.integrations.oem import OEMConfig, OEMReporter
from fleet_predict.services.telemetry_pipeline import TelemetryPipeline
from fleet_predict.store.history_store import InMemoryHistoryStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── State ────────────────────────────────────────────────────────────────────

store = InMemoryHistoryStore(capacity=settings.history_capacity)

processor = TelemetryProcessor(
    store=store,
    config=ProcessorConfig(
        latency_threshold_ms=settings.telemetry_latency_threshold_ms,
        adaptive_learning_enabled=settings.adaptive_learning_enabled,
        batch_size=settings.queue_batch_size,
        batch_delay_ms=settings.queue_batch_delay_ms,
        issue_priority_cutoff=settings.fleet_issue_priority_cutoff,
        top_issues=settings.fleet_top_issues,
    ),
)

# ── Integrations ─────────────────────────────────────────────────────────────

alert_system = AlertSystem(
    AlertConfig(
        visual=settings.alert_visual,
        audio=settings.alert_audio,
        haptic=settings.alert_haptic,
        threshold=settings.alert_threshold,
        history_size=settings.alert_history_size,
    )
)

oem_reporter = OEMReporter(
    OEMConfig(
        protocol=settings.oem_protocol,
        version=settings.oem_version,
        endpoint=settings.oem_endpoint,
        simulated_latency_ms=settings.oem_simulated_latency_ms,
    )
)

pipeline = TelemetryPipeline(processor, alert_system, oem_reporter)

# ── Lifespan ─────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    # In-flight OEM reports must finish before the event loop closes
    await pipeline.wait_pending()


# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Tire-burst and engine-failure risk scoring from vehicle telemetry",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_predict_router())
app.include_router(create_telemetry_router(pipeline))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "tracked_vehicles": await store.vehicle_count(),
        "queue_busy": processor.is_busy,
        "batches_drained": processor.batches_drained,
        "alerts_fired": len(alert_system.recent_alerts),
        "oem_reports_sent": oem_reporter.sent_count,
        "oem_reports_failed": oem_reporter.failed_count,
    }

