"""TelemetryPipeline — processor, then alerts, then a background OEM report.

This is the orchestration that sits behind the telemetry route.  The
prediction result is returned as soon as it exists; the OEM report runs
as a background task and its outcome never affects the caller.
"""

from __future__ import annotations

import asyncio
import logging

from fleet_predict.core.telemetry_processor import TelemetryProcessor
from fleet_predict.domain.telemetry import TelemetryRecord, TelemetryResult
from fleet_predict.integrations.alerts import AlertSystem, build_alerts
from fleet_predict.integrations.oem import OEMReporter
from fleet_predict.models.diagnostic import DiagnosticPayload

logger = logging.getLogger(__name__)


class TelemetryPipeline:
    def __init__(
        self,
        processor: TelemetryProcessor,
        alert_system: AlertSystem,
        oem_reporter: OEMReporter,
    ) -> None:
        self._processor = processor
        self._alerts = alert_system
        self._oem = oem_reporter
        self._pending: set[asyncio.Task[bool]] = set()

    @property
    def processor(self) -> TelemetryProcessor:
        return self._processor

    async def submit(self, record: TelemetryRecord) -> TelemetryResult:
        """Process *record*, raise alerts, and schedule the OEM report."""
        result = await self._processor.process_telemetry(record)

        for alert in build_alerts(result, self._alerts.threshold):
            self._alerts.trigger_alert(alert)

        payload = DiagnosticPayload(
            vehicle_id=record.vehicle_id,
            timestamp=record.timestamp,
            tire_prediction=result.tire_prediction,
            engine_prediction=result.engine_prediction,
        )
        task = asyncio.create_task(self._oem.send_diagnostic(payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        return result

    async def wait_pending(self) -> list[bool]:
        """Await every in-flight OEM report (shutdown, tests)."""
        if not self._pending:
            return []
        return list(await asyncio.gather(*self._pending))
