"""REST endpoints for telemetry submission and fleet insights.

Paths:
    POST /api/telemetry   process one record, alert, report to the OEM
    GET  /api/telemetry   fleet-wide insights
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body

from fleet_predict.api.predict import error_response
from fleet_predict.api.validation import parse_body, require_fields
from fleet_predict.domain.errors import InsufficientDataError, ValidationError
from fleet_predict.domain.telemetry import TelemetryRecord
from fleet_predict.services.telemetry_pipeline import TelemetryPipeline

logger = logging.getLogger(__name__)

TELEMETRY_REQUIRED = ("vehicleId", "timestamp", "tireData", "engineData")


def create_telemetry_router(pipeline: TelemetryPipeline) -> APIRouter:
    """Factory that wires the telemetry endpoints to a concrete pipeline."""

    router = APIRouter(prefix="/api", tags=["telemetry"])

    @router.post("/telemetry")
    async def submit_telemetry(raw: Any = Body(...)) -> Any:
        try:
            require_fields(raw, TELEMETRY_REQUIRED, "telemetry data")
            record = parse_body(TelemetryRecord, raw, "telemetry data")
            result = await pipeline.submit(record)
        except ValidationError as exc:
            return error_response(400, str(exc), exc.missing)
        except InsufficientDataError as exc:
            return error_response(422, str(exc))
        except Exception:
            logger.exception("Error processing telemetry data")
            return error_response(500, "Failed to process telemetry data")
        return result.model_dump(mode="json", by_alias=True)

    @router.get("/telemetry")
    async def fleet_insights() -> Any:
        try:
            insights = await pipeline.processor.get_fleet_insights()
        except Exception:
            logger.exception("Error retrieving fleet insights")
            return error_response(500, "Failed to retrieve fleet insights")
        return insights.model_dump(mode="json", by_alias=True)

    return router
