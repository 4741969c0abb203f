"""REST endpoints for one-shot predictions.

Paths:
    POST /api/predict/tire
    POST /api/predict/engine
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from fleet_predict.api.validation import parse_body, require_fields
from fleet_predict.domain.engine import EngineFailureInput
from fleet_predict.domain.errors import InsufficientDataError, ValidationError
from fleet_predict.domain.tire import TireBurstInput
from fleet_predict.engine.failure_prediction import predict_engine_failure
from fleet_predict.tire.burst_prediction import predict_tire_burst

logger = logging.getLogger(__name__)

TIRE_REQUIRED = ("materialProperties", "temperatureData", "speedDurationMatrix")
ENGINE_REQUIRED = ("metalFatigueData", "oilDegradationData", "thermalStressData")


def error_response(status_code: int, message: str, detail: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"error": message}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def create_predict_router() -> APIRouter:
    """Factory for the stateless prediction endpoints."""

    router = APIRouter(prefix="/api/predict", tags=["prediction"])

    @router.post("/tire")
    async def predict_tire(raw: Any = Body(...)) -> Any:
        try:
            require_fields(raw, TIRE_REQUIRED, "input parameters")
            data = parse_body(TireBurstInput, raw, "tire input")
            prediction = predict_tire_burst(data)
        except ValidationError as exc:
            return error_response(400, str(exc), exc.missing)
        except InsufficientDataError as exc:
            return error_response(422, str(exc))
        except Exception:
            logger.exception("Error processing tire burst prediction")
            return error_response(500, "Failed to process prediction")
        return prediction.model_dump(mode="json", by_alias=True)

    @router.post("/engine")
    async def predict_engine(raw: Any = Body(...)) -> Any:
        try:
            require_fields(raw, ENGINE_REQUIRED, "input parameters")
            data = parse_body(EngineFailureInput, raw, "engine input")
            prediction = predict_engine_failure(data)
        except ValidationError as exc:
            return error_response(400, str(exc), exc.missing)
        except Exception:
            logger.exception("Error processing engine failure prediction")
            return error_response(500, "Failed to process prediction")
        return prediction.model_dump(mode="json", by_alias=True)

    return router
