"""Pydantic model for diagnostic reports sent to the OEM."""

from __future__ import annotations

from pydantic import Field

from fleet_predict.domain.engine import EngineFailureOutput
from fleet_predict.domain.readings import Record
from fleet_predict.domain.tire import TireBurstOutput


class DiagnosticPayload(Record):
    """Per-submission diagnostic summary for one vehicle."""

    vehicle_id: str = Field(..., min_length=1)
    timestamp: int = Field(..., ge=0, description="Unix epoch milliseconds of the source record")
    tire_prediction: TireBurstOutput
    engine_prediction: EngineFailureOutput
