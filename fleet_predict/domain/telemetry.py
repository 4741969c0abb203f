"""Telemetry records and fleet-level observations."""

from __future__ import annotations

from pydantic import Field

from fleet_predict.domain.engine import EngineFailureInput, EngineFailureOutput
from fleet_predict.domain.readings import Record
from fleet_predict.domain.tire import TireBurstInput, TireBurstOutput


class TelemetryRecord(Record):
    """One producer submission for one vehicle.  Consumed once by the processor."""

    vehicle_id: str = Field(..., min_length=1, max_length=256)
    timestamp: int = Field(..., ge=0, description="Unix epoch milliseconds")
    tire_data: TireBurstInput
    engine_data: EngineFailureInput


class TelemetryResult(Record):
    tire_prediction: TireBurstOutput
    engine_prediction: EngineFailureOutput
    processing_time_ms: float = Field(..., ge=0.0)
    latency_exceeded: bool = False


class FleetInsights(Record):
    """Fleet-wide aggregates recomputed from the latest record per vehicle."""

    average_tire_burst_probability: float = 0.0
    average_engine_remaining_life: float = Field(0.0, description="Hours")
    common_maintenance_issues: list[str] = Field(default_factory=list)
    vehicle_count: int = 0
