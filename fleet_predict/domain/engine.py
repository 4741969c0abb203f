"""Engine-failure prediction contract."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from fleet_predict.domain.readings import (
    BearingWearSample,
    CombustionEfficiencyReading,
    MetalFatigueSample,
    OilDegradationReading,
    Record,
    ThermalStressReading,
)


class EngineFailureInput(Record):
    metal_fatigue_data: list[MetalFatigueSample] = Field(default_factory=list)
    oil_degradation_data: list[OilDegradationReading] = Field(default_factory=list)
    thermal_stress_data: list[ThermalStressReading] = Field(default_factory=list)
    combustion_efficiency_data: list[CombustionEfficiencyReading] = Field(default_factory=list)
    bearing_wear_data: list[BearingWearSample] = Field(default_factory=list)


class RemainingUsefulLife(Record):
    hours: float = Field(..., ge=0.0)
    kilometers: float = Field(..., ge=0.0)


class MaintenancePriority(Record):
    component: str
    priority: int = Field(..., ge=1, le=10)
    recommended_action: str


class SparePartForecast(Record):
    part: str
    quantity: int = Field(..., ge=1)
    estimated_replacement_date: datetime


class EngineFailureOutput(Record):
    remaining_useful_life: RemainingUsefulLife
    failure_probability_heatmap: dict[str, float] = Field(
        ..., description="Component name → independent failure probability (0–100)"
    )
    maintenance_priorities: list[MaintenancePriority]
    spare_parts_consumption_forecast: list[SparePartForecast]

    @property
    def max_failure_probability(self) -> float:
        return max(self.failure_probability_heatmap.values(), default=0.0)
