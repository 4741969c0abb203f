"""Tire-burst prediction contract."""

from __future__ import annotations

from pydantic import Field

from fleet_predict.domain.readings import (
    AirPressureReading,
    LoadDistributionSample,
    ProximityHeatSource,
    Record,
    RoadSurfaceReading,
    SpeedDurationSample,
    TireMaterialProperties,
    TireTemperatureReading,
)


class TireBurstInput(Record):
    """Six telemetry series plus the compound they were measured on.

    Temperature and air-pressure series need at least one reading for a
    prediction; every other series may be empty and scores neutral.
    """

    material_properties: TireMaterialProperties
    temperature_data: list[TireTemperatureReading] = Field(default_factory=list)
    speed_duration_matrix: list[SpeedDurationSample] = Field(default_factory=list)
    load_distribution: list[LoadDistributionSample] = Field(default_factory=list)
    air_pressure_data: list[AirPressureReading] = Field(default_factory=list)
    proximity_heat_sources: list[ProximityHeatSource] = Field(default_factory=list)
    road_surface_data: list[RoadSurfaceReading] = Field(default_factory=list)


class SafeOperatingEnvelope(Record):
    """Recommended ceilings, straight from the envelope formula."""

    max_speed: float = Field(..., description="km/h")
    max_load: float = Field(..., description="kg")
    max_temperature: float = Field(..., description="°C")
    max_duration: float = Field(..., description="Minutes")


class MaintenanceAlerts(Record):
    """Independent threshold flags; several can be true at once."""

    level70: bool
    level85: bool
    level95: bool

    @property
    def highest_level(self) -> int | None:
        for level, flag in ((95, self.level95), (85, self.level85), (70, self.level70)):
            if flag:
                return level
        return None


class TireBurstOutput(Record):
    burst_probability: float = Field(..., ge=0.0, le=100.0)
    critical_temperature_threshold: float
    safe_operating_envelope: SafeOperatingEnvelope
    maintenance_alerts: MaintenanceAlerts
    predicted_internal_temperature: float = Field(
        ..., description="Kraus self-heating projection of the internal temperature (°C)"
    )
