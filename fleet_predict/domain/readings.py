"""Raw sensor readings — the inputs every extractor and scorer consumes.

Each reading is a frozen record stamped with a Unix-epoch millisecond
timestamp.  Series are NOT assumed to be sorted; consumers sort by
timestamp before looking at trends or "latest" values.

Field names are snake_case in Python and camelCase on the wire, so the
telemetry producer's JSON validates as-is.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from fleet_predict.domain.enums import CompoundType, HeatSourceKind


class Record(BaseModel):
    """Base for every immutable value record in the domain."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class TimestampedSample(Record):
    """Any reading carrying an epoch-millisecond timestamp."""

    timestamp: int = Field(..., ge=0, description="Unix epoch milliseconds")


# ── Tire ─────────────────────────────────────────────────────────────────────

class TireMaterialProperties(Record):
    """Rubber compound characteristics of a tire."""

    hardness: float = Field(..., gt=0, description="Shore A hardness")
    compound_type: CompoundType = CompoundType.OTHER
    thermal_conductivity: float = Field(..., gt=0)
    heat_capacity: float = Field(..., gt=0)

    @field_validator("compound_type", mode="before")
    @classmethod
    def unknown_compound_is_other(cls, v: object) -> CompoundType:
        if isinstance(v, CompoundType):
            return v
        try:
            return CompoundType(v)
        except ValueError:
            return CompoundType.OTHER


class TireTemperatureReading(TimestampedSample):
    internal: float = Field(..., description="Internal carcass temperature (°C)")
    external: float = Field(..., description="Tread surface temperature (°C)")


class SpeedDurationSample(TimestampedSample):
    speed: float = Field(..., ge=0, description="km/h")
    duration: float = Field(..., ge=0, description="Minutes spent at this speed")


class LoadDistributionSample(TimestampedSample):
    """Per-wheel load in kg."""

    front_left: float
    front_right: float
    rear_left: float
    rear_right: float


class AirPressureReading(TimestampedSample):
    pressure: float = Field(..., ge=0, description="kPa")
    decay_rate: float = Field(0.0, description="kPa/hour")


class ProximityHeatSource(TimestampedSample):
    source: HeatSourceKind
    temperature: float = Field(..., description="°C")
    distance: float = Field(..., ge=0, description="Distance to the tire in cm")


class RoadSurfaceReading(TimestampedSample):
    temperature: float = Field(..., description="°C")
    roughness: float = Field(0.0, ge=0, le=10)


# ── Engine ───────────────────────────────────────────────────────────────────

class MetalFatigueSample(TimestampedSample):
    vibration_signature: list[float] = Field(default_factory=list)
    frequency: float = Field(..., ge=0, description="Hz")
    amplitude: float = Field(..., ge=0)


class OilDegradationReading(TimestampedSample):
    viscosity: float = Field(..., ge=0)
    contamination: float = Field(..., ge=0, description="Parts per million")
    acidity_level: float = Field(..., description="pH")


class ThermalStressReading(TimestampedSample):
    cold_start_count: int = Field(..., ge=0)
    operating_temperature: float = Field(..., description="°C")
    thermal_cycle_count: int = Field(..., ge=0)


class CombustionEfficiencyReading(TimestampedSample):
    fuel_consumption: float = Field(..., ge=0, description="Litres per 100 km")
    exhaust_gas_temperature: float = Field(..., description="°C")
    oxygen_sensor_reading: float = Field(..., description="Narrow-band lambda sensor voltage")


class BearingWearSample(TimestampedSample):
    acoustic_profile: list[float] = Field(default_factory=list)
    frequency: float = Field(..., ge=0, description="Hz")
    amplitude: float = Field(..., ge=0)
