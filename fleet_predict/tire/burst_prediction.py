"""Tire-burst predictor — blends the tire subsystem scores.

Burst probability formula:
    p = clamp(
        w_wear          * wear_pattern_score
      + w_standing_wave * standing_wave_risk
      + w_degradation   * degradation_factor
      + w_pressure      * pressure_risk
      + w_road          * road_temperature_risk
      + w_proximity     * proximity_heat_risk
    , 0, 100)

    Where each risk is a normalised [0, 1] value:
    - pressure_risk  = max(0, 1 − latest_pressure / 220 kPa)
    - road_risk      = min(avg_road_temp / 80, 1)
    - proximity_risk = min(max(temp · 100 / distance_cm) / 200, 1)

Pure function: identical input gives identical output, no hidden state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from fleet_predict.core.features import clamp, latest, mean
from fleet_predict.domain.enums import CompoundType
from fleet_predict.domain.errors import InsufficientDataError
from fleet_predict.domain.readings import (
    AirPressureReading,
    ProximityHeatSource,
    RoadSurfaceReading,
)
from fleet_predict.domain.tire import (
    MaintenanceAlerts,
    SafeOperatingEnvelope,
    TireBurstInput,
    TireBurstOutput,
)
from fleet_predict.tire.compound_degradation import model_compound_degradation
from fleet_predict.tire.self_heating import calculate_self_heating
from fleet_predict.tire.standing_wave import detect_standing_waves
from fleet_predict.tire.wear_pattern import analyze_wear_pattern

logger = logging.getLogger(__name__)

OPTIMAL_PRESSURE_KPA = 220.0
ROAD_TEMPERATURE_SATURATION_C = 80.0
PROXIMITY_HEAT_SATURATION = 200.0

CRITICAL_TEMPERATURE_THRESHOLD_C: dict[CompoundType, float] = {
    CompoundType.NATURAL_RUBBER: 85.0,
    CompoundType.SYNTHETIC_RUBBER: 105.0,
    CompoundType.SILICA_COMPOUND: 125.0,
    CompoundType.OTHER: 95.0,
}

ALERT_LEVELS = (70.0, 85.0, 95.0)


@dataclass(frozen=True)
class BurstWeights:
    """Percentage points each [0, 1] risk contributes to burst probability."""

    wear: float = 20.0
    standing_wave: float = 25.0
    degradation: float = 25.0
    pressure: float = 15.0
    road: float = 5.0
    proximity: float = 10.0


DEFAULT_WEIGHTS = BurstWeights()


# ── Individual risks ─────────────────────────────────────────────────────────

def pressure_risk(air_pressure_data: Sequence[AirPressureReading]) -> float:
    reading = latest(air_pressure_data)
    if reading is None:
        raise InsufficientDataError("airPressureData")
    return max(0.0, 1 - reading.pressure / OPTIMAL_PRESSURE_KPA)


def road_temperature_risk(road_surface_data: Sequence[RoadSurfaceReading]) -> float:
    avg_road_temp = mean(r.temperature for r in road_surface_data)
    return clamp(avg_road_temp / ROAD_TEMPERATURE_SATURATION_C)


def _source_heat(source: ProximityHeatSource) -> float:
    # Distance is in cm: a source at 100 cm counts at face value
    if source.distance <= 0:
        return float("inf") if source.temperature > 0 else 0.0
    return source.temperature * 100 / source.distance


def proximity_heat_risk(sources: Sequence[ProximityHeatSource]) -> float:
    """Risk from the hottest nearby source.

    A warm source at zero distance saturates at 1; a source at or below 0 °C
    adds no heat however close it is.
    """
    if not sources:
        return 0.0
    hottest = max(_source_heat(s) for s in sources)
    return clamp(hottest / PROXIMITY_HEAT_SATURATION)


def critical_temperature_threshold(compound: CompoundType) -> float:
    return CRITICAL_TEMPERATURE_THRESHOLD_C.get(
        compound, CRITICAL_TEMPERATURE_THRESHOLD_C[CompoundType.OTHER]
    )


# ── Output helpers ───────────────────────────────────────────────────────────

def safe_operating_envelope(burst_probability: float, threshold: float) -> SafeOperatingEnvelope:
    """Raw envelope formula; callers clamp for display."""
    p = burst_probability
    return SafeOperatingEnvelope(
        max_speed=120 - p * 0.8,
        max_load=1000 - p * 5,
        max_temperature=threshold - 15,
        max_duration=240 - p * 2,
    )


def maintenance_alerts(burst_probability: float) -> MaintenanceAlerts:
    low, mid, high = ALERT_LEVELS
    return MaintenanceAlerts(
        level70=burst_probability >= low,
        level85=burst_probability >= mid,
        level95=burst_probability >= high,
    )


# ── Predictor ────────────────────────────────────────────────────────────────

def predict_tire_burst(
    data: TireBurstInput,
    weights: BurstWeights = DEFAULT_WEIGHTS,
) -> TireBurstOutput:
    """Predict burst probability and derived limits for one tire.

    Raises:
        InsufficientDataError: If the temperature or air-pressure series is empty.
    """
    material = data.material_properties

    predicted_temperature = calculate_self_heating(
        material, data.temperature_data, data.speed_duration_matrix
    )
    wear = analyze_wear_pattern(data.load_distribution, data.speed_duration_matrix)
    standing_wave = detect_standing_waves(
        material, data.temperature_data, data.speed_duration_matrix
    )
    degradation = model_compound_degradation(material, data.temperature_data)
    pressure = pressure_risk(data.air_pressure_data)
    road = road_temperature_risk(data.road_surface_data)
    proximity = proximity_heat_risk(data.proximity_heat_sources)

    raw = (
        weights.wear * wear
        + weights.standing_wave * standing_wave
        + weights.degradation * degradation
        + weights.pressure * pressure
        + weights.road * road
        + weights.proximity * proximity
    )
    burst_probability = clamp(raw, 0.0, 100.0)

    logger.debug(
        "Tire scores wear=%.3f standing_wave=%.3f degradation=%.3f pressure=%.3f "
        "road=%.3f proximity=%.3f → p=%.2f",
        wear, standing_wave, degradation, pressure, road, proximity, burst_probability,
    )

    threshold = critical_temperature_threshold(material.compound_type)
    return TireBurstOutput(
        burst_probability=burst_probability,
        critical_temperature_threshold=threshold,
        safe_operating_envelope=safe_operating_envelope(burst_probability, threshold),
        maintenance_alerts=maintenance_alerts(burst_probability),
        predicted_internal_temperature=predicted_temperature,
    )
