"""Engine-failure predictor — merges component scores into one heatmap.

Remaining life:
    overall_health   = 1 − mean(heatmap) / 100
    remaining_hours  = 5000 · overall_health²      (convex decay)
    remaining_km     = remaining_hours · 60         (60 km/h average)

Priorities are ceil(p / 10) on a 1–10 scale.  Spare parts are forecast
only for components at ≥30%, dated by how much of the remaining life the
component's own probability leaves.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Mapping

from fleet_predict.core.features import mean, round_half_up
from fleet_predict.domain.engine import (
    EngineFailureInput,
    EngineFailureOutput,
    MaintenancePriority,
    RemainingUsefulLife,
    SparePartForecast,
)
from fleet_predict.engine.bearing import analyze_bearing_wear
from fleet_predict.engine.combustion import analyze_combustion_efficiency
from fleet_predict.engine.oil import analyze_oil_degradation
from fleet_predict.engine.thermal_stress import analyze_thermal_stress
from fleet_predict.engine.vibration import analyze_metal_fatigue
from fleet_predict.foundation.clock import utc_now

logger = logging.getLogger(__name__)

BASE_REMAINING_HOURS = 5000.0
AVERAGE_SPEED_KMH = 60.0
SPARE_PART_THRESHOLD = 30.0

SPARE_PART_NAMES: dict[str, str] = {
    "crankshaft": "Crankshaft Assembly",
    "pistons": "Piston Set",
    "valves": "Valve Set",
    "camshaft": "Camshaft",
    "bearings": "Engine Bearing Set",
    "mainBearing": "Main Bearing Set",
    "rodBearing": "Rod Bearing Set",
    "camshaftBearing": "Camshaft Bearing Set",
    "auxiliaryBearing": "Auxiliary Bearing Set",
    "oilSystem": "Oil Pump",
    "coolingSystem": "Water Pump",
    "fuelSystem": "Fuel Injector Set",
}

# (minimum probability, action template); first match wins
_ACTION_TIERS: tuple[tuple[float, str], ...] = (
    (90.0, "Immediate replacement of {component} required"),
    (70.0, "Schedule {component} replacement within 1000 km"),
    (50.0, "Inspect {component} at next service"),
    (30.0, "Monitor {component} condition"),
)


# ── Heatmap ──────────────────────────────────────────────────────────────────

def build_failure_heatmap(data: EngineFailureInput) -> dict[str, float]:
    """Fresh component → probability (0–100) map for one input."""
    component_scores: dict[str, float] = {}
    component_scores.update(analyze_metal_fatigue(data.metal_fatigue_data))
    component_scores.update(analyze_bearing_wear(data.bearing_wear_data))
    component_scores["oilSystem"] = analyze_oil_degradation(data.oil_degradation_data)
    component_scores["coolingSystem"] = analyze_thermal_stress(data.thermal_stress_data)
    component_scores["fuelSystem"] = analyze_combustion_efficiency(data.combustion_efficiency_data)
    return {component: score * 100 for component, score in component_scores.items()}


# ── Remaining life ───────────────────────────────────────────────────────────

def overall_health(heatmap: Mapping[str, float]) -> float:
    return 1 - mean(heatmap.values()) / 100


def remaining_useful_life(heatmap: Mapping[str, float]) -> RemainingUsefulLife:
    hours = BASE_REMAINING_HOURS * overall_health(heatmap) ** 2
    return RemainingUsefulLife(hours=hours, kilometers=hours * AVERAGE_SPEED_KMH)


# ── Maintenance priorities ───────────────────────────────────────────────────

def recommended_action(component: str, probability: float) -> str:
    for minimum, template in _ACTION_TIERS:
        if probability >= minimum:
            return template.format(component=component)
    return f"No action required for {component}"


def priority_for(probability: float) -> int:
    return min(max(math.ceil(probability / 10), 1), 10)


def build_maintenance_priorities(heatmap: Mapping[str, float]) -> list[MaintenancePriority]:
    """Every component, highest priority first; ties keep heatmap order."""
    priorities = [
        MaintenancePriority(
            component=component,
            priority=priority_for(probability),
            recommended_action=recommended_action(component, probability),
        )
        for component, probability in heatmap.items()
    ]
    return sorted(priorities, key=lambda p: p.priority, reverse=True)


# ── Spare parts ──────────────────────────────────────────────────────────────

def spare_part_for(component: str) -> str:
    return SPARE_PART_NAMES.get(component, f"{component} Replacement Part")


def spare_part_quantity(component: str) -> int:
    if "bearing" in component.lower():
        return 2  # replaced in pairs
    if component == "pistons":
        return 4  # four-cylinder assumption
    return 1


def build_spare_parts_forecast(
    heatmap: Mapping[str, float],
    remaining_hours: float,
    now: datetime | None = None,
) -> list[SparePartForecast]:
    """Parts for components at ≥30%, soonest replacement first."""
    now = now or utc_now()
    forecast: list[SparePartForecast] = []
    for component, probability in heatmap.items():
        if probability < SPARE_PART_THRESHOLD:
            continue
        hours_to_replacement = remaining_hours * (1 - probability / 100)
        days = round_half_up(hours_to_replacement / 24)
        forecast.append(
            SparePartForecast(
                part=spare_part_for(component),
                quantity=spare_part_quantity(component),
                estimated_replacement_date=now + timedelta(days=days),
            )
        )
    return sorted(forecast, key=lambda f: f.estimated_replacement_date)


# ── Predictor ────────────────────────────────────────────────────────────────

def predict_engine_failure(
    data: EngineFailureInput,
    now: datetime | None = None,
) -> EngineFailureOutput:
    """Predict component failure probabilities, remaining life and upkeep plan.

    Never raises for well-formed input: empty series score neutral.
    """
    heatmap = build_failure_heatmap(data)
    life = remaining_useful_life(heatmap)

    logger.debug(
        "Engine heatmap max=%.2f mean=%.2f → remaining %.1f h",
        max(heatmap.values(), default=0.0), mean(heatmap.values()), life.hours,
    )

    return EngineFailureOutput(
        remaining_useful_life=life,
        failure_probability_heatmap=heatmap,
        maintenance_priorities=build_maintenance_priorities(heatmap),
        spare_parts_consumption_forecast=build_spare_parts_forecast(heatmap, life.hours, now),
    )
