"""Standing wave detection.

Standing waves form when rotation excites the carcass near its natural
frequency.  Natural frequency is estimated from hardness; the matching
road speed assumes a 2 m circumference.
"""

from __future__ import annotations

from typing import Sequence

from fleet_predict.core.features import clamp, mean
from fleet_predict.domain.readings import (
    SpeedDurationSample,
    TireMaterialProperties,
    TireTemperatureReading,
)

TIRE_CIRCUMFERENCE_M = 2.0
MS_TO_KMH = 3.6
CRITICAL_SPEED_TOLERANCE = 0.1


def natural_frequency(material: TireMaterialProperties) -> float:
    return 10 + material.hardness * 0.5


def critical_speed(material: TireMaterialProperties) -> float:
    """Road speed (km/h) at which standing waves form."""
    return natural_frequency(material) * TIRE_CIRCUMFERENCE_M * MS_TO_KMH


def time_near_critical_speed(
    material: TireMaterialProperties,
    speed_duration_matrix: Sequence[SpeedDurationSample],
) -> float:
    """Minutes spent strictly within ±10% of the critical speed."""
    v_crit = critical_speed(material)
    return sum(
        s.duration
        for s in speed_duration_matrix
        if abs(s.speed - v_crit) / v_crit < CRITICAL_SPEED_TOLERANCE
    )


def detect_standing_waves(
    material: TireMaterialProperties,
    temperature_data: Sequence[TireTemperatureReading],
    speed_duration_matrix: Sequence[SpeedDurationSample],
) -> float:
    """Standing-wave risk in [0, 1]."""
    minutes_near = time_near_critical_speed(material, speed_duration_matrix)
    avg_temperature = mean(t.internal for t in temperature_data)
    temperature_factor = min(avg_temperature / 100, 1.0)
    return clamp((minutes_near / 60) * 0.7 + temperature_factor * 0.3)
