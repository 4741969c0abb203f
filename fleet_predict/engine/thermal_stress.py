"""Thermal stress on the cooling system."""

from __future__ import annotations

from typing import Sequence

from fleet_predict.core.features import latest
from fleet_predict.domain.readings import ThermalStressReading

COLD_START_SATURATION = 1000
NORMAL_OPERATING_TEMP_C = 90.0
CRITICAL_MARGIN_C = 30.0  # 120 °C is critical
THERMAL_CYCLE_SATURATION = 5000


def analyze_thermal_stress(readings: Sequence[ThermalStressReading]) -> float:
    """Cooling system score in [0, 1] from the latest reading.  0 for none."""
    current = latest(readings)
    if current is None:
        return 0.0

    cold_start = min(current.cold_start_count / COLD_START_SATURATION, 1.0)
    temperature = max(
        0.0, (current.operating_temperature - NORMAL_OPERATING_TEMP_C) / CRITICAL_MARGIN_C
    )
    cycles = min(current.thermal_cycle_count / THERMAL_CYCLE_SATURATION, 1.0)

    return min(0.3 * cold_start + 0.4 * temperature + 0.3 * cycles, 1.0)
