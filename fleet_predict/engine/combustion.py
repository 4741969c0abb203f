"""Combustion efficiency of the fuel system.

Scores inefficiency, not efficiency: 0 is a clean, stoichiometric burn and
1 is a fuel system that needs attention.  Inputs:

    fuel consumption   8 L/100 km nominal, 20 L/100 km saturates
    exhaust gas temp   400 °C nominal, 800 °C saturates
    O2 sensor          0.45 V at stoichiometry; deviation either way counts
    drift              rise in fuel consumption per day, 0.5 L/100 km/day saturates
"""

from __future__ import annotations

from typing import Sequence

from fleet_predict.core.features import clamp, daily_rate, latest
from fleet_predict.domain.readings import CombustionEfficiencyReading

NOMINAL_FUEL_CONSUMPTION = 8.0
FUEL_CONSUMPTION_MARGIN = 12.0
NOMINAL_EXHAUST_TEMP_C = 400.0
EXHAUST_TEMP_MARGIN_C = 400.0
STOICHIOMETRIC_O2_VOLTAGE = 0.45
FUEL_RATE_SATURATION = 0.5


def fuel_consumption_drift(readings: Sequence[CombustionEfficiencyReading]) -> float:
    rate = daily_rate(readings, lambda r: r.fuel_consumption)
    return clamp(rate / FUEL_RATE_SATURATION)


def analyze_combustion_efficiency(readings: Sequence[CombustionEfficiencyReading]) -> float:
    """Fuel system score in [0, 1].  0 for no readings."""
    current = latest(readings)
    if current is None:
        return 0.0

    fuel = clamp((current.fuel_consumption - NOMINAL_FUEL_CONSUMPTION) / FUEL_CONSUMPTION_MARGIN)
    exhaust = clamp(
        (current.exhaust_gas_temperature - NOMINAL_EXHAUST_TEMP_C) / EXHAUST_TEMP_MARGIN_C
    )
    oxygen = clamp(
        abs(current.oxygen_sensor_reading - STOICHIOMETRIC_O2_VOLTAGE) / STOICHIOMETRIC_O2_VOLTAGE
    )

    score = 0.3 * fuel + 0.3 * exhaust + 0.2 * oxygen + 0.2 * fuel_consumption_drift(readings)
    return min(score, 1.0)
