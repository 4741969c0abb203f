"""Compound degradation from thermal cycling and over-temperature exposure.

The Arrhenius-style term exp((T_max − T_crit) / 20) is unbounded; only
the final clamp caps the factor at 1.0, so extreme temperatures saturate.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence

from fleet_predict.core.features import clamp, sort_by_timestamp
from fleet_predict.domain.enums import CompoundType
from fleet_predict.domain.readings import TireMaterialProperties, TireTemperatureReading

CYCLE_THRESHOLD_C = 10.0
_MAX_EXPONENT = 50.0

CRITICAL_TEMPERATURE_C: dict[CompoundType, float] = {
    CompoundType.NATURAL_RUBBER: 80.0,
    CompoundType.SYNTHETIC_RUBBER: 100.0,
    CompoundType.SILICA_COMPOUND: 120.0,
    CompoundType.OTHER: 90.0,
}


class _CycleState(str, Enum):
    RISING = "rising"
    FALLING = "falling"


def critical_temperature(compound: CompoundType) -> float:
    return CRITICAL_TEMPERATURE_C.get(compound, CRITICAL_TEMPERATURE_C[CompoundType.OTHER])


def count_thermal_cycles(temperature_data: Sequence[TireTemperatureReading]) -> int:
    """Count rise-then-fall excursions larger than the hysteresis threshold."""
    ordered = sort_by_timestamp(temperature_data)
    state = _CycleState.FALLING
    cycles = 0
    for prev, curr in zip(ordered, ordered[1:]):
        delta = curr.internal - prev.internal
        if delta > CYCLE_THRESHOLD_C and state is _CycleState.FALLING:
            state = _CycleState.RISING
        elif delta < -CYCLE_THRESHOLD_C and state is _CycleState.RISING:
            state = _CycleState.FALLING
            cycles += 1
    return cycles


def model_compound_degradation(
    material: TireMaterialProperties,
    temperature_data: Sequence[TireTemperatureReading],
) -> float:
    """Degradation factor in [0, 1]; 0 for an empty series."""
    if not temperature_data:
        return 0.0

    crit = critical_temperature(material.compound_type)
    cycles = count_thermal_cycles(temperature_data)
    max_temperature = max(t.internal for t in temperature_data)
    above = sum(1 for t in temperature_data if t.internal > crit)
    fraction_above = above / len(temperature_data)

    # The clamp saturates long before e^50; the cap only avoids OverflowError
    temperature_factor = math.exp(min((max_temperature - crit) / 20, _MAX_EXPONENT))

    return clamp(
        (cycles / 50) * 0.3
        + fraction_above * 0.3
        + (temperature_factor / 10) * 0.4
    )
