"""Kraus self-heating model for internal tire temperature.

A simplified viscoelastic heat-generation law:

    Q    = K · E'' · ε^1.8 · f
    ΔT   = Q · t / (k · c)
    T'   = T_latest + ΔT

with the loss modulus E'' approximated from Shore hardness, and strain
amplitude ε and excitation frequency f both approximated from average
speed.  K and the exponent are fixed; they are not literature-exact.
"""

from __future__ import annotations

from typing import Sequence

from fleet_predict.core.features import latest, mean
from fleet_predict.domain.errors import InsufficientDataError
from fleet_predict.domain.readings import (
    SpeedDurationSample,
    TireMaterialProperties,
    TireTemperatureReading,
)

KRAUS_CONSTANT = 0.4
POWER_FACTOR = 1.8


def heat_generation_rate(material: TireMaterialProperties, avg_speed: float) -> float:
    loss_modulus = material.hardness * 0.15
    strain_amplitude = avg_speed / 100
    frequency = avg_speed / 20
    return KRAUS_CONSTANT * loss_modulus * strain_amplitude ** POWER_FACTOR * frequency


def calculate_self_heating(
    material: TireMaterialProperties,
    temperature_data: Sequence[TireTemperatureReading],
    speed_duration_matrix: Sequence[SpeedDurationSample],
) -> float:
    """Predict the internal temperature (°C) after the recorded driving.

    An empty speed series adds no heat, so the latest reading is returned
    unchanged.

    Raises:
        InsufficientDataError: If there is no temperature reading to start from.
    """
    latest_temp = latest(temperature_data)
    if latest_temp is None:
        raise InsufficientDataError("temperatureData")

    avg_speed = mean(s.speed for s in speed_duration_matrix)
    total_duration = sum(s.duration for s in speed_duration_matrix)

    rate = heat_generation_rate(material, avg_speed)
    temperature_rise = (rate * total_duration) / (
        material.thermal_conductivity * material.heat_capacity
    )
    return latest_temp.internal + temperature_rise
