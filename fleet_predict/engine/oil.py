"""Oil degradation from the latest sample and the day-normalised drift."""

from __future__ import annotations

from typing import Sequence

from fleet_predict.core.features import clamp, daily_rate, latest, mean
from fleet_predict.domain.readings import OilDegradationReading

OPTIMAL_VISCOSITY = 10.0
CRITICAL_CONTAMINATION_PPM = 5000.0
NEUTRAL_PH = 7.0

CONTAMINATION_RATE_SATURATION = 100.0  # ppm per day
VISCOSITY_RATE_SATURATION = 0.5
ACIDITY_RATE_SATURATION = 0.1


def degradation_rate(readings: Sequence[OilDegradationReading]) -> float:
    """Mean of the normalised contamination, viscosity and acidity drift rates."""
    if len(readings) < 2:
        return 0.0
    contamination = daily_rate(readings, lambda r: r.contamination)
    viscosity = abs(daily_rate(readings, lambda r: r.viscosity))
    acidity = abs(daily_rate(readings, lambda r: r.acidity_level))
    return mean([
        clamp(contamination / CONTAMINATION_RATE_SATURATION),
        clamp(viscosity / VISCOSITY_RATE_SATURATION),
        clamp(acidity / ACIDITY_RATE_SATURATION),
    ])


def analyze_oil_degradation(readings: Sequence[OilDegradationReading]) -> float:
    """Oil system score in [0, 1]; higher is worse.  0 for no readings."""
    current = latest(readings)
    if current is None:
        return 0.0

    viscosity_deviation = abs(current.viscosity - OPTIMAL_VISCOSITY) / OPTIMAL_VISCOSITY
    contamination = min(current.contamination / CRITICAL_CONTAMINATION_PPM, 1.0)
    acidity = max(0.0, (NEUTRAL_PH - current.acidity_level) / NEUTRAL_PH)

    score = (
        0.3 * viscosity_deviation
        + 0.3 * contamination
        + 0.2 * acidity
        + 0.2 * degradation_rate(readings)
    )
    return min(score, 1.0)
