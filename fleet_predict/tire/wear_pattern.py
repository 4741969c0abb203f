"""Wear pattern recognition from load imbalance and acceleration."""

from __future__ import annotations

from typing import Sequence

from fleet_predict.core.features import clamp, consecutive_rates, mean
from fleet_predict.domain.readings import LoadDistributionSample, SpeedDurationSample

IMBALANCE_SATURATION_KG = 500.0
ACCELERATION_SATURATION = 20.0  # km/h per minute


def load_imbalance(sample: LoadDistributionSample) -> float:
    """Mean of front, rear and left-vs-right side imbalance for one sample."""
    front = abs(sample.front_left - sample.front_right)
    rear = abs(sample.rear_left - sample.rear_right)
    side = abs(
        (sample.front_left + sample.rear_left) - (sample.front_right + sample.rear_right)
    )
    return (front + rear + side) / 3


def average_acceleration(speed_duration_matrix: Sequence[SpeedDurationSample]) -> float:
    rates = consecutive_rates(speed_duration_matrix, lambda s: s.speed)
    return mean(abs(r) for r in rates)


def analyze_wear_pattern(
    load_distribution: Sequence[LoadDistributionSample],
    speed_duration_matrix: Sequence[SpeedDurationSample],
) -> float:
    """Wear score in [0, 1]; higher means more uneven wear."""
    avg_imbalance = mean(load_imbalance(s) for s in load_distribution)
    avg_acceleration = average_acceleration(speed_duration_matrix)

    normalized_imbalance = clamp(avg_imbalance / IMBALANCE_SATURATION_KG)
    normalized_acceleration = clamp(avg_acceleration / ACCELERATION_SATURATION)

    return 0.6 * normalized_imbalance + 0.4 * normalized_acceleration
