"""Metal fatigue from vibration amplitude per component frequency band.

Bands overlap on purpose (camshaft 50–200 Hz sits across the crankshaft
and piston ranges), so one sample may feed several components.
"""

from __future__ import annotations

from typing import Sequence

from fleet_predict.core.features import band_amplitude_features, band_filter, normalized_trend
from fleet_predict.domain.readings import MetalFatigueSample

COMPONENT_FREQUENCY_BANDS: dict[str, tuple[float, float]] = {
    "crankshaft": (20.0, 100.0),
    "pistons": (100.0, 500.0),
    "valves": (500.0, 2000.0),
    "bearings": (2000.0, 5000.0),
    "camshaft": (50.0, 200.0),
}

AMPLITUDE_SATURATION = 10.0
TREND_SATURATION = 0.5  # amplitude units per day


def fatigue_score(samples: Sequence[MetalFatigueSample]) -> float:
    """Fatigue score in [0, 1] for the samples of one band."""
    if not samples:
        return 0.0
    avg_amplitude, trend = band_amplitude_features(samples)
    normalized_amplitude = min(avg_amplitude / AMPLITUDE_SATURATION, 1.0)
    return 0.7 * normalized_amplitude + 0.3 * normalized_trend(trend, TREND_SATURATION)


def analyze_metal_fatigue(metal_fatigue_data: Sequence[MetalFatigueSample]) -> dict[str, float]:
    """Component → fatigue score in [0, 1]."""
    return {
        component: fatigue_score(band_filter(metal_fatigue_data, low, high))
        for component, (low, high) in COMPONENT_FREQUENCY_BANDS.items()
    }
