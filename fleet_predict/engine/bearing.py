"""Bearing wear from band amplitude, amplitude trend and acoustic profile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from fleet_predict.core.features import (
    band_amplitude_features,
    band_filter,
    mean,
    normalized_trend,
)
from fleet_predict.domain.readings import BearingWearSample

BEARING_FREQUENCY_BANDS: dict[str, tuple[float, float]] = {
    "mainBearing": (1000.0, 2000.0),
    "rodBearing": (2000.0, 3000.0),
    "camshaftBearing": (3000.0, 4000.0),
    "auxiliaryBearing": (4000.0, 5000.0),
}

AMPLITUDE_SATURATION = 5.0
TREND_SATURATION = 0.2  # amplitude units per day
HARMONIC_FRACTION = 0.5


@dataclass(frozen=True)
class AcousticPattern:
    peak_index: int
    peak_ratio: float
    harmonics: int

    @property
    def wear_indicator(self) -> float:
        # More harmonics and a sharper peak both point to wear
        return self.harmonics * 0.1 + self.peak_ratio * 0.5


def acoustic_pattern(profile: Sequence[float]) -> AcousticPattern:
    """Peak bin, peak-to-sum ratio and count of bins above half the peak.

    An empty or all-zero profile yields an all-zero pattern.
    """
    if not profile:
        return AcousticPattern(peak_index=-1, peak_ratio=0.0, harmonics=0)
    peak = max(profile)
    peak_index = list(profile).index(peak)
    total = sum(profile)
    peak_ratio = peak / total if total > 0 else 0.0
    harmonics = sum(
        1 for idx, value in enumerate(profile)
        if idx != peak_index and value > peak * HARMONIC_FRACTION
    )
    return AcousticPattern(peak_index=peak_index, peak_ratio=peak_ratio, harmonics=harmonics)


def pattern_score(samples: Sequence[BearingWearSample]) -> float:
    return min(mean(acoustic_pattern(s.acoustic_profile).wear_indicator for s in samples), 1.0)


def bearing_wear_score(samples: Sequence[BearingWearSample]) -> float:
    """Wear score in [0, 1] for the samples of one bearing band."""
    if not samples:
        return 0.0
    avg_amplitude, trend = band_amplitude_features(samples)
    normalized_amplitude = min(avg_amplitude / AMPLITUDE_SATURATION, 1.0)
    return (
        0.4 * normalized_amplitude
        + 0.3 * normalized_trend(trend, TREND_SATURATION)
        + 0.3 * pattern_score(samples)
    )


def analyze_bearing_wear(bearing_data: Sequence[BearingWearSample]) -> dict[str, float]:
    """Bearing → wear score in [0, 1]."""
    return {
        bearing: bearing_wear_score(band_filter(bearing_data, low, high))
        for bearing, (low, high) in BEARING_FREQUENCY_BANDS.items()
    }
