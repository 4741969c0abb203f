"""Signal feature extractors shared by the tire and engine scorers.

Every function here is pure and total: empty input yields a neutral value
(0.0, None or an empty list) rather than an exception.  Callers that need
a defined "latest" reading decide for themselves whether None is an error.

Time arithmetic uses the epoch-millisecond timestamps carried by every
reading; spans are converted to minutes or days where a rate needs them.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, Sequence, TypeVar

from fleet_predict.domain.readings import TimestampedSample

S = TypeVar("S", bound=TimestampedSample)

MS_PER_MINUTE = 60_000
MS_PER_DAY = 1000 * 60 * 60 * 24


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(value, high))


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty iterable."""
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (not banker's rounding)."""
    return math.floor(value + 0.5)


def sort_by_timestamp(samples: Sequence[S]) -> list[S]:
    """Stable chronological copy; the input series is left untouched."""
    return sorted(samples, key=lambda s: s.timestamp)


def latest(samples: Sequence[S]) -> S | None:
    """Most recent reading by timestamp (last one wins on ties)."""
    if not samples:
        return None
    return sort_by_timestamp(samples)[-1]


def span_days(first: TimestampedSample, last: TimestampedSample) -> float:
    return (last.timestamp - first.timestamp) / MS_PER_DAY


def daily_rate(samples: Sequence[S], value: Callable[[S], float]) -> float:
    """(last − first) / span-in-days over a chronologically sorted series.

    Returns 0.0 for fewer than two samples or a zero/negative span.
    """
    if len(samples) < 2:
        return 0.0
    ordered = sort_by_timestamp(samples)
    first, last = ordered[0], ordered[-1]
    days = span_days(first, last)
    if days <= 0:
        return 0.0
    return (value(last) - value(first)) / days


def band_filter(samples: Sequence[S], low: float, high: float) -> list[S]:
    """Samples whose ``frequency`` lies in [low, high] (inclusive both ends)."""
    return [s for s in samples if low <= s.frequency <= high]  # type: ignore[attr-defined]


def band_amplitude_features(samples: Sequence[S]) -> tuple[float, float]:
    """Mean amplitude and per-day amplitude trend for one frequency band.

    A single-sample band has a defined amplitude and a zero trend.
    """
    if not samples:
        return 0.0, 0.0
    avg_amplitude = mean(s.amplitude for s in samples)  # type: ignore[attr-defined]
    trend = daily_rate(samples, lambda s: s.amplitude)  # type: ignore[attr-defined]
    return avg_amplitude, trend


def normalized_trend(trend: float, scale: float) -> float:
    """Clamp a trend to ≥0 (improvements earn no credit), scale, cap at 1."""
    return min(max(trend, 0.0) / scale, 1.0)


def consecutive_rates(
    samples: Sequence[S],
    value: Callable[[S], float],
    unit_ms: int = MS_PER_MINUTE,
) -> list[float]:
    """Δvalue / Δt between consecutive chronological samples.

    Pairs with a non-positive time delta are skipped.
    """
    ordered = sort_by_timestamp(samples)
    rates: list[float] = []
    for prev, curr in zip(ordered, ordered[1:]):
        dt = (curr.timestamp - prev.timestamp) / unit_ms
        if dt > 0:
            rates.append((value(curr) - value(prev)) / dt)
    return rates
