"""Tests for the tire subsystem scorers."""

import math

import pytest

from fleet_predict.domain.errors import InsufficientDataError
from fleet_predict.domain.readings import (
    LoadDistributionSample,
    SpeedDurationSample,
    TireMaterialProperties,
    TireTemperatureReading,
)
from fleet_predict.tire.compound_degradation import (
    count_thermal_cycles,
    critical_temperature,
    model_compound_degradation,
)
from fleet_predict.tire.self_heating import calculate_self_heating, heat_generation_rate
from fleet_predict.tire.standing_wave import (
    critical_speed,
    detect_standing_waves,
    time_near_critical_speed,
)
from fleet_predict.tire.wear_pattern import analyze_wear_pattern, load_imbalance

T0 = 1_700_000_000_000
MINUTE = 60_000


def _material(**kw) -> TireMaterialProperties:
    base = {
        "hardness": 50,
        "compound_type": "synthetic_rubber",
        "thermal_conductivity": 10,
        "heat_capacity": 3,
    }
    base.update(kw)
    return TireMaterialProperties(**base)


def _temps(*values: float) -> list[TireTemperatureReading]:
    return [
        TireTemperatureReading(internal=v, external=v - 10, timestamp=T0 + i * MINUTE)
        for i, v in enumerate(values)
    ]


def _speed(speed: float, duration: float, offset: int = 0) -> SpeedDurationSample:
    return SpeedDurationSample(speed=speed, duration=duration, timestamp=T0 + offset * MINUTE)


def _load(fl: float, fr: float, rl: float, rr: float) -> LoadDistributionSample:
    return LoadDistributionSample(
        front_left=fl, front_right=fr, rear_left=rl, rear_right=rr, timestamp=T0
    )


class TestSelfHeating:
    def test_heat_generation_rate(self) -> None:
        # hardness 50 → E'' 7.5; 100 km/h → strain 1, frequency 5
        assert heat_generation_rate(_material(), 100) == pytest.approx(15.0)

    def test_rise_added_to_latest_reading(self) -> None:
        temps = [
            TireTemperatureReading(internal=70, external=60, timestamp=T0 + MINUTE),
            TireTemperatureReading(internal=50, external=45, timestamp=T0),
        ]
        speeds = [_speed(100, 30), _speed(100, 30, 1)]
        # 15 * 60 / (10 * 3) = 30 °C on top of the latest 70 °C
        assert calculate_self_heating(_material(), temps, speeds) == pytest.approx(100.0)

    def test_no_driving_adds_no_heat(self) -> None:
        assert calculate_self_heating(_material(), _temps(60, 65), []) == pytest.approx(65.0)

    def test_empty_temperature_series_raises(self) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            calculate_self_heating(_material(), [], [_speed(100, 30)])
        assert exc_info.value.series == "temperatureData"


class TestWearPattern:
    def test_load_imbalance_averages_three_axes(self) -> None:
        # front 200, rear 0, left-vs-right 200
        assert load_imbalance(_load(500, 300, 400, 400)) == pytest.approx(400 / 3)

    def test_imbalance_only(self) -> None:
        score = analyze_wear_pattern([_load(500, 300, 400, 400)], [])
        assert score == pytest.approx(0.6 * (400 / 3) / 500)

    def test_acceleration_saturates(self) -> None:
        balanced = [_load(400, 400, 400, 400)]
        speeds = [_speed(0, 1), _speed(30, 1, 1)]
        assert analyze_wear_pattern(balanced, speeds) == pytest.approx(0.4)

    def test_steady_balanced_driving_scores_zero(self) -> None:
        balanced = [_load(400, 400, 400, 400)]
        speeds = [_speed(80, 10), _speed(80, 10, 1)]
        assert analyze_wear_pattern(balanced, speeds) == 0.0

    def test_empty_series_score_zero(self) -> None:
        assert analyze_wear_pattern([], []) == 0.0

    def test_order_of_speed_samples_irrelevant(self) -> None:
        loads = [_load(450, 400, 400, 420)]
        ordered = [_speed(0, 1), _speed(10, 1, 1), _speed(5, 1, 2)]
        shuffled = [ordered[2], ordered[0], ordered[1]]
        assert analyze_wear_pattern(loads, ordered) == analyze_wear_pattern(loads, shuffled)

    def test_score_bounded(self) -> None:
        score = analyze_wear_pattern([_load(5000, 0, 5000, 0)], [_speed(0, 1), _speed(200, 1, 1)])
        assert score == pytest.approx(1.0)


class TestStandingWave:
    def test_critical_speed(self) -> None:
        # hardness 10 → 15 Hz natural frequency → 15 * 2 m * 3.6 km/h
        assert critical_speed(_material(hardness=10)) == pytest.approx(108.0)

    def test_full_hour_at_critical_speed_and_hot(self) -> None:
        material = _material(hardness=10)
        risk = detect_standing_waves(material, _temps(100, 100), [_speed(108, 60)])
        assert risk == pytest.approx(1.0)

    def test_half_hour_at_critical_speed(self) -> None:
        material = _material(hardness=10)
        risk = detect_standing_waves(material, _temps(50), [_speed(108, 30)])
        assert risk == pytest.approx(0.35 + 0.15)

    def test_far_from_critical_speed_only_temperature_counts(self) -> None:
        material = _material(hardness=10)
        assert time_near_critical_speed(material, [_speed(150, 60)]) == 0
        risk = detect_standing_waves(material, _temps(50), [_speed(150, 60)])
        assert risk == pytest.approx(0.15)

    def test_empty_series_score_zero(self) -> None:
        assert detect_standing_waves(_material(), [], []) == 0.0


class TestCompoundDegradation:
    def test_critical_temperature_per_compound(self) -> None:
        assert critical_temperature(_material(compound_type="natural_rubber").compound_type) == 80
        assert critical_temperature(_material(compound_type="silica_compound").compound_type) == 120
        assert critical_temperature(_material(compound_type="kevlar").compound_type) == 90

    def test_counts_rise_then_fall_cycles(self) -> None:
        assert count_thermal_cycles(_temps(60, 75, 60, 75, 60)) == 2

    def test_cycles_counted_in_timestamp_order(self) -> None:
        temps = _temps(60, 75, 60, 75, 60)
        shuffled = [temps[3], temps[0], temps[4], temps[1], temps[2]]
        assert count_thermal_cycles(shuffled) == 2

    def test_small_swings_are_not_cycles(self) -> None:
        assert count_thermal_cycles(_temps(60, 68, 60, 68, 60)) == 0

    def test_factor_below_critical(self) -> None:
        material = _material(compound_type="natural_rubber")
        expected = (2 / 50) * 0.3 + 0 + (math.exp(-5 / 20) / 10) * 0.4
        assert model_compound_degradation(material, _temps(60, 75, 60, 75, 60)) == pytest.approx(expected)

    def test_extreme_temperature_saturates(self) -> None:
        material = _material(compound_type="natural_rubber")
        assert model_compound_degradation(material, _temps(1000)) == 1.0
        assert model_compound_degradation(material, _temps(1_000_000)) == 1.0

    def test_empty_series_is_zero(self) -> None:
        assert model_compound_degradation(_material(), []) == 0.0
