"""Tests for the engine-failure predictor."""

from datetime import datetime, timedelta, timezone

import pytest

from fleet_predict.domain.engine import EngineFailureInput
from fleet_predict.engine.failure_prediction import (
    build_failure_heatmap,
    build_maintenance_priorities,
    build_spare_parts_forecast,
    predict_engine_failure,
    priority_for,
    recommended_action,
    remaining_useful_life,
    spare_part_for,
    spare_part_quantity,
)
from fleet_predict.engine.oil import analyze_oil_degradation

from tests.test_models import _valid_engine_input

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)

ALL_COMPONENTS = {
    "crankshaft", "pistons", "valves", "bearings", "camshaft",
    "mainBearing", "rodBearing", "camshaftBearing", "auxiliaryBearing",
    "oilSystem", "coolingSystem", "fuelSystem",
}


def _input(**kw) -> EngineFailureInput:
    return EngineFailureInput.model_validate(_valid_engine_input(**kw))


class TestHeatmap:
    def test_covers_every_component(self) -> None:
        assert set(build_failure_heatmap(_input())) == ALL_COMPONENTS

    def test_scores_are_percentages(self) -> None:
        data = _input()
        heatmap = build_failure_heatmap(data)
        assert heatmap["oilSystem"] == pytest.approx(analyze_oil_degradation(data.oil_degradation_data) * 100)
        assert all(0 <= v <= 100 for v in heatmap.values())

    def test_fresh_map_per_call(self) -> None:
        data = _input()
        first = build_failure_heatmap(data)
        first["oilSystem"] = 99.0
        assert build_failure_heatmap(data)["oilSystem"] != 99.0


class TestRemainingLife:
    def test_healthy_engine(self) -> None:
        life = remaining_useful_life({"a": 0.0, "b": 0.0})
        assert life.hours == 5000
        assert life.kilometers == 300_000

    def test_convex_decay(self) -> None:
        life = remaining_useful_life({"oilSystem": 35.0, "fuelSystem": 25.0})
        assert life.hours == pytest.approx(5000 * 0.7 ** 2)
        assert life.kilometers == pytest.approx(life.hours * 60)

    def test_failed_engine(self) -> None:
        assert remaining_useful_life({"a": 100.0}).hours == 0.0


class TestMaintenancePriorities:
    def test_priority_scale(self) -> None:
        assert priority_for(0) == 1
        assert priority_for(0.1) == 1
        assert priority_for(75) == 8
        assert priority_for(91) == 10
        assert priority_for(100) == 10

    def test_action_tiers(self) -> None:
        assert recommended_action("valves", 90) == "Immediate replacement of valves required"
        assert recommended_action("valves", 70) == "Schedule valves replacement within 1000 km"
        assert recommended_action("valves", 50) == "Inspect valves at next service"
        assert recommended_action("valves", 30) == "Monitor valves condition"
        assert recommended_action("valves", 29.9) == "No action required for valves"

    def test_sorted_highest_first(self) -> None:
        priorities = build_maintenance_priorities({"pistons": 20.0, "bearings": 75.0, "valves": 55.0})
        assert [(p.component, p.priority) for p in priorities] == [
            ("bearings", 8), ("valves", 6), ("pistons", 2),
        ]
        assert priorities[0].recommended_action == "Schedule bearings replacement within 1000 km"
        assert priorities[1].recommended_action == "Inspect valves at next service"
        assert priorities[2].recommended_action == "No action required for pistons"

    def test_ties_keep_heatmap_order(self) -> None:
        priorities = build_maintenance_priorities({"a": 15.0, "b": 12.0, "c": 50.0})
        assert [p.component for p in priorities] == ["c", "a", "b"]


class TestSparePartsForecast:
    def test_only_components_at_thirty_percent(self) -> None:
        heatmap = {"oilSystem": 35.0, "fuelSystem": 25.0}
        hours = remaining_useful_life(heatmap).hours
        forecast = build_spare_parts_forecast(heatmap, hours, now=NOW)
        assert len(forecast) == 1
        assert forecast[0].part == "Oil Pump"
        assert forecast[0].quantity == 1
        # 2450 h * 0.65 / 24 ≈ 66.35 days
        assert forecast[0].estimated_replacement_date == NOW + timedelta(days=66)

    def test_soonest_first(self) -> None:
        forecast = build_spare_parts_forecast({"valves": 40.0, "pistons": 90.0}, 2400, now=NOW)
        assert [f.part for f in forecast] == ["Piston Set", "Valve Set"]
        assert forecast[0].quantity == 4
        assert forecast[0].estimated_replacement_date == NOW + timedelta(days=10)
        assert forecast[1].estimated_replacement_date == NOW + timedelta(days=60)

    def test_quantities(self) -> None:
        assert spare_part_quantity("mainBearing") == 2
        assert spare_part_quantity("bearings") == 2
        assert spare_part_quantity("pistons") == 4
        assert spare_part_quantity("valves") == 1

    def test_unknown_component_part_name(self) -> None:
        assert spare_part_for("turbo") == "turbo Replacement Part"

    def test_healthy_engine_needs_no_parts(self) -> None:
        assert build_spare_parts_forecast({"valves": 10.0}, 5000, now=NOW) == []


class TestPredictEngineFailure:
    def test_empty_input_is_neutral(self) -> None:
        result = predict_engine_failure(EngineFailureInput(), now=NOW)
        assert set(result.failure_probability_heatmap) == ALL_COMPONENTS
        assert result.max_failure_probability == 0.0
        assert result.remaining_useful_life.hours == 5000
        assert all(p.priority == 1 for p in result.maintenance_priorities)
        assert result.spare_parts_consumption_forecast == []

    def test_typical_engine(self) -> None:
        result = predict_engine_failure(_input(), now=NOW)
        assert 0 < result.remaining_useful_life.hours <= 5000
        assert len(result.maintenance_priorities) == len(ALL_COMPONENTS)
        priorities = [p.priority for p in result.maintenance_priorities]
        assert priorities == sorted(priorities, reverse=True)

    def test_failing_oil_system_forecasts_pump(self) -> None:
        data = _input(oilDegradationData=[
            {"viscosity": 100, "contamination": 10_000, "acidityLevel": 0, "timestamp": 0},
        ])
        result = predict_engine_failure(data, now=NOW)
        assert result.failure_probability_heatmap["oilSystem"] == pytest.approx(100.0)
        assert result.maintenance_priorities[0].component == "oilSystem"
        assert result.maintenance_priorities[0].priority == 10
        assert [f.part for f in result.spare_parts_consumption_forecast] == ["Oil Pump"]
        assert result.spare_parts_consumption_forecast[0].estimated_replacement_date == NOW

    def test_deterministic_for_fixed_now(self) -> None:
        data = _input()
        assert predict_engine_failure(data, now=NOW) == predict_engine_failure(data, now=NOW)
