"""Tests for the prediction and telemetry HTTP routes."""

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fleet_predict.api.predict import create_predict_router
from fleet_predict.api.telemetry import create_telemetry_router
from fleet_predict.core.telemetry_processor import TelemetryProcessor
from fleet_predict.integrations.alerts import AlertSystem
from fleet_predict.integrations.oem import OEMConfig, OEMReporter
from fleet_predict.services.telemetry_pipeline import TelemetryPipeline

from tests.test_models import T0, _valid_engine_input, _valid_telemetry, _valid_tire_input
from tests.test_telemetry_processor import _no_sleep


@pytest.fixture
def client() -> Iterator[TestClient]:
    pipeline = TelemetryPipeline(
        TelemetryProcessor(sleep=_no_sleep),
        AlertSystem(),
        OEMReporter(OEMConfig(simulated_latency_ms=0)),
    )
    app = FastAPI()
    app.include_router(create_predict_router())
    app.include_router(create_telemetry_router(pipeline))
    with TestClient(app) as c:
        yield c


class TestTirePredictionRoute:
    def test_valid_input(self, client: TestClient) -> None:
        resp = client.post("/api/predict/tire", json=_valid_tire_input())
        assert resp.status_code == 200
        body = resp.json()
        assert 0 <= body["burstProbability"] <= 100
        assert body["criticalTemperatureThreshold"] == 105
        assert set(body["safeOperatingEnvelope"]) == {"maxSpeed", "maxLoad", "maxTemperature", "maxDuration"}
        assert set(body["maintenanceAlerts"]) == {"level70", "level85", "level95"}

    def test_missing_required_field(self, client: TestClient) -> None:
        raw = _valid_tire_input()
        del raw["materialProperties"]
        resp = client.post("/api/predict/tire", json=raw)
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "Missing required input parameters",
            "detail": ["materialProperties"],
        }

    def test_malformed_field(self, client: TestClient) -> None:
        raw = _valid_tire_input()
        raw["materialProperties"]["hardness"] = -1
        resp = client.post("/api/predict/tire", json=raw)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Malformed tire input"

    def test_empty_pressure_series(self, client: TestClient) -> None:
        resp = client.post("/api/predict/tire", json=_valid_tire_input(airPressureData=[]))
        assert resp.status_code == 422
        assert "airPressureData" in resp.json()["error"]

    def test_non_object_body(self, client: TestClient) -> None:
        resp = client.post("/api/predict/tire", json=[1, 2, 3])
        assert resp.status_code == 400


class TestEnginePredictionRoute:
    def test_valid_input(self, client: TestClient) -> None:
        resp = client.post("/api/predict/engine", json=_valid_engine_input())
        assert resp.status_code == 200
        body = resp.json()
        assert "oilSystem" in body["failureProbabilityHeatmap"]
        assert 0 <= body["remainingUsefulLife"]["hours"] <= 5000
        assert body["maintenancePriorities"][0]["recommendedAction"]
        assert body["sparePartsConsumptionForecast"] == []

    def test_missing_required_field(self, client: TestClient) -> None:
        raw = _valid_engine_input()
        del raw["thermalStressData"]
        resp = client.post("/api/predict/engine", json=raw)
        assert resp.status_code == 400
        assert resp.json()["detail"] == ["thermalStressData"]


class TestTelemetryRoute:
    def test_submit_then_insights(self, client: TestClient) -> None:
        resp = client.post("/api/telemetry", json=_valid_telemetry())
        assert resp.status_code == 200
        body = resp.json()
        assert body["processingTimeMs"] >= 0
        assert "burstProbability" in body["tirePrediction"]

        insights = client.get("/api/telemetry").json()
        assert insights["vehicleCount"] == 1
        assert insights["averageTireBurstProbability"] == pytest.approx(
            body["tirePrediction"]["burstProbability"]
        )

    def test_empty_fleet_insights(self, client: TestClient) -> None:
        resp = client.get("/api/telemetry")
        assert resp.status_code == 200
        assert resp.json() == {
            "averageTireBurstProbability": 0.0,
            "averageEngineRemainingLife": 0.0,
            "commonMaintenanceIssues": [],
            "vehicleCount": 0,
        }

    def test_missing_vehicle_id(self, client: TestClient) -> None:
        raw = _valid_telemetry()
        del raw["vehicleId"]
        resp = client.post("/api/telemetry", json=raw)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required telemetry data", "detail": ["vehicleId"]}

    def test_empty_temperature_series(self, client: TestClient) -> None:
        raw = _valid_telemetry(tireData=_valid_tire_input(temperatureData=[]))
        resp = client.post("/api/telemetry", json=raw)
        assert resp.status_code == 422
        assert client.get("/api/telemetry").json()["vehicleCount"] == 0

    def test_vehicles_counted_once(self, client: TestClient) -> None:
        for i in range(3):
            client.post("/api/telemetry", json=_valid_telemetry(timestamp=T0 + i))
        client.post("/api/telemetry", json=_valid_telemetry(vehicleId="truck-002"))
        assert client.get("/api/telemetry").json()["vehicleCount"] == 2
