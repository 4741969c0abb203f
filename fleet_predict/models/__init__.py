from fleet_predict.models.alert import AlertPayload
from fleet_predict.models.diagnostic import DiagnosticPayload
from fleet_predict.models.vehicle import (
    EngineSpecification,
    TireSpecification,
    VehicleSpecifications,
)

__all__ = [
    "AlertPayload",
    "DiagnosticPayload",
    "EngineSpecification",
    "TireSpecification",
    "VehicleSpecifications",
]
