"""Pydantic models for vehicle specifications returned by the OEM."""

from __future__ import annotations

from pydantic import Field

from fleet_predict.domain.readings import Record


class EngineSpecification(Record):
    type: str
    displacement: float = Field(..., gt=0, description="Litres")
    power: float = Field(..., gt=0, description="hp")
    torque: float = Field(..., gt=0, description="Nm")


class TireSpecification(Record):
    size: str
    type: str
    pressure: float = Field(..., gt=0, description="Recommended pressure (kPa)")


class VehicleSpecifications(Record):
    vehicle_id: str = Field(..., min_length=1)
    make: str
    model: str
    year: int
    engine: EngineSpecification
    tires: TireSpecification
