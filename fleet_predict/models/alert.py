"""Pydantic model for alerts handed to the alert sink."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from fleet_predict.domain.enums import AlertType
from fleet_predict.domain.readings import Record
from fleet_predict.foundation.clock import utc_now
from fleet_predict.foundation.identifiers import new_id


class AlertPayload(Record):
    """A single alert.  Carries only what the sink actually consumes."""

    alert_id: UUID = Field(default_factory=new_id)
    alert_type: AlertType
    severity: float = Field(..., ge=0.0, le=100.0)
    message: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
