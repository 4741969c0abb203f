"""OEM reporter — sends per-submission diagnostics to the manufacturer.

It also looks up vehicle specifications.  The real OEM API is out of
scope; the default transport and specification source simulate the
round trip.  Failures are logged and reported as False (or None for a
specification lookup) so the OEM can never fail telemetry processing.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fleet_predict.domain.errors import IntegrationError
from fleet_predict.models.diagnostic import DiagnosticPayload
from fleet_predict.models.vehicle import (
    EngineSpecification,
    TireSpecification,
    VehicleSpecifications,
)

logger = logging.getLogger(__name__)

Transport = Callable[[DiagnosticPayload], Awaitable[None]]
SpecificationSource = Callable[[str], Awaitable[VehicleSpecifications]]


@dataclass(frozen=True)
class OEMConfig:
    protocol: str = "HTTPS"
    version: str = "1.0"
    endpoint: str = "https://api.example-oem.com/diagnostics"
    simulated_latency_ms: float = 200.0


class OEMReporter:
    """Sends DiagnosticPayloads and fetches vehicle specifications.

    Args:
        config: Endpoint description.
        transport: Async callable that delivers a payload or raises.
            Defaults to a simulated transport that always succeeds.
        specification_source: Async callable returning a vehicle's
            specifications or raising.  Defaults to canned data.
    """

    def __init__(
        self,
        config: OEMConfig | None = None,
        transport: Transport | None = None,
        specification_source: SpecificationSource | None = None,
    ) -> None:
        self._config = config or OEMConfig()
        self._transport = transport or self._simulated_transport
        self._specification_source = specification_source or self._simulated_specifications
        self.sent_count: int = 0
        self.failed_count: int = 0

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    async def send_diagnostic(self, payload: DiagnosticPayload) -> bool:
        """Deliver *payload*.  Returns True on success, False on any failure."""
        logger.info(
            "[OEM API] Sending diagnostic data for vehicle %s to %s (%s/%s)",
            payload.vehicle_id,
            self._config.endpoint,
            self._config.protocol,
            self._config.version,
        )
        try:
            await self._transport(payload)
        except IntegrationError as exc:
            self.failed_count += 1
            logger.error("[OEM API] %s", exc)
            return False
        except Exception as exc:
            self.failed_count += 1
            logger.error(
                "[OEM API] Error sending diagnostic data for vehicle %s: %s",
                payload.vehicle_id,
                exc,
            )
            return False

        self.sent_count += 1
        return True

    async def _simulated_transport(self, payload: DiagnosticPayload) -> None:
        await asyncio.sleep(self._config.simulated_latency_ms / 1000.0)

    async def fetch_vehicle_specifications(self, vehicle_id: str) -> VehicleSpecifications | None:
        """Look up *vehicle_id* at the OEM.  Returns None on any failure."""
        logger.info(
            "[OEM API] Fetching specifications for vehicle %s from %s",
            vehicle_id,
            self._config.endpoint,
        )
        try:
            return await self._specification_source(vehicle_id)
        except IntegrationError as exc:
            logger.error("[OEM API] %s", exc)
        except Exception as exc:
            logger.error(
                "[OEM API] Error fetching specifications for vehicle %s: %s", vehicle_id, exc
            )
        return None

    async def _simulated_specifications(self, vehicle_id: str) -> VehicleSpecifications:
        await asyncio.sleep(self._config.simulated_latency_ms / 1000.0)
        return VehicleSpecifications(
            vehicle_id=vehicle_id,
            make="Example",
            model="TestVehicle",
            year=2023,
            engine=EngineSpecification(type="V6", displacement=3.5, power=280, torque=350),
            tires=TireSpecification(size="225/65R17", type="All Season", pressure=220),
        )
