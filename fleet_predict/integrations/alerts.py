"""Alert sink — fans a severity-gated alert out to the enabled channels.

Channels are simulated: each one logs the presentation it would use.
The sink never raises to its caller; a failing channel is logged and
the remaining channels still fire.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable

from fleet_predict.domain.enums import AlertType
from fleet_predict.domain.errors import IntegrationError
from fleet_predict.domain.telemetry import TelemetryResult
from fleet_predict.models.alert import AlertPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertConfig:
    visual: bool = True
    audio: bool = True
    haptic: bool = True
    threshold: float = 70.0  # 0–100
    history_size: int = 100


def _tiered(severity: float, high: str, medium: str, low: str) -> str:
    if severity >= 90:
        return high
    if severity >= 70:
        return medium
    return low


def visual_color(severity: float) -> str:
    return _tiered(severity, "red", "orange", "yellow")


def audio_volume(severity: float) -> str:
    return _tiered(severity, "high", "medium", "low")


def haptic_intensity(severity: float) -> str:
    return _tiered(severity, "strong", "medium", "light")


class AlertSystem:
    """Severity-gated alert dispatcher.

    Usage:
        alerts = AlertSystem(AlertConfig(threshold=70))
        alerts.trigger_alert(AlertPayload(alert_type="tire", severity=82, message="..."))
    """

    def __init__(self, config: AlertConfig | None = None) -> None:
        self._config = config or AlertConfig()
        self._recent: deque[AlertPayload] = deque(maxlen=self._config.history_size)
        self._channels: list[tuple[str, Callable[[AlertPayload], None]]] = []
        if self._config.visual:
            self._channels.append(("visual", self._visual))
        if self._config.audio:
            self._channels.append(("audio", self._audio))
        if self._config.haptic:
            self._channels.append(("haptic", self._haptic))

    @property
    def threshold(self) -> float:
        return self._config.threshold

    @property
    def recent_alerts(self) -> list[AlertPayload]:
        return list(self._recent)

    def trigger_alert(self, payload: AlertPayload) -> bool:
        """Dispatch *payload* if its severity reaches the threshold.

        Returns True if the alert fired.
        """
        if payload.severity < self._config.threshold:
            return False

        self._recent.append(payload)
        for name, channel in self._channels:
            try:
                channel(payload)
            except Exception as exc:
                err = IntegrationError(f"alert:{name}", str(exc))
                logger.error("%s", err)

        logger.warning(
            "[ALERT] %s - Severity: %.1f - %s",
            payload.alert_type.value.upper(),
            payload.severity,
            payload.message,
        )
        return True

    # ── Channels ─────────────────────────────────────────────────────────

    @staticmethod
    def _visual(payload: AlertPayload) -> None:
        logger.info(
            "[VISUAL ALERT] Displaying %s alert: %s", visual_color(payload.severity), payload.message
        )

    @staticmethod
    def _audio(payload: AlertPayload) -> None:
        logger.info("[AUDIO ALERT] Playing %s volume alert", audio_volume(payload.severity))

    @staticmethod
    def _haptic(payload: AlertPayload) -> None:
        logger.info(
            "[HAPTIC ALERT] Triggering %s haptic feedback", haptic_intensity(payload.severity)
        )


def build_alerts(result: TelemetryResult, threshold: float) -> list[AlertPayload]:
    """Alerts warranted by one telemetry result, tire first."""
    alerts: list[AlertPayload] = []

    burst = result.tire_prediction.burst_probability
    if burst >= threshold:
        alerts.append(AlertPayload(
            alert_type=AlertType.TIRE,
            severity=burst,
            message=f"Tire burst probability: {burst:.1f}%",
        ))

    engine = result.engine_prediction.max_failure_probability
    if engine >= threshold:
        alerts.append(AlertPayload(
            alert_type=AlertType.ENGINE,
            severity=engine,
            message=f"Engine failure probability: {engine:.1f}%",
        ))

    return alerts
