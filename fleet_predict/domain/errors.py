"""Error taxonomy for the prediction pipeline.

    ValidationError        missing / malformed required input (HTTP 400)
    InsufficientDataError  a series needed for a defined answer is empty
    IntegrationError       alert sink / OEM failures, never fatal to a prediction

Scorers prefer a neutral score over raising.  InsufficientDataError is kept
for the few places where no neutral value exists (a latest temperature or
pressure reading).
"""

from __future__ import annotations


class PredictionError(Exception):
    """Base class for every error raised by fleet-predict."""


class ValidationError(PredictionError, ValueError):
    """Raised when required input fields are absent or malformed."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        self.missing = missing or []
        super().__init__(message)


class InsufficientDataError(PredictionError, ValueError):
    """Raised when a series is empty and no neutral fallback is defined."""

    def __init__(self, series: str) -> None:
        self.series = series
        super().__init__(f"at least one sample is required in '{series}'")


class IntegrationError(PredictionError):
    """Raised by downstream collaborators (alert sink, OEM reporter)."""

    def __init__(self, integration: str, reason: str) -> None:
        self.integration = integration
        self.reason = reason
        super().__init__(f"Integration '{integration}' failed: {reason}")
