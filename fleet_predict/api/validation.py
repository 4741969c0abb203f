"""Boundary validation for raw JSON bodies.

Routes accept raw dicts so that a missing top-level field is reported the
same way the producer-facing contract documents it (HTTP 400), rather
than as FastAPI's generic 422.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from fleet_predict.domain.errors import ValidationError

M = TypeVar("M", bound=BaseModel)


def require_fields(raw: Any, fields: tuple[str, ...], what: str) -> None:
    """Fail fast if *raw* is not an object or a required field is absent or blank."""
    if not isinstance(raw, dict):
        raise ValidationError(f"Missing required {what}")
    missing = [name for name in fields if raw.get(name) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required {what}", missing=missing)


def parse_body(model: type[M], raw: dict[str, Any], what: str) -> M:
    """Validate *raw* against *model*, translating schema errors to ValidationError."""
    try:
        return model.model_validate(raw)
    except SchemaValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ValidationError(f"Malformed {what}", missing=fields) from exc
