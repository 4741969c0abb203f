"""Controlled enumerations for the fleet-predict domain.

Every categorical field in the domain MUST reference an enum defined here.
"""

from __future__ import annotations

from enum import Enum


class CompoundType(str, Enum):
    """Tire rubber compound family.  Drives critical-temperature thresholds."""

    NATURAL_RUBBER = "natural_rubber"
    SYNTHETIC_RUBBER = "synthetic_rubber"
    SILICA_COMPOUND = "silica_compound"
    OTHER = "other"


class HeatSourceKind(str, Enum):
    """Heat sources that sit close to a tire."""

    ENGINE = "engine"
    EMISSIONS = "emissions"
    EXHAUST = "exhaust"


class AlertType(str, Enum):
    """Subsystem an alert is about."""

    TIRE = "tire"
    ENGINE = "engine"
