"""Design rule checking and input validation for DuctCalc."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ductcalc.utils.constants import (
    HIGH_VELOCITY_WARNING_FPM,
    MAX_DUCT_DIMENSION_IN,
    MAX_DUCT_VELOCITY_FPM,
    MIN_DUCT_DIMENSION_IN,
    MIN_DUCT_VELOCITY_FPM,
)


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)


# --- Common validators ---


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}")


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(severity, name, f"{name} = {value:g} is outside [{low:g}, {high:g}]")


def validate_duct_design(design: dict[str, float]) -> ValidationResult:
    """Run design-rule checks on a set of duct parameter values.

    Keys are the snapshot keys of the parameter table (``flow_rate``,
    ``velocity``, ``duct_x``, ``duct_y`` ...), values in imperial units.
    Missing keys are skipped.  Everything here is advisory, so findings are
    warnings rather than errors.
    """
    result = ValidationResult()

    flow = design.get("flow_rate")
    if flow is not None:
        validate_positive("flow_rate", flow, result)

    velocity = design.get("velocity")
    if velocity is not None:
        validate_range(
            "velocity",
            velocity,
            MIN_DUCT_VELOCITY_FPM,
            MAX_DUCT_VELOCITY_FPM,
            result,
            Severity.WARNING,
        )
        if HIGH_VELOCITY_WARNING_FPM < velocity <= MAX_DUCT_VELOCITY_FPM:
            result.warning(
                "velocity",
                f"Velocity {velocity:.0f} fpm exceeds {HIGH_VELOCITY_WARNING_FPM:.0f} fpm "
                "and may be noisy",
                value=velocity,
                limit=HIGH_VELOCITY_WARNING_FPM,
            )

    for side in ("duct_x", "duct_y"):
        size = design.get(side)
        if size is not None and size > 0:
            validate_range(
                side,
                size,
                MIN_DUCT_DIMENSION_IN,
                MAX_DUCT_DIMENSION_IN,
                result,
                Severity.WARNING,
            )

    return result
