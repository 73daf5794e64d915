"""Engine settings for DuctCalc.

Settings are the few tunables of the calculation engine.  They are kept in
a small JSON file; results themselves are never persisted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from ductcalc.utils.constants import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_RELATIVE_ROUGHNESS,
    DEFAULT_SOLVER_TOLERANCE,
)
from ductcalc.utils.validation import ValidationResult, validate_positive, validate_range

logger = logging.getLogger(__name__)


@dataclass
class EngineSettings:
    """Tunables of the propagation engine."""

    roughness: float = DEFAULT_RELATIVE_ROUGHNESS  # relative roughness ε
    max_iterations: int = DEFAULT_MAX_ITERATIONS  # diameter solver cap
    tolerance: float = DEFAULT_SOLVER_TOLERANCE  # diameter solver relative error
    default_condition: int = 0  # air condition loaded at start-up

    def validate(self) -> ValidationResult:
        result = ValidationResult()
        validate_positive("roughness", self.roughness, result)
        validate_positive("max_iterations", self.max_iterations, result)
        validate_positive("tolerance", self.tolerance, result)
        validate_range("default_condition", self.default_condition, 0, 4, result)
        return result


def load_settings_json(path: str | Path) -> EngineSettings:
    """Load engine settings from a JSON file.

    Keys missing from the file keep their defaults.

    Raises:
        ValueError: If the file has unknown keys or invalid values.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    known = {f.name for f in fields(EngineSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings in {path}: {', '.join(unknown)}")

    settings = EngineSettings(**data)
    result = settings.validate()
    if not result.is_valid:
        raise ValueError("; ".join(m.message for m in result.errors))

    logger.info("Loaded settings from %s", path)
    return settings


def save_settings_json(settings: EngineSettings, path: str | Path) -> None:
    """Write engine settings to a JSON file."""
    path = Path(path)
    with open(path, "w") as f:
        json.dump(asdict(settings), f, indent=2)
    logger.info("Saved settings to %s", path)
