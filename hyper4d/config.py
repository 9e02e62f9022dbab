import json
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from .projection import ProjectionMode, ProjectionParams

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class KernelConfig:
    size: float = 2.0
    move_speed: float = 2.0             # units per second
    rotation_sensitivity: float = 0.01  # radians per input delta unit
    projection_mode: ProjectionMode = ProjectionMode.PARALLEL
    shear: float = 0.7
    focal_distance: float = 4.0
    singularity_epsilon: float = 1e-6
    reorthonormalize_every: int = 64
    drift_tolerance: float = 1e-9
    max_dt: float = 0.25

    def __post_init__(self):
        if isinstance(self.projection_mode, str):
            try:
                mode = ProjectionMode(self.projection_mode.lower())
            except ValueError:
                raise ConfigError(f"Unknown projection mode: {self.projection_mode!r}") from None
            object.__setattr__(self, "projection_mode", mode)

        for name in ("size", "move_speed", "rotation_sensitivity", "shear",
                     "focal_distance", "singularity_epsilon", "drift_tolerance", "max_dt"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value!r}")
        if self.size < 0:
            raise ConfigError("size must be non-negative")
        if self.move_speed < 0:
            raise ConfigError("move_speed must be non-negative")
        for name in ("rotation_sensitivity", "focal_distance", "singularity_epsilon",
                     "drift_tolerance", "max_dt"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")
        if isinstance(self.reorthonormalize_every, bool) or not isinstance(self.reorthonormalize_every, int) \
                or self.reorthonormalize_every < 1:
            raise ConfigError("reorthonormalize_every must be a positive integer")

    def projection_params(self) -> ProjectionParams:
        return ProjectionParams(self.shear, self.focal_distance, self.singularity_epsilon)

    def with_overrides(self, **overrides) -> "KernelConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def config_from_dict(data: Dict[str, Any]) -> KernelConfig:
    known = {f.name for f in fields(KernelConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    return KernelConfig(**data)


def load_config(filename: Optional[str] = None) -> KernelConfig:
    """
    Read a JSON config file and overlay it on the defaults.
    A missing file gives the defaults; a malformed one raises ConfigError.
    """
    if filename is None or not os.path.exists(filename):
        if filename is not None:
            logger.info("config file %s not found, using defaults", filename)
        return KernelConfig()

    with open(filename, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{filename}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{filename}: top level must be an object")
    return config_from_dict(data)
