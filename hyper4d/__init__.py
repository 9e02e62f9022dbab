from .shapes import Shape4D, generate_vertices, generate_edges, edge_axes, load_shape
from .rotation import (
    Orientation,
    apply,
    compose,
    elementary_rotation,
    identity,
    orthonormality_error,
    orthonormalize,
)
from .projection import ProjectionMode, ProjectionParams, project, project_edges
from .config import ConfigError, KernelConfig, load_config
from .integrator import FrameState, Intent, PlanePair, RotationInput, advance

__version__ = "0.1.0"

__all__ = [
    "Shape4D", "generate_vertices", "generate_edges", "edge_axes", "load_shape",
    "Orientation", "apply", "compose", "elementary_rotation", "identity",
    "orthonormality_error", "orthonormalize",
    "ProjectionMode", "ProjectionParams", "project", "project_edges",
    "ConfigError", "KernelConfig", "load_config",
    "FrameState", "Intent", "PlanePair", "RotationInput", "advance",
]
