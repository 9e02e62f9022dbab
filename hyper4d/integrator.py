"""
Per-frame update of the observer position and orientation.

Local basis vectors are the columns of the orientation matrix:
right is column 0, forward is -column 2 (looking down -z), ana is column 3.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

import numpy as np

from .config import KernelConfig
from .rotation import Orientation, elementary_rotation

logger = logging.getLogger(__name__)


class Intent(Enum):
    MOVE_FORWARD = "move_forward"
    MOVE_BACK = "move_back"
    STRAFE_LEFT = "strafe_left"
    STRAFE_RIGHT = "strafe_right"
    MOVE_ANA = "move_ana"
    MOVE_KATA = "move_kata"


class PlanePair(Enum):
    # (horizontal plane, vertical plane)
    SPATIAL = ((0, 1), (0, 2))  # XY, XZ
    HYPER = ((0, 3), (1, 3))    # XW, YW


# (local axis, sign) per intent
_MOVES = {
    Intent.MOVE_FORWARD: (2, -1.0),
    Intent.MOVE_BACK: (2, 1.0),
    Intent.STRAFE_LEFT: (0, -1.0),
    Intent.STRAFE_RIGHT: (0, 1.0),
    Intent.MOVE_ANA: (3, 1.0),
    Intent.MOVE_KATA: (3, -1.0),
}


@dataclass(frozen=True)
class RotationInput:
    horizontal: float = 0.0
    vertical: float = 0.0
    planes: PlanePair = PlanePair.SPATIAL

    @property
    def is_zero(self) -> bool:
        return self.horizontal == 0 and self.vertical == 0


@dataclass(frozen=True, eq=False)
class FrameState:
    observer: np.ndarray = field(default_factory=lambda: np.zeros(4))
    orientation: Orientation = field(default_factory=Orientation.identity)

    def __post_init__(self):
        pos = np.array(self.observer, dtype=float).reshape(4)
        pos.setflags(write=False)
        object.__setattr__(self, "observer", pos)

    @classmethod
    def initial(cls, config: KernelConfig = KernelConfig()) -> "FrameState":
        return cls(np.zeros(4), Orientation.identity(config.reorthonormalize_every,
                                                      config.drift_tolerance))

    def reset_orientation(self) -> "FrameState":
        return FrameState(self.observer, self.orientation.reset())


def movement_direction(orientation: Orientation, intents: Iterable[Intent]) -> np.ndarray:
    """Unit world-space direction for the active intents, or zero."""
    direction = np.zeros(4)
    for intent in set(intents):
        axis, sign = _MOVES[intent]
        direction += sign * orientation.basis(axis)
    norm = np.linalg.norm(direction)
    if norm < 1e-12:
        return np.zeros(4)
    return direction / norm


def rotation_increments(rotation: RotationInput, h_angle: float, v_angle: float):
    """Horizontal increment first, then vertical."""
    (ha, hb), (va, vb) = rotation.planes.value
    return (elementary_rotation(ha, hb, h_angle),
            elementary_rotation(va, vb, v_angle))


def clamp_dt(dt: float, config: KernelConfig = KernelConfig()) -> Optional[float]:
    """dt limited to max_dt, or None when it is negative or not finite."""
    if not math.isfinite(dt) or dt < 0:
        return None
    if dt > config.max_dt:
        logger.debug("clamping dt %.3f to %.3f", dt, config.max_dt)
        return config.max_dt
    return dt


def advance(state: FrameState, dt: float, intents: Iterable[Intent] = (),
            rotation: Optional[RotationInput] = None,
            config: KernelConfig = KernelConfig()) -> FrameState:
    orientation = state.orientation
    if rotation is not None and not rotation.is_zero:
        h_angle = rotation.horizontal * config.rotation_sensitivity
        v_angle = rotation.vertical * config.rotation_sensitivity
        if math.isfinite(h_angle) and math.isfinite(v_angle):
            orientation = orientation.fold(*rotation_increments(rotation, h_angle, v_angle))
        else:
            logger.warning("dropping non-finite rotation input %r", rotation)

    observer = state.observer
    step = clamp_dt(dt, config)
    if step is None:
        logger.warning("dropping movement for invalid dt %r", dt)
    else:
        direction = movement_direction(orientation, intents)
        observer = observer + direction * (config.move_speed * step)

    if orientation is state.orientation and observer is state.observer:
        return state
    return FrameState(observer, orientation)
