"""
Shared constants and type aliases for the arm_sim package.

Holds the static joint-limit table, link lengths used by forward
kinematics, gripper range, workspace radius and the status vocabulary
reported by ``ArmState``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Observation / action key names
# ---------------------------------------------------------------------------
ACTION: str = "action"
OBS_STATE: str = "observation.state"
DEFAULT_FPS: int = 30

# ---------------------------------------------------------------------------
# Joint layout (degrees)
# ---------------------------------------------------------------------------
NUM_JOINTS: int = 6
JOINT_NAMES: Tuple[str, ...] = (
    "base",
    "shoulder",
    "elbow",
    "wrist_roll",
    "wrist_pitch",
    "wrist_yaw",
)


@dataclass(frozen=True)
class JointLimits:
    """Closed angle interval a single joint may be commanded to.

    Attributes:
        min: Lower bound in degrees (inclusive).
        max: Upper bound in degrees (inclusive).
    """

    min: int
    max: int

    def contains(self, angle: float) -> bool:
        """Return True if *angle* lies inside ``[min, max]``."""
        return self.min <= angle <= self.max


JOINT_LIMITS: Tuple[JointLimits, ...] = (
    JointLimits(-180, 180),  # base rotation
    JointLimits(-90, 90),  # shoulder pitch
    JointLimits(-135, 135),  # elbow pitch
    JointLimits(-180, 180),  # wrist roll
    JointLimits(-90, 90),  # wrist pitch
    JointLimits(-180, 180),  # wrist yaw
)

GRIPPER_MIN: int = 0
GRIPPER_MAX: int = 45

# ---------------------------------------------------------------------------
# Kinematic model (metres)
# ---------------------------------------------------------------------------
# L1 base to shoulder height, L2 shoulder to elbow, L3 elbow forward offset,
# L4 elbow to wrist, L5/L6 wrist segments, L7 wrist to gripper.
LINK_LENGTHS: Tuple[float, ...] = (0.084, 0.173, 0.089, 0.169, 0.038, 0.038, 0.036)
WORKSPACE_RADIUS: float = 1.2

# Seconds a retargeted joint takes to reach its new angle.
DEFAULT_MOTION_DURATION: float = 1.0

# ---------------------------------------------------------------------------
# Named arm configurations: (six joint angles, gripper angle)
# ---------------------------------------------------------------------------
PRESETS: Dict[str, Tuple[Tuple[int, ...], int]] = {
    "home": ((0, 0, 0, 0, 0, 0), 0),
    "pick": ((0, -45, 90, 0, -45, 0), 30),
    "rest": ((0, 75, -110, 0, 35, 0), 0),
    "service": ((90, 0, -90, 90, 0, 0), 15),
}

# ---------------------------------------------------------------------------
# Status vocabulary
# ---------------------------------------------------------------------------
STATUS_COLLISION: str = "Collision"
STATUS_MOVING: str = "Moving"
STATUS_READY: str = "Ready"


class MotionStatus(Enum):
    """Overall arm status, in increasing priority order."""

    IDLE = "idle"
    MOVING = "moving"
    COLLISION = "collision"


class FeatureType(Enum):
    """Enumeration of observation feature types."""

    ACTION = "action"
    STATE = "state"


@dataclass(frozen=True)
class PolicyFeature:
    """Describes a single feature exposed by an environment.

    Attributes:
        type: The semantic category of the feature.
        shape: Tuple of integers describing the array shape (excluding batch).
    """

    type: FeatureType
    shape: Tuple[int, ...]
