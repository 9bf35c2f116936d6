"""
Static configuration injected into ``ArmState`` at construction.

Classes:
    ArmConfig: Joint limits, gripper range, link lengths and timing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from arm_sim.utils.constants import (
    DEFAULT_MOTION_DURATION,
    GRIPPER_MAX,
    GRIPPER_MIN,
    JOINT_LIMITS,
    LINK_LENGTHS,
    NUM_JOINTS,
    WORKSPACE_RADIUS,
    JointLimits,
)


@dataclass(frozen=True)
class ArmConfig:
    """Immutable description of the arm's physical envelope.

    Attributes:
        joint_limits: One ``JointLimits`` per joint, base first.
        gripper_range: Inclusive (min, max) gripper opening in degrees.
        link_lengths: The seven link lengths L1..L7 in metres.
        workspace_radius: Maximum end-effector distance from the origin.
        motion_duration: Seconds a joint takes to reach a new target.
    """

    joint_limits: Tuple[JointLimits, ...] = JOINT_LIMITS
    gripper_range: Tuple[int, int] = (GRIPPER_MIN, GRIPPER_MAX)
    link_lengths: Tuple[float, ...] = LINK_LENGTHS
    workspace_radius: float = WORKSPACE_RADIUS
    motion_duration: float = DEFAULT_MOTION_DURATION

    def __post_init__(self) -> None:
        """Reject tables that do not describe a 6-joint, 7-link arm."""
        if len(self.joint_limits) != NUM_JOINTS:
            raise ValueError(
                f"Expected {NUM_JOINTS} joint limits, got {len(self.joint_limits)}"
            )
        if len(self.link_lengths) != 7:
            raise ValueError(f"Expected 7 link lengths, got {len(self.link_lengths)}")
        if self.gripper_range[0] > self.gripper_range[1]:
            raise ValueError(f"Invalid gripper range {self.gripper_range}")
        if self.motion_duration < 0:
            raise ValueError("`motion_duration` must be non-negative")
