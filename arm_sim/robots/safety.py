"""
Joint-limit validation for proposed arm configurations.

Classes:
    SafetyValidator: Pure checks against a static joint-limit table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from arm_sim.utils.constants import (
    GRIPPER_MAX,
    GRIPPER_MIN,
    JOINT_LIMITS,
    JointLimits,
)
from arm_sim.utils.helpers import clamp


@dataclass(frozen=True)
class SafetyValidator:
    """Gatekeeper for joint commands.

    Whole-arm moves are accepted only if every joint is in range; single
    joints are checked one at a time by the caller.  The gripper is never
    rejected, only clamped.

    Attributes:
        joint_limits: One ``JointLimits`` per joint.
        gripper_range: Inclusive (min, max) gripper opening in degrees.
    """

    joint_limits: Tuple[JointLimits, ...] = JOINT_LIMITS
    gripper_range: Tuple[int, int] = (GRIPPER_MIN, GRIPPER_MAX)

    def is_within_limits(self, joint_index: int, angle: float) -> bool:
        """Return True if *angle* is allowed for joint *joint_index*.

        An index outside ``[0, num_joints)`` is never within limits.

        Args:
            joint_index: Zero-based joint index (0 = base).
            angle: Requested angle in degrees.

        Returns:
            Whether the angle lies inside the joint's closed interval.
        """
        if joint_index < 0 or joint_index >= len(self.joint_limits):
            return False
        return self.joint_limits[joint_index].contains(angle)

    def is_configuration_safe(self, angles: Sequence[float]) -> bool:
        """Return True if every joint angle in *angles* is within limits.

        Args:
            angles: One angle per joint, base first.

        Returns:
            False if any joint is out of range or the length is wrong.
        """
        if len(angles) != len(self.joint_limits):
            return False
        return all(self.is_within_limits(i, a) for i, a in enumerate(angles))

    def clamp_gripper(self, angle: int) -> int:
        """Saturate a gripper request into ``gripper_range``."""
        lo, hi = self.gripper_range
        return int(clamp(angle, lo, hi))
