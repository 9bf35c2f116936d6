"""
Idle/moving derivation for the arm.

Classes:
    MotionStateMachine: Tracks the moving flag and detects arrival.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from arm_sim.utils.constants import (
    STATUS_COLLISION,
    STATUS_MOVING,
    STATUS_READY,
    MotionStatus,
)


@dataclass
class MotionStateMachine:
    """Two-state machine (``IDLE``/``MOVING``) driven by holder running flags.

    Collision is not a motion state; it only overrides the reported
    status.

    Attributes:
        is_moving: True while at least one value holder is interpolating.
    """

    is_moving: bool = False

    def update(self, running_flags: Iterable[bool]) -> bool:
        """Re-derive ``is_moving`` from the holders' running flags.

        Args:
            running_flags: One flag per value holder (joints and gripper).

        Returns:
            True only on the ``MOVING -> IDLE`` transition.
        """
        was_moving = self.is_moving
        self.is_moving = any(running_flags)
        return was_moving and not self.is_moving

    def status(self, collision: bool) -> MotionStatus:
        """Return the prioritised status: collision, then moving, then idle."""
        if collision:
            return MotionStatus.COLLISION
        if self.is_moving:
            return MotionStatus.MOVING
        return MotionStatus.IDLE

    def status_text(self, collision: bool) -> str:
        """Human-readable form of ``status``."""
        return {
            MotionStatus.COLLISION: STATUS_COLLISION,
            MotionStatus.MOVING: STATUS_MOVING,
            MotionStatus.IDLE: STATUS_READY,
        }[self.status(collision)]
