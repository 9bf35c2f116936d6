"""
Forward kinematics for the 6-joint arm.

The model is deliberately coarse: only the base (q1), shoulder (q2) and
elbow (q3) move the end-effector.  The wrist joints q4..q6 orient the tool
but are not part of the position formula, so changing them never changes
the computed pose.

Functions:
    compute_pose: Map six joint angles to a 3-D end-effector position.
    pose_changed: Numerical inequality test used to gate notifications.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from arm_sim.utils.constants import LINK_LENGTHS, NUM_JOINTS
from arm_sim.utils.helpers import deg2rad


def _planar_reach(q2: float, q3: float, links: Sequence[float]) -> float:
    """Horizontal distance from the base axis to the wrist.

    Args:
        q2: Shoulder angle in radians.
        q3: Elbow angle in radians.
        links: Link lengths L1..L7.

    Returns:
        ``L2 + L3*cos(q2) + L4*cos(q2+q3)``.
    """
    _, l2, l3, l4 = links[:4]
    return l2 + l3 * np.cos(q2) + l4 * np.cos(q2 + q3)


def _height(q2: float, q3: float, links: Sequence[float]) -> float:
    """Vertical position of the tool tip above the base."""
    l1, _, l3, l4, l5, l6, l7 = links
    return l1 + l3 * np.sin(q2) + l4 * np.sin(q2 + q3) + l5 + l6 + l7


def compute_pose(
    angles_deg: Sequence[float], link_lengths: Sequence[float] = LINK_LENGTHS
) -> np.ndarray:
    """Compute the end-effector position from joint angles.

    Args:
        angles_deg: Six joint angles in degrees, base first.
        link_lengths: The seven link lengths L1..L7 in metres.

    Returns:
        NumPy array of shape ``(3,)`` with [x, y, z], y pointing up.

    Raises:
        ValueError: If *angles_deg* does not hold exactly six angles.
    """
    if len(angles_deg) != NUM_JOINTS:
        raise ValueError(f"Expected {NUM_JOINTS} joint angles, got {len(angles_deg)}")
    q1, q2, q3 = deg2rad(angles_deg)[:3]
    reach = _planar_reach(q2, q3, link_lengths)
    x = np.cos(q1) * reach
    y = _height(q2, q3, link_lengths)
    z = np.sin(q1) * reach
    return np.array([x, y, z], dtype=np.float64)


def pose_changed(old: np.ndarray, new: np.ndarray) -> bool:
    """Return True if *new* differs numerically from *old*."""
    return not np.allclose(old, new, rtol=1e-9, atol=1e-12)
