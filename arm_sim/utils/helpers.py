"""
Small stateless helpers used across the arm_sim package.

Provides numerical clamping and degree/radian conversion for joint
vectors.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to the closed interval [*lo*, *hi*].

    Args:
        value: The scalar to clamp.
        lo: Lower bound (inclusive).
        hi: Upper bound (inclusive).

    Returns:
        The clamped scalar.
    """
    return max(lo, min(hi, value))


def deg2rad(angles_deg: Sequence[float]) -> np.ndarray:
    """Convert a sequence of angles in degrees to a radian array.

    Args:
        angles_deg: Angles in degrees.

    Returns:
        Float64 NumPy array of the same length, in radians.
    """
    return np.radians(np.asarray(angles_deg, dtype=np.float64))
