"""
Heuristic collision detection for the 6-joint arm.

Collision is the logical OR of a list of named checks.  Each check is a
plain predicate over the joint angles (degrees) and the end-effector pose,
so new geometry can be registered without touching the aggregation.

Known issue: the second self-collision clause compares ``abs(j2) < -70``,
which can never be true.  It is kept as written and pinned by a
regression test until the intended threshold is confirmed.

Classes:
    CollisionCheck: A named collision predicate.
    CollisionDetector: Aggregates checks into a single boolean.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Sequence

import numpy as np

from arm_sim.utils.constants import WORKSPACE_RADIUS

CollisionPredicate = Callable[[Sequence[int], np.ndarray], bool]


@dataclass(frozen=True)
class CollisionCheck:
    """A named collision predicate.

    Attributes:
        name: Short identifier reported when the check fires.
        predicate: ``(angles, pose) -> bool``.
    """

    name: str
    predicate: CollisionPredicate


# ---------------------------------------------------------------------------
# Built-in checks
# ---------------------------------------------------------------------------


def check_self_collision(angles: Sequence[int], pose: np.ndarray) -> bool:
    """Flag joint combinations where the arm folds into itself.

    Args:
        angles: Six joint angles in degrees.
        pose: End-effector position (unused).

    Returns:
        True for a raised shoulder with a sharply bent elbow.
    """
    j1, j2, j3 = angles[0], angles[1], angles[2]
    if abs(j2) > 60 and abs(j3) > 100:
        return True
    if j1 != 0 and abs(j2) < -70:
        return True
    return False


def make_workspace_check(radius: float = WORKSPACE_RADIUS) -> CollisionPredicate:
    """Build a predicate that fires when the pose leaves a sphere of *radius*.

    Args:
        radius: Workspace radius in metres.

    Returns:
        Predicate returning True when ``||pose|| > radius``.
    """

    def check_workspace_limits(angles: Sequence[int], pose: np.ndarray) -> bool:
        return float(np.linalg.norm(pose)) > radius

    return check_workspace_limits


def check_base_collisions(angles: Sequence[int], pose: np.ndarray) -> bool:
    """Arm segments against the base. Not modelled yet."""
    return False


def check_arm_segment_collisions(angles: Sequence[int], pose: np.ndarray) -> bool:
    """Upper arm against forearm. Not modelled yet."""
    return False


def check_wrist_collisions(angles: Sequence[int], pose: np.ndarray) -> bool:
    """Wrist links against the forearm. Not modelled yet."""
    return False


def check_gripper_collisions(angles: Sequence[int], pose: np.ndarray) -> bool:
    """Gripper fingers against the rest of the arm. Not modelled yet."""
    return False


def default_checks(workspace_radius: float = WORKSPACE_RADIUS) -> List[CollisionCheck]:
    """Return the standard six collision checks in evaluation order."""
    return [
        CollisionCheck("self_collision", check_self_collision),
        CollisionCheck("workspace_limits", make_workspace_check(workspace_radius)),
        CollisionCheck("base", check_base_collisions),
        CollisionCheck("arm_segment", check_arm_segment_collisions),
        CollisionCheck("wrist", check_wrist_collisions),
        CollisionCheck("gripper", check_gripper_collisions),
    ]


@dataclass
class CollisionDetector:
    """OR-aggregates a list of ``CollisionCheck`` predicates.

    Attributes:
        checks: Registered checks, evaluated in order.
    """

    checks: List[CollisionCheck] = field(default_factory=default_checks)

    @classmethod
    def with_radius(cls, workspace_radius: float) -> CollisionDetector:
        """Create a detector with the default checks and a custom radius."""
        return cls(checks=default_checks(workspace_radius))

    def add_check(self, name: str, predicate: CollisionPredicate) -> None:
        """Register an extra collision predicate.

        Args:
            name: Identifier reported by ``firing_checks``.
            predicate: ``(angles, pose) -> bool``.

        Raises:
            ValueError: If a check with the same name already exists.
        """
        if any(c.name == name for c in self.checks):
            raise ValueError(f"Collision check '{name}' already registered")
        self.checks.append(CollisionCheck(name, predicate))

    def firing_checks(self, angles: Sequence[int], pose: np.ndarray) -> List[str]:
        """Return the names of every check that currently fires."""
        return [c.name for c in self.checks if c.predicate(angles, pose)]

    def evaluate(self, angles: Sequence[int], pose: np.ndarray) -> bool:
        """Return True if any registered check fires.

        Args:
            angles: Six joint angles in degrees.
            pose: End-effector position [x, y, z].

        Returns:
            The OR of all checks.
        """
        return any(c.predicate(angles, pose) for c in self.checks)
