"""
Reactive state model for a 6-joint arm with a gripper.

``ArmState`` owns one ``AnimatedValue`` per joint plus one for the
gripper, and keeps the derived end-effector pose, collision flag, moving
flag and status text in sync with them.  Every change of a value holder
funnels into a single dispatcher that re-runs kinematics, collision
detection, motion-state and status derivation in that order; each stage
only notifies when its own output actually changed.

Classes:
    ArmConfiguration: Immutable snapshot of six joint angles and the gripper.
    ArmState: The orchestrator exposing setters, presets and Qt signals.
"""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from functools import partial
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from PyQt6.QtCore import QObject, pyqtSignal

from arm_sim.robots.animated_value import AnimatedValue
from arm_sim.robots.collision import CollisionDetector
from arm_sim.robots.configs import ArmConfig
from arm_sim.robots.kinematics import compute_pose, pose_changed
from arm_sim.robots.motion_state import MotionStateMachine
from arm_sim.robots.safety import SafetyValidator
from arm_sim.utils.constants import NUM_JOINTS, PRESETS, JointLimits, MotionStatus

logger = logging.getLogger(__name__)

# Index used for the gripper when dispatching holder changes.
GRIPPER_INDEX: int = NUM_JOINTS


@dataclass(frozen=True)
class ArmConfiguration:
    """Six joint angles plus the gripper angle, all in whole degrees.

    Attributes:
        joints: Joint angles, base first.
        gripper: Gripper opening.
    """

    joints: Tuple[int, ...]
    gripper: int = 0

    @classmethod
    def preset(cls, name: str) -> ArmConfiguration:
        """Look up a named configuration (``home``, ``pick``, ``rest``, ``service``).

        Raises:
            KeyError: If *name* is not a known preset.
        """
        if name not in PRESETS:
            raise KeyError(f"Unknown preset '{name}'. Choose from {list(PRESETS)}")
        joints, gripper = PRESETS[name]
        return cls(joints=tuple(joints), gripper=gripper)


class ArmState(QObject):
    """Joint/gripper value holders plus the state derived from them.

    Requests are handled by policy rather than by raising: an out-of-range
    single joint is ignored, an unsafe whole-arm move is rejected as a
    unit, and the gripper is clamped into range.

    An arm constructed inside a colliding configuration starts with
    ``has_collision`` already True; no onset notification or
    ``emergency_stop`` is emitted for that initial state.

    ``emergency_stop`` may be connected straight to ``stop_all_motion``:
    a stop requested while the signal is being delivered halts the holders
    without emitting it a second time.

    Signals:
        joint_angle_changed(int, int): Joint index and its new angle.
        gripper_angle_changed(int): New gripper angle.
        end_effector_position_changed(object): New ``(3,)`` pose array.
        has_collision_changed(bool): Collision flag flipped.
        is_moving_changed(bool): Moving flag flipped.
        status_changed(str): Status text changed.
        emergency_stop(): Collision onset or an explicit stop request.
        position_reached(): All holders came to rest after moving.
    """

    joint_angle_changed = pyqtSignal(int, int)
    gripper_angle_changed = pyqtSignal(int)
    end_effector_position_changed = pyqtSignal(object)
    has_collision_changed = pyqtSignal(bool)
    is_moving_changed = pyqtSignal(bool)
    status_changed = pyqtSignal(str)
    emergency_stop = pyqtSignal()
    position_reached = pyqtSignal()

    def __init__(
        self, config: ArmConfig | None = None, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._config = config or ArmConfig()
        self._validator = SafetyValidator(
            joint_limits=self._config.joint_limits,
            gripper_range=self._config.gripper_range,
        )
        self._detector = CollisionDetector.with_radius(self._config.workspace_radius)
        self._motion = MotionStateMachine()
        self._joints: List[AnimatedValue] = [
            AnimatedValue(0, self._config.motion_duration, self)
            for _ in range(NUM_JOINTS)
        ]
        self._gripper = AnimatedValue(
            self._config.gripper_range[0], self._config.motion_duration, self
        )
        self._cascading = False
        self._pending = False
        self._emitting_stop = False
        self._connect_holders()
        self._init_derived()

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _connect_holders(self) -> None:
        """Route every holder notification into the single dispatcher."""
        for index, holder in enumerate(self._joints):
            holder.value_changed.connect(partial(self._on_joint_value, index))
            holder.running_changed.connect(partial(self._on_running, index))
        self._gripper.value_changed.connect(self._on_gripper_value)
        self._gripper.running_changed.connect(partial(self._on_running, GRIPPER_INDEX))

    def _init_derived(self) -> None:
        """Compute the derived fields for the initial pose without notifying."""
        self._pose = compute_pose(self.joint_angles, self._config.link_lengths)
        self._collision = self._detector.evaluate(self.joint_angles, self._pose)
        self._motion.update(self._running_flags())
        self._status = self._motion.status_text(self._collision)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> ArmConfig:
        return self._config

    @property
    def validator(self) -> SafetyValidator:
        return self._validator

    @property
    def collision_detector(self) -> CollisionDetector:
        """The detector whose checks are evaluated on every change."""
        return self._detector

    @property
    def joint_limits(self) -> Tuple[JointLimits, ...]:
        return self._config.joint_limits

    @property
    def workspace_radius(self) -> float:
        return self._config.workspace_radius

    @property
    def joint_angles(self) -> Tuple[int, ...]:
        """Current angle of every joint, base first."""
        return tuple(holder.value for holder in self._joints)

    def joint_angle(self, index: int) -> int:
        """Current angle of joint *index*.

        Raises:
            IndexError: If *index* is not a joint.
        """
        return self._joints[index].value

    @property
    def gripper_angle(self) -> int:
        return self._gripper.value

    @property
    def configuration(self) -> ArmConfiguration:
        """Snapshot of the current joint and gripper angles."""
        return ArmConfiguration(joints=self.joint_angles, gripper=self.gripper_angle)

    @property
    def end_effector_position(self) -> np.ndarray:
        """Copy of the current ``(3,)`` end-effector position."""
        return self._pose.copy()

    @property
    def has_collision(self) -> bool:
        return self._collision

    @property
    def is_moving(self) -> bool:
        return self._motion.is_moving

    @property
    def status(self) -> str:
        """``"Collision"``, ``"Moving"`` or ``"Ready"``."""
        return self._status

    @property
    def motion_status(self) -> MotionStatus:
        return self._motion.status(self._collision)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_joint_angle(
        self, index: int, angle: int, duration: Optional[float] = None
    ) -> None:
        """Retarget joint *index* to *angle* if the angle is within limits.

        Out-of-range angles and unknown indices are ignored.

        Args:
            index: Zero-based joint index (0 = base).
            angle: Target angle in degrees.
            duration: Interpolation time; defaults to ``config.motion_duration``.
        """
        if not self._validator.is_within_limits(index, angle):
            logger.debug("Ignoring joint %s request %s: outside limits", index, angle)
            return
        self._joints[index].retarget(int(round(angle)), duration)

    def set_gripper_angle(self, angle: int, duration: Optional[float] = None) -> None:
        """Clamp *angle* into the gripper range and apply it."""
        self._gripper.retarget(self._validator.clamp_gripper(angle), duration)

    def set_all_joints(
        self, angles: Sequence[int], duration: Optional[float] = None
    ) -> None:
        """Retarget all six joints at once, or none of them.

        Args:
            angles: Six target angles in degrees.
            duration: Interpolation time; defaults to ``config.motion_duration``.
        """
        if not self._validator.is_configuration_safe(angles):
            logger.debug("Rejecting unsafe configuration %s", tuple(angles))
            return
        with self._deferred_cascade():
            for index, angle in enumerate(angles):
                self._joints[index].retarget(int(round(angle)), duration)

    def set_joint_angles_smooth(
        self, angles: Sequence[int], duration: float = 2.0
    ) -> None:
        """Same as ``set_all_joints`` with an explicit interpolation time."""
        self.set_all_joints(angles, duration)

    def apply_configuration(
        self, target: ArmConfiguration, duration: Optional[float] = None
    ) -> None:
        """Move to *target*: joints all-or-nothing, gripper clamped."""
        with self._deferred_cascade():
            self.set_all_joints(target.joints, duration)
            self.set_gripper_angle(target.gripper, duration)

    def move_to(self, name: str) -> None:
        """Move to a named preset.

        Raises:
            KeyError: If *name* is not a known preset.
        """
        self.apply_configuration(ArmConfiguration.preset(name))

    def move_to_home(self) -> None:
        self.move_to("home")

    def move_to_pick_position(self) -> None:
        self.move_to("pick")

    def move_to_rest_position(self) -> None:
        self.move_to("rest")

    def move_to_service_position(self) -> None:
        self.move_to("service")

    def open_gripper(self) -> None:
        self.set_gripper_angle(self._config.gripper_range[1])

    def close_gripper(self) -> None:
        self.set_gripper_angle(self._config.gripper_range[0])

    def stop_all_motion(self) -> None:
        """Emergency stop: halt every holder in place and emit ``emergency_stop``.

        Best effort: holders are asked to stop, nothing waits on them.
        """
        logger.warning("Emergency stop requested at %s", self.joint_angles)
        with self._deferred_cascade():
            for holder in self._holders():
                holder.stop()
        self._emit_emergency_stop()

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def advance(self, dt: float) -> None:
        """Advance every value holder by *dt* seconds as one tick.

        Raises:
            ValueError: If *dt* is negative.
        """
        with self._deferred_cascade():
            for holder in self._holders():
                holder.advance(dt)

    def settle(self, dt: float = 0.05, max_time: float = 30.0) -> float:
        """Tick until no holder is moving or *max_time* has elapsed.

        Args:
            dt: Tick size in seconds.
            max_time: Upper bound on simulated time.

        Returns:
            Simulated seconds spent.
        """
        if dt <= 0:
            raise ValueError(f"`dt` must be positive, got {dt}")
        elapsed = 0.0
        while self.is_moving and elapsed < max_time:
            self.advance(dt)
            elapsed += dt
        return elapsed

    # ------------------------------------------------------------------
    # Change propagation
    # ------------------------------------------------------------------

    def _holders(self) -> Iterator[AnimatedValue]:
        yield from self._joints
        yield self._gripper

    def _running_flags(self) -> List[bool]:
        return [holder.is_running for holder in self._holders()]

    def _on_joint_value(self, index: int, value: int) -> None:
        self.joint_angle_changed.emit(index, value)
        self._on_joint_changed(index)

    def _on_gripper_value(self, value: int) -> None:
        self.gripper_angle_changed.emit(value)
        self._on_joint_changed(GRIPPER_INDEX)

    def _on_running(self, index: int, running: bool) -> None:
        self._on_joint_changed(index)

    @contextlib.contextmanager
    def _deferred_cascade(self) -> Iterator[None]:
        """Collapse every holder change made inside the block into one cascade."""
        if self._cascading:
            yield
            return
        self._cascading = True
        try:
            yield
        finally:
            self._cascading = False
        self._on_joint_changed(None)

    def _on_joint_changed(self, index: Optional[int]) -> None:
        """Single dispatcher for every holder change.

        Changes arriving while a cascade is already running (from a signal
        handler reacting to the cascade) are replayed once it finishes.
        """
        if self._cascading:
            self._pending = True
            return
        self._cascading = True
        try:
            self._pending = True
            while self._pending:
                self._pending = False
                self._run_cascade()
        finally:
            self._cascading = False

    def _run_cascade(self) -> None:
        """Kinematics, then collision, then motion state, then status."""
        self._update_pose()
        self._update_collision()
        self._update_motion()
        self._update_status()

    def _update_pose(self) -> None:
        new_pose = compute_pose(self.joint_angles, self._config.link_lengths)
        if pose_changed(self._pose, new_pose):
            self._pose = new_pose
            self.end_effector_position_changed.emit(new_pose.copy())

    def _update_collision(self) -> None:
        collision = self._detector.evaluate(self.joint_angles, self._pose)
        if collision == self._collision:
            return
        self._collision = collision
        self.has_collision_changed.emit(collision)
        if collision:
            logger.warning(
                "Collision detected (%s) at %s",
                ", ".join(self._detector.firing_checks(self.joint_angles, self._pose)),
                self.joint_angles,
            )
            self._emit_emergency_stop()
        else:
            logger.info("Collision cleared at %s", self.joint_angles)

    def _emit_emergency_stop(self) -> None:
        """Emit ``emergency_stop`` unless it is already being delivered."""
        if self._emitting_stop:
            return
        self._emitting_stop = True
        try:
            self.emergency_stop.emit()
        finally:
            self._emitting_stop = False

    def _update_motion(self) -> None:
        was_moving = self._motion.is_moving
        reached = self._motion.update(self._running_flags())
        if self._motion.is_moving != was_moving:
            self.is_moving_changed.emit(self._motion.is_moving)
        if reached:
            logger.debug("Position reached: %s", self.configuration)
            self.position_reached.emit()

    def _update_status(self) -> None:
        status = self._motion.status_text(self._collision)
        if status != self._status:
            self._status = status
            self.status_changed.emit(status)
