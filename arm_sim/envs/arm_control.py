"""
Joint-target arm control environment (Gymnasium-compatible).

Each step sends absolute joint and gripper targets to an ``ArmState`` and
advances its value holders by one frame.  The observation exposes joint
angles, gripper, end-effector position and the collision flag.

Classes:
    ArmControlEnv: Gymnasium environment wrapping ``ArmState``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from arm_sim.envs.configs import ArmEnvConfig
from arm_sim.robots.arm_state import ArmState
from arm_sim.utils.constants import NUM_JOINTS


class ArmControlEnv(gym.Env):
    """Gymnasium environment driving a simulated 6-joint arm.

    Unsafe joint targets are rejected as a whole by the arm (the joints
    keep their previous targets) and reported through ``info["rejected"]``.
    A collision costs -1 reward per step and, when configured, terminates
    the episode.

    Attributes:
        metadata: Gymnasium metadata.
        cfg: ``ArmEnvConfig`` controlling fps, episode length and the arm.
    """

    metadata: Dict[str, Any] = {"render_modes": []}

    def __init__(self, cfg: ArmEnvConfig | None = None) -> None:
        """Initialise the arm control environment.

        Args:
            cfg: Optional configuration; a default ``ArmEnvConfig`` is used
                when *None*.
        """
        super().__init__()
        self.cfg = cfg or ArmEnvConfig()
        self._rng = np.random.default_rng(self.cfg.seed)
        self._step_count = 0
        self._build_arm()
        self._init_spaces()

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _build_arm(self) -> None:
        """Create a fresh ``ArmState`` and subscribe to its one-shot events."""
        self._arm = ArmState(self.cfg.arm)
        self._positions_reached = 0
        self._emergency_stops = 0
        self._arm.position_reached.connect(self._on_position_reached)
        self._arm.emergency_stop.connect(self._on_emergency_stop)

    def _init_spaces(self) -> None:
        """Define action and observation Gymnasium spaces."""
        limits = self.cfg.arm.joint_limits
        g_lo, g_hi = self.cfg.arm.gripper_range
        low = np.array([lim.min for lim in limits] + [g_lo], dtype=np.float32)
        high = np.array([lim.max for lim in limits] + [g_hi], dtype=np.float32)
        self.action_space = spaces.Box(low=low, high=high, dtype=np.float32)
        self.observation_space = spaces.Dict(
            {
                "agent_pos": spaces.Box(
                    low=-360.0,
                    high=360.0,
                    shape=(self.cfg.state_dim,),
                    dtype=np.float32,
                )
            }
        )

    def _on_position_reached(self) -> None:
        self._positions_reached += 1

    def _on_emergency_stop(self) -> None:
        self._emergency_stops += 1

    @property
    def arm(self) -> ArmState:
        """The arm driven by this environment."""
        return self._arm

    # ------------------------------------------------------------------
    # Gymnasium API
    # ------------------------------------------------------------------

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """Reset the environment and return the initial observation.

        Args:
            seed: Optional RNG seed.
            options: Unused; for Gymnasium compatibility.

        Returns:
            Tuple of (observation dict, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng = np.random.default_rng(seed)
        self._step_count = 0
        self._build_arm()
        return self._build_observation(), self._build_info(rejected=False)

    def _apply_action(self, action: np.ndarray) -> bool:
        """Send joint and gripper targets to the arm.

        Args:
            action: 7-D array of joint targets (6) + gripper target (1).

        Returns:
            True if the joint targets were rejected as unsafe.
        """
        targets = [int(round(float(a))) for a in action[:NUM_JOINTS]]
        rejected = not self._arm.validator.is_configuration_safe(targets)
        self._arm.set_all_joints(targets)
        if action.shape[0] > NUM_JOINTS:
            self._arm.set_gripper_angle(int(round(float(action[NUM_JOINTS]))))
        return rejected

    def step(
        self, action: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """Advance the environment by one frame.

        Args:
            action: 7-D array of absolute joint targets and gripper target.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action = np.asarray(action, dtype=np.float64)
        self._positions_reached = 0
        self._emergency_stops = 0
        rejected = self._apply_action(action)
        self._arm.advance(1.0 / self.cfg.fps)
        self._step_count += 1
        collision = self._arm.has_collision
        reward = -1.0 if collision else 0.0
        terminated = collision and self.cfg.terminate_on_collision
        truncated = self._step_count >= self.cfg.episode_length
        return (
            self._build_observation(),
            reward,
            terminated,
            truncated,
            self._build_info(rejected=rejected),
        )

    # ------------------------------------------------------------------
    # Observation builder
    # ------------------------------------------------------------------

    def _build_state_vector(self) -> np.ndarray:
        """Concatenate joints, gripper, end-effector xyz and collision flag.

        Returns:
            1-D float32 array of length ``state_dim``.
        """
        return np.concatenate(
            [
                np.asarray(self._arm.joint_angles, dtype=np.float64),
                [float(self._arm.gripper_angle)],
                self._arm.end_effector_position,
                [1.0 if self._arm.has_collision else 0.0],
            ]
        ).astype(np.float32)

    def _build_observation(self) -> Dict[str, np.ndarray]:
        """Assemble the observation dictionary."""
        return {"agent_pos": self._build_state_vector()}

    def _build_info(self, rejected: bool) -> Dict[str, Any]:
        """Collect status details for the current step."""
        return {
            "status": self._arm.status,
            "is_moving": self._arm.is_moving,
            "rejected": rejected,
            "positions_reached": self._positions_reached,
            "emergency_stops": self._emergency_stops,
        }

    def sample_safe_action(self) -> np.ndarray:
        """Draw a random in-limits action from the environment RNG.

        Returns:
            7-D float32 action of whole-degree targets.
        """
        low, high = self.action_space.low, self.action_space.high
        return np.round(self._rng.uniform(low, high)).astype(np.float32)
