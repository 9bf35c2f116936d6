"""
Dataclass configuration for the arm control environment.

Classes:
    ArmEnvConfig: Episode, timing and arm settings for ``ArmControlEnv``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from arm_sim.robots.configs import ArmConfig
from arm_sim.utils.constants import (
    ACTION,
    DEFAULT_FPS,
    FeatureType,
    NUM_JOINTS,
    OBS_STATE,
    PolicyFeature,
)


@dataclass
class ArmEnvConfig:
    """Configuration for the arm control environment.

    The agent sends absolute joint and gripper targets each step; the arm
    interpolates toward them and reports pose and collision status.

    Attributes:
        task: Environment identifier, also used as the suite name.
        fps: Simulation frames per second.
        episode_length: Maximum steps per episode.
        seed: Random seed for reproducibility.
        action_dim: Six joint targets plus the gripper target.
        state_dim: Joints (6), gripper (1), end-effector xyz (3), collision (1).
        terminate_on_collision: End the episode as soon as a collision fires.
        arm: Physical description of the arm.
        features: Mapping of feature key to ``PolicyFeature`` metadata.
        features_map: Mapping of raw env keys to standard keys.
    """

    task: str = "ArmControl-Sim-v0"
    fps: int = DEFAULT_FPS
    episode_length: int = 300
    seed: int = 42
    action_dim: int = NUM_JOINTS + 1
    state_dim: int = NUM_JOINTS + 5
    terminate_on_collision: bool = True
    arm: ArmConfig = field(default_factory=ArmConfig)
    features: Dict[str, PolicyFeature] = field(default_factory=dict)
    features_map: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate timing and populate ``features`` and ``features_map``."""
        if self.fps <= 0:
            raise ValueError("`fps` must be positive")
        self.features[ACTION] = PolicyFeature(
            type=FeatureType.ACTION, shape=(self.action_dim,)
        )
        self.features["agent_pos"] = PolicyFeature(
            type=FeatureType.STATE, shape=(self.state_dim,)
        )
        self.features_map[ACTION] = ACTION
        self.features_map["agent_pos"] = OBS_STATE

    @property
    def gym_kwargs(self) -> dict:
        """Keyword arguments for registering the env with Gymnasium."""
        return {"max_episode_steps": self.episode_length}
