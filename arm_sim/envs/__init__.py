"""
Gymnasium-compatible simulation environment.

Provides the arm control task, which drives ``ArmState`` with absolute
joint targets and reports pose and collision status.
"""

from arm_sim.envs.arm_control import ArmControlEnv
from arm_sim.envs.configs import ArmEnvConfig
from arm_sim.envs.factory import make_sim_env

__all__ = [
    "ArmControlEnv",
    "ArmEnvConfig",
    "make_sim_env",
]
