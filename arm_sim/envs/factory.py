"""
Vectorised construction of ``ArmControlEnv``.

Functions:
    make_sim_env: Wrap one or more arm environments in a Gymnasium ``VectorEnv``.
"""

from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym

from arm_sim.envs.arm_control import ArmControlEnv
from arm_sim.envs.configs import ArmEnvConfig


def make_sim_env(
    cfg: Optional[ArmEnvConfig] = None,
    n_envs: int = 1,
    use_async_envs: bool = False,
) -> Dict[str, Dict[int, gym.vector.VectorEnv]]:
    """Create *n_envs* copies of the arm environment behind one ``VectorEnv``.

    Each copy owns its own ``ArmState``; the copies share *cfg*, which is
    never mutated by the environments.

    Args:
        cfg: Environment configuration; defaults to ``ArmEnvConfig()``.
        n_envs: Number of parallel environments.
        use_async_envs: Run each copy in a subprocess (``AsyncVectorEnv``).

    Returns:
        ``{cfg.task: {0: VectorEnv}}``.

    Raises:
        ValueError: If *n_envs* is less than one.
    """
    if n_envs < 1:
        raise ValueError("`n_envs` must be at least 1")
    cfg = cfg or ArmEnvConfig()
    vector_cls = gym.vector.AsyncVectorEnv if use_async_envs else gym.vector.SyncVectorEnv
    vec = vector_cls([lambda: ArmControlEnv(cfg) for _ in range(n_envs)])
    return {cfg.task: {0: vec}}
