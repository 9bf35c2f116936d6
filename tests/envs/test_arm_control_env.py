import numpy as np
import pytest

from arm_sim.envs.arm_control import ArmControlEnv
from arm_sim.envs.configs import ArmEnvConfig
from arm_sim.envs.factory import make_sim_env
from arm_sim.robots.configs import ArmConfig
from arm_sim.utils.constants import ACTION, OBS_STATE


def _instant_env(**kwargs) -> ArmControlEnv:
    return ArmControlEnv(ArmEnvConfig(arm=ArmConfig(motion_duration=0.0), **kwargs))


def test_reset_observation():
    env = _instant_env()
    obs, info = env.reset(seed=0)
    state = obs["agent_pos"]
    assert state.shape == (11,)
    assert state.dtype == np.float32
    np.testing.assert_allclose(state[:7], np.zeros(7))
    np.testing.assert_allclose(state[7:10], [0.431, 0.196, 0.0], atol=1e-6)
    assert state[10] == 0.0
    assert info["status"] == "Ready"
    assert env.observation_space.contains(obs)


def test_action_space_matches_limits():
    env = _instant_env()
    np.testing.assert_array_equal(env.action_space.low, [-180, -90, -135, -180, -90, -180, 0])
    np.testing.assert_array_equal(env.action_space.high, [180, 90, 135, 180, 90, 180, 45])


def test_step_applies_targets():
    env = _instant_env()
    env.reset()
    obs, reward, terminated, truncated, info = env.step(
        np.array([0, -45, 90, 0, -45, 0, 30], dtype=np.float32)
    )
    np.testing.assert_allclose(obs["agent_pos"][:7], [0, -45, 90, 0, -45, 0, 30])
    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert not info["rejected"]


def test_unsafe_targets_rejected_as_a_whole():
    env = _instant_env()
    env.reset()
    env.step(np.array([10, 10, 10, 10, 10, 10, 0], dtype=np.float32))
    obs, _, _, _, info = env.step(np.array([20, 120, 20, 20, 20, 20, 100], dtype=np.float32))
    assert info["rejected"]
    np.testing.assert_allclose(obs["agent_pos"][:6], [10] * 6)
    # The gripper is clamped, never rejected.
    assert obs["agent_pos"][6] == 45


def test_collision_terminates_episode():
    env = _instant_env()
    env.reset()
    obs, reward, terminated, _, info = env.step(
        np.array([0, 75, -110, 0, 35, 0, 0], dtype=np.float32)
    )
    assert obs["agent_pos"][10] == 1.0
    assert reward == -1.0
    assert terminated
    assert info["status"] == "Collision"
    assert info["emergency_stops"] == 1


def test_collision_without_termination():
    env = _instant_env(terminate_on_collision=False)
    env.reset()
    _, reward, terminated, _, _ = env.step(np.array([0, 75, -110, 0, 35, 0, 0], dtype=np.float32))
    assert reward == -1.0
    assert not terminated


def test_smooth_motion_reports_position_reached():
    env = ArmControlEnv(ArmEnvConfig(fps=4, arm=ArmConfig(motion_duration=1.0)))
    env.reset()
    action = np.array([40, 0, 0, 0, 0, 0, 0], dtype=np.float32)
    reached = []
    for _ in range(4):
        _, _, _, _, info = env.step(action)
        reached.append(info["positions_reached"])
    assert reached == [0, 0, 0, 1]
    assert not info["is_moving"]


def test_truncation_at_episode_length():
    env = _instant_env(episode_length=3)
    env.reset()
    action = np.zeros(7, dtype=np.float32)
    results = [env.step(action)[3] for _ in range(3)]
    assert results == [False, False, True]


def test_reset_restores_home():
    env = _instant_env()
    env.reset()
    env.step(np.array([90, 0, -90, 90, 0, 0, 15], dtype=np.float32))
    obs, _ = env.reset()
    np.testing.assert_allclose(obs["agent_pos"][:7], np.zeros(7))


def test_sample_safe_action_is_always_accepted():
    env = _instant_env(terminate_on_collision=False)
    env.reset(seed=3)
    for _ in range(20):
        action = env.sample_safe_action()
        assert env.action_space.contains(action)
        assert not env.step(action)[4]["rejected"]


def test_config_features():
    cfg = ArmEnvConfig()
    assert cfg.features[ACTION].shape == (7,)
    assert cfg.features["agent_pos"].shape == (11,)
    assert cfg.features_map["agent_pos"] == OBS_STATE
    assert cfg.gym_kwargs == {"max_episode_steps": 300}
    with pytest.raises(ValueError):
        ArmEnvConfig(fps=0)


def test_make_sim_env():
    envs = make_sim_env(n_envs=2)
    vec = envs["ArmControl-Sim-v0"][0]
    obs, _ = vec.reset(seed=0)
    assert obs["agent_pos"].shape == (2, 11)
    vec.close()


def test_make_sim_env_uses_given_config():
    cfg = ArmEnvConfig(
        task="ArmControl-Test",
        terminate_on_collision=False,
        arm=ArmConfig(motion_duration=0.0),
    )
    envs = make_sim_env(cfg)
    vec = envs["ArmControl-Test"][0]
    vec.reset(seed=0)
    obs, *_ = vec.step(np.array([[0, 75, -110, 0, 35, 0, 0]], dtype=np.float32))
    assert obs["agent_pos"][0, 10] == 1.0
    vec.close()


def test_make_sim_env_rejects_zero_envs():
    with pytest.raises(ValueError):
        make_sim_env(n_envs=0)
