import numpy as np
import pytest

from arm_sim.robots.kinematics import compute_pose, pose_changed


def test_zero_pose():
    pose = compute_pose((0, 0, 0, 0, 0, 0))
    # x = L2 + L3 + L4, y = L1 + L5 + L6 + L7
    np.testing.assert_allclose(pose, [0.431, 0.196, 0.0], atol=1e-12)


def test_wrist_joints_do_not_move_the_end_effector():
    # Known modelling limitation: only q1..q3 appear in the position formula.
    base = compute_pose((30, -20, 45, 0, 0, 0))
    for wrist in [(90, 0, 0), (0, -90, 0), (0, 0, 180), (-180, 45, -45)]:
        np.testing.assert_array_equal(compute_pose((30, -20, 45) + wrist), base)


def test_pick_pose():
    pose = compute_pose((0, -45, 90, 0, -45, 0))
    c = np.cos(np.radians(45))
    reach = 0.173 + 0.089 * c + 0.169 * c
    height = 0.084 - 0.089 * c + 0.169 * c + 0.112
    np.testing.assert_allclose(pose, [reach, height, 0.0], atol=1e-12)


def test_base_rotation_swings_reach_into_z():
    pose = compute_pose((90, 0, 0, 0, 0, 0))
    np.testing.assert_allclose(pose, [0.0, 0.196, 0.431], atol=1e-12)


def test_shoulder_up_raises_height():
    pose = compute_pose((0, 90, 0, 0, 0, 0))
    np.testing.assert_allclose(pose, [0.173, 0.084 + 0.089 + 0.169 + 0.112, 0.0], atol=1e-12)


def test_rejects_wrong_number_of_angles():
    with pytest.raises(ValueError):
        compute_pose((0, 0, 0))


def test_custom_link_lengths():
    pose = compute_pose((0, 0, 0, 0, 0, 0), link_lengths=(1, 1, 1, 1, 0, 0, 0))
    np.testing.assert_allclose(pose, [3.0, 1.0, 0.0])


def test_pose_changed():
    a = np.array([0.431, 0.196, 0.0])
    assert not pose_changed(a, a.copy())
    assert pose_changed(a, a + np.array([0.0, 1e-6, 0.0]))
