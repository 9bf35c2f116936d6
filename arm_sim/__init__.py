"""
Arm control simulation.

A reactive control model for a 6-joint robotic arm with a gripper: it
tracks commanded joint angles, validates them against joint limits,
derives the end-effector position via forward kinematics, and raises
motion and collision status.

Modules:
    robots: Value holders, safety, kinematics, collision and ``ArmState``.
    envs: Gymnasium-compatible environment driving ``ArmState``.
    teleop: Keyboard joint jogging.
    utils: Shared constants and helper utilities.
"""

__version__ = "0.1.0"
