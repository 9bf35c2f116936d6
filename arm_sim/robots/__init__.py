"""
Joint motion state model and kinematics/safety engine for a 6-joint arm.

Provides the interpolating value holders, joint-limit validation, forward
kinematics, heuristic collision detection, motion-state derivation and the
``ArmState`` orchestrator that wires them together.
"""

from arm_sim.robots.arm_state import ArmConfiguration, ArmState
from arm_sim.robots.configs import ArmConfig

__all__ = ["ArmConfig", "ArmConfiguration", "ArmState"]
