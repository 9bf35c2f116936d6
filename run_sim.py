#!/usr/bin/env python3
"""
Main entry point for the arm control simulation.

Runs the arm through its preset configurations, drives it from the
keyboard, or steps the Gymnasium environment with random targets, printing
status transitions as they happen.

Usage examples::

    # Visit home, pick, rest and service in turn
    python run_sim.py --mode presets

    # Jog joints from the terminal (1-6/g select, w/s jog, h home, x stop)
    python run_sim.py --mode teleop

    # Step the Gymnasium environment with random safe targets
    python run_sim.py --mode env --steps 200
"""

from __future__ import annotations

import argparse
import logging

from arm_sim.envs.arm_control import ArmControlEnv
from arm_sim.envs.configs import ArmEnvConfig
from arm_sim.robots.arm_state import ArmState
from arm_sim.robots.configs import ArmConfig
from arm_sim.teleop.keyboard_teleop import KeyboardTeleop
from arm_sim.utils.constants import PRESETS

# ======================================================================
# Helpers
# ======================================================================


def _build_arm(args: argparse.Namespace) -> ArmState:
    """Create an ``ArmState`` that prints its one-shot events.

    Args:
        args: Parsed CLI arguments with ``duration``.

    Returns:
        A wired ``ArmState``.
    """
    arm = ArmState(ArmConfig(motion_duration=args.duration))
    arm.status_changed.connect(lambda text: print(f"  status -> {text}"))
    arm.emergency_stop.connect(lambda: print("  !! emergency stop"))
    arm.position_reached.connect(
        lambda: print(f"  reached {arm.joint_angles} pose={arm.end_effector_position.round(3)}")
    )
    return arm


# ======================================================================
# Mode runners
# ======================================================================


def _run_presets(args: argparse.Namespace) -> None:
    """Visit every preset and let the arm settle at each.

    Args:
        args: Parsed CLI arguments.
    """
    arm = _build_arm(args)
    dt = 1.0 / args.fps
    for name in PRESETS:
        print(f"Moving to '{name}'")
        arm.move_to(name)
        elapsed = arm.settle(dt=dt)
        print(f"  settled in {elapsed:.2f}s, collision={arm.has_collision}")


def _run_teleop(args: argparse.Namespace) -> None:
    """Jog the arm from single-character terminal commands.

    Args:
        args: Parsed CLI arguments.
    """
    arm = _build_arm(args)
    teleop = KeyboardTeleop(step_deg=args.step_deg)
    dt = 1.0 / args.fps
    print("Teleop: 1-6 select joint, g gripper, w/s jog, h home, x stop, q quit.")
    while True:
        line = input(f"[{teleop.selected_name}] > ")
        if not all(teleop.process_terminal_input(c) for c in line or " "):
            break
        teleop.apply(arm)
        arm.settle(dt=dt)
        print(f"  joints={arm.joint_angles} gripper={arm.gripper_angle}")


def _run_env(args: argparse.Namespace) -> None:
    """Step the Gymnasium environment with random in-limits targets.

    Args:
        args: Parsed CLI arguments.
    """
    cfg = ArmEnvConfig(
        fps=args.fps,
        episode_length=args.steps,
        seed=args.seed,
        arm=ArmConfig(motion_duration=args.duration),
    )
    env = ArmControlEnv(cfg)
    obs, _ = env.reset(seed=args.seed)
    total_reward = 0.0
    reached = 0
    action = env.sample_safe_action()
    for step in range(args.steps):
        if not env.arm.is_moving:
            action = env.sample_safe_action()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        reached += info["positions_reached"]
        if terminated or truncated:
            print(f"Episode ended at step {step + 1}: status={info['status']}")
            break
    print(f"Reward: {total_reward:.1f} | positions reached: {reached}")
    print(f"Final state: {obs['agent_pos']}")


# ======================================================================
# CLI
# ======================================================================


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Arm Control Simulation")
    parser.add_argument(
        "--mode", choices=["presets", "teleop", "env"], default="presets"
    )
    parser.add_argument("--fps", type=int, default=30)
    parser.add_argument("--duration", type=float, default=1.0)
    parser.add_argument("--steps", type=int, default=300)
    parser.add_argument("--step-deg", type=int, default=5)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


# ======================================================================
# Dispatch
# ======================================================================


# Mapping from mode name to runner function
_MODE_DISPATCH = {
    "presets": _run_presets,
    "teleop": _run_teleop,
    "env": _run_env,
}


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------
if __name__ == "__main__":
    args = _parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print(f"Mode: {args.mode} | fps={args.fps} | duration={args.duration}s")
    print("-" * 60)
    _MODE_DISPATCH[args.mode](args)
