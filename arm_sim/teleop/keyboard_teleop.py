"""
Keyboard teleoperation: jog individual joints of an ``ArmState``.

A joint (or the gripper) is selected with a key, then jogged up or down in
fixed steps.  Jogs go through the arm's normal setters, so an out-of-range
joint jog is ignored and a gripper jog is clamped.  A terminal-based mode
is always available; Pygame key events are supported when Pygame is
installed.

Classes:
    KeyboardTeleop: Maps key presses to joint jogs and arm commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from arm_sim.robots.arm_state import GRIPPER_INDEX, ArmState
from arm_sim.utils.constants import JOINT_NAMES


@dataclass
class KeyboardTeleop:
    """Maps keyboard input to joint jogs.

    Keys: ``1``-``6`` select a joint, ``g`` selects the gripper, ``w``/``s``
    jog the selection up/down, ``h`` sends the arm home, ``x`` triggers an
    emergency stop, ``q`` quits.

    Attributes:
        step_deg: Degrees added or removed per jog.
        selected: Selected holder (0-5 joints, 6 gripper).
        pending_jog: Accumulated jog direction not yet applied.
        pending_command: ``'home'`` or ``'stop'`` awaiting ``apply``.
    """

    step_deg: int = 5
    selected: int = 0
    pending_jog: int = 0
    pending_command: Optional[str] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def selected_name(self) -> str:
        """Name of the currently selected joint, or ``'gripper'``."""
        if self.selected == GRIPPER_INDEX:
            return "gripper"
        return JOINT_NAMES[self.selected]

    def process_terminal_input(self, char: str) -> bool:
        """Update the teleop state from a single-character command.

        Args:
            char: Single character read from stdin.

        Returns:
            *False* if the quit character was received; *True* otherwise.
        """
        char = char.strip().lower()
        if char == "q":
            return False
        if char.isdigit() and 1 <= int(char) <= GRIPPER_INDEX:
            self.selected = int(char) - 1
        elif char == "g":
            self.selected = GRIPPER_INDEX
        elif char == "w":
            self.pending_jog += 1
        elif char == "s":
            self.pending_jog -= 1
        elif char == "h":
            self.pending_command = "home"
        elif char == "x":
            self.pending_command = "stop"
        return True

    def process_pygame_events(self) -> bool:
        """Pump Pygame events and update the teleop state accordingly.

        Returns:
            *False* if a QUIT event was received; *True* otherwise.

        Raises:
            ImportError: If Pygame is not installed.
        """
        try:
            import pygame
        except ImportError as exc:
            raise ImportError(
                "Pygame required for real-time teleop: pip install pygame"
            ) from exc
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and not self._handle_pygame_key(
                event, pygame
            ):
                return False
        return True

    def apply(self, arm: ArmState) -> None:
        """Push the pending jog or command to *arm* and clear it.

        Args:
            arm: The arm to command.
        """
        command, self.pending_command = self.pending_command, None
        jog, self.pending_jog = self.pending_jog, 0
        if command == "stop":
            arm.stop_all_motion()
            return
        if command == "home":
            arm.move_to_home()
            return
        if jog == 0:
            return
        delta = jog * self.step_deg
        if self.selected == GRIPPER_INDEX:
            arm.set_gripper_angle(arm.gripper_angle + delta)
        else:
            current = arm.joint_angle(self.selected)
            arm.set_joint_angle(self.selected, current + delta)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _handle_pygame_key(self, event: object, pygame_module: object) -> bool:
        """Translate one Pygame KEYDOWN event into a terminal-style command.

        Args:
            event: Pygame event object.
            pygame_module: The ``pygame`` module (passed to avoid re-import).

        Returns:
            *False* if the key requests quitting.
        """
        pg = pygame_module
        arrows = {pg.K_UP: "w", pg.K_DOWN: "s"}
        char = arrows.get(event.key) or pg.key.name(event.key)
        return self.process_terminal_input(char)
