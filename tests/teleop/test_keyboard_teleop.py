from arm_sim.teleop.keyboard_teleop import KeyboardTeleop


def test_select_and_jog_joint(arm):
    teleop = KeyboardTeleop(step_deg=5)
    for char in "2ww":
        assert teleop.process_terminal_input(char)
    assert teleop.selected_name == "shoulder"
    teleop.apply(arm)
    assert arm.joint_angle(1) == 10
    assert teleop.pending_jog == 0


def test_jog_past_limit_is_ignored(arm):
    arm.set_joint_angle(1, 90)
    teleop = KeyboardTeleop(step_deg=5)
    teleop.process_terminal_input("2")
    teleop.process_terminal_input("w")
    teleop.apply(arm)
    assert arm.joint_angle(1) == 90


def test_gripper_jog_is_clamped(arm):
    teleop = KeyboardTeleop(step_deg=10)
    teleop.process_terminal_input("g")
    assert teleop.selected_name == "gripper"
    teleop.process_terminal_input("s")
    teleop.apply(arm)
    assert arm.gripper_angle == 0
    for _ in range(6):
        teleop.process_terminal_input("w")
    teleop.apply(arm)
    assert arm.gripper_angle == 45


def test_home_and_stop_commands(smooth_arm, record):
    estop = record(smooth_arm.emergency_stop)
    teleop = KeyboardTeleop()
    smooth_arm.set_joint_angle(0, 100)
    smooth_arm.advance(0.5)
    teleop.process_terminal_input("x")
    teleop.apply(smooth_arm)
    assert estop.count == 1
    assert not smooth_arm.is_moving
    teleop.process_terminal_input("h")
    teleop.apply(smooth_arm)
    smooth_arm.settle(dt=0.25)
    assert smooth_arm.joint_angles == (0,) * 6


def test_quit_and_unknown_keys():
    teleop = KeyboardTeleop()
    assert teleop.process_terminal_input("z")
    assert teleop.process_terminal_input("7")
    assert teleop.selected == 0
    assert not teleop.process_terminal_input("q")
