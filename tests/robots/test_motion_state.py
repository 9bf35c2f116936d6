from arm_sim.robots.motion_state import MotionStateMachine
from arm_sim.utils.constants import MotionStatus


def test_moving_iff_any_holder_running():
    machine = MotionStateMachine()
    machine.update([False] * 6 + [True])
    assert machine.is_moving
    machine.update([False] * 7)
    assert not machine.is_moving


def test_position_reached_only_on_moving_to_idle_edge():
    machine = MotionStateMachine()
    assert machine.update([False] * 7) is False
    assert machine.update([True] + [False] * 6) is False
    assert machine.update([True, True] + [False] * 5) is False
    assert machine.update([False] * 7) is True
    assert machine.update([False] * 7) is False


def test_status_priority():
    machine = MotionStateMachine(is_moving=True)
    assert machine.status(collision=True) is MotionStatus.COLLISION
    assert machine.status_text(collision=True) == "Collision"
    assert machine.status(collision=False) is MotionStatus.MOVING
    assert machine.status_text(collision=False) == "Moving"
    machine.update([False])
    assert machine.status(collision=False) is MotionStatus.IDLE
    assert machine.status_text(collision=False) == "Ready"
