from typing import Any, List, Tuple

import pytest
from PyQt6.QtCore import QCoreApplication

from arm_sim.robots.arm_state import ArmState
from arm_sim.robots.configs import ArmConfig


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """One Qt application object for the whole session."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class SignalRecorder:
    """Collects the arguments of every emission of a Qt signal."""

    def __init__(self, signal: Any) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        signal.connect(self._record)

    def _record(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def values(self) -> List[Any]:
        """First argument of every emission."""
        return [c[0] for c in self.calls]


@pytest.fixture
def record():
    return SignalRecorder


@pytest.fixture
def arm() -> ArmState:
    """Arm whose joints jump straight to their targets."""
    return ArmState(ArmConfig(motion_duration=0.0))


@pytest.fixture
def smooth_arm() -> ArmState:
    """Arm whose joints take one second to reach a new target."""
    return ArmState(ArmConfig(motion_duration=1.0))
