"""
Time-interpolated scalar used as the value holder for every joint.

The holder keeps a current value and linearly interpolates it toward a
target over a fixed duration.  Time only moves when the owner calls
``advance``; there is no timer or thread behind it.

Classes:
    AnimatedValue: Retargetable interpolating value with Qt signals.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal


class AnimatedValue(QObject):
    """A scalar that glides from its current value to a target.

    ``value`` is reported in whole degrees; the fractional position along
    the interpolation is kept internally so that small ``dt`` steps still
    make progress.

    Signals:
        value_changed(int): Emitted whenever the rounded value changes.
        running_changed(bool): Emitted whenever interpolation starts or stops.
    """

    value_changed = pyqtSignal(int)
    running_changed = pyqtSignal(bool)

    def __init__(
        self, initial: float = 0.0, duration: float = 1.0, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._current = float(initial)
        self._start = float(initial)
        self._target = float(initial)
        self._duration = float(duration)
        self._span = 0.0
        self._elapsed = 0.0
        self._running = False

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def value(self) -> int:
        """Current value rounded to the nearest integer."""
        return int(round(self._current))

    @property
    def target(self) -> float:
        """Value the holder is interpolating toward (or resting on)."""
        return self._target

    @property
    def is_running(self) -> bool:
        """True while an interpolation is in progress."""
        return self._running

    @property
    def duration(self) -> float:
        """Default interpolation time in seconds."""
        return self._duration

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def retarget(self, target: float, duration: float | None = None) -> None:
        """Start moving from the current value toward *target*.

        Args:
            target: New value to reach.
            duration: Seconds to reach it; defaults to the holder's
                ``duration``.  Zero or negative jumps immediately.
        """
        target = float(target)
        span = self._duration if duration is None else float(duration)
        if target == self._target and (self._running or target == self._current):
            return
        self._start = self._current
        self._target = target
        self._elapsed = 0.0
        self._span = span
        if span <= 0.0 or target == self._current:
            self._set_current(target)
            self._set_running(False)
            return
        self._set_running(True)

    def advance(self, dt: float) -> None:
        """Move the interpolation forward by *dt* seconds.

        Args:
            dt: Elapsed time in seconds.

        Raises:
            ValueError: If *dt* is negative.
        """
        if dt < 0:
            raise ValueError(f"`dt` must be non-negative, got {dt}")
        if not self._running:
            return
        self._elapsed = min(self._elapsed + dt, self._span)
        fraction = self._elapsed / self._span
        if fraction >= 1.0:
            # Order matters: observers read is_running inside value_changed.
            self._running = False
            self._set_current(self._target)
            self.running_changed.emit(False)
            return
        self._set_current(self._start + (self._target - self._start) * fraction)

    def stop(self) -> None:
        """Halt in place; the target collapses onto the current value."""
        self._target = self._current
        self._set_running(False)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _set_current(self, new_value: float) -> None:
        """Store *new_value* and emit ``value_changed`` if the rounded value moved."""
        old = self.value
        self._current = new_value
        if self.value != old:
            self.value_changed.emit(self.value)

    def _set_running(self, running: bool) -> None:
        """Flip the running flag and emit ``running_changed`` on an edge."""
        if running != self._running:
            self._running = running
            self.running_changed.emit(running)
