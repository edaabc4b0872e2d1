"""Simulation loop that drives the optical director and reports its state."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from rcwssim.messages import AxisPairFeedback, FeedbackMessage, ServoFeedback
from rcwssim.net import NetSender, RunState
from rcwssim.ofd import Ofd
from rcwssim.units import angle_deg_to_code, angle_rad_to_deg

STEPS_PER_CYCLE = 10
"""Model samples computed per simulation cycle."""

SPEED_REQUEST = 3.1415926
"""Speed requested of both optical axes, in rad/s."""

CYCLE_PERIOD = 0.01
"""Pause between cycles, in seconds."""


def _angle_code(angle: float) -> int:
    return angle_deg_to_code(angle_rad_to_deg(angle))


class Simulation:
    """Runs the station model in cycles and sends a feedback message after each.

    The simulation starts paused; ``run`` blocks while paused and returns once stopped.
    """

    def __init__(
        self,
        sender: Optional[NetSender] = None,
        on_update: Optional[Callable[[], None]] = None,
    ) -> None:
        self.sender = sender
        self.on_update = on_update
        self.ofd = Ofd()
        self.message = FeedbackMessage()
        self._cond = threading.Condition()
        self._state = RunState.PAUSED

    @property
    def state(self) -> RunState:
        """The current run state."""
        with self._cond:
            return self._state

    def step(self) -> FeedbackMessage:
        """Compute one cycle of the model and return the refreshed message."""
        for _ in range(STEPS_PER_CYCLE):
            self.ofd.calculate(0.0, SPEED_REQUEST, 0.0, SPEED_REQUEST)
        if self.on_update is not None:
            self.on_update()
        return self.fill_message()

    def fill_message(self) -> FeedbackMessage:
        """Fill the feedback message from the model state and return it."""
        self.message.gun = AxisPairFeedback()
        self.message.ofd = AxisPairFeedback(
            ServoFeedback(motor_angle=_angle_code(self.ofd.azi_angle)),
            ServoFeedback(motor_angle=_angle_code(self.ofd.hgh_angle)),
        )
        return self.message

    def run(self) -> None:
        """Run cycles until stopped, sending the message after each cycle."""
        owns_sender = self.sender is None
        if owns_sender:
            self.sender = NetSender()
        try:
            while True:
                with self._cond:
                    while self._state is RunState.PAUSED:
                        self._cond.wait()
                    if self._state is RunState.STOPPED:
                        return
                self.step()
                time.sleep(CYCLE_PERIOD)
                self.sender.send(self.message)
        finally:
            if owns_sender:
                self.sender.close()
                self.sender = None

    def request_pause(self) -> None:
        """Pause the loop if it is running."""
        with self._cond:
            if self._state is RunState.RUNNING:
                self._state = RunState.PAUSED

    def request_resume(self) -> None:
        """Resume the loop if it is paused."""
        with self._cond:
            if self._state is RunState.PAUSED:
                self._state = RunState.RUNNING
                self._cond.notify_all()

    def stop(self) -> None:
        """Stop the loop for good and wake it if it is waiting."""
        with self._cond:
            self._state = RunState.STOPPED
            self._cond.notify_all()