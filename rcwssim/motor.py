"""Discrete model of a speed-controlled servo motor.

The model integrates the motor's torque balance and runs a PI speed loop.
Each call to :meth:`Motor.calculate` advances it by one sample.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class MotorParam(Enum):
    """Kinds of motor parameter that can be read or set."""

    PHIF = 0
    PN = 1
    JM = 2
    SPEED_P = 3
    SPEED_I = 4
    STATE = 5


@dataclass
class MotorState:
    """Internal delay and integrator states of the motor model."""

    current_output: float = 0.0
    torque_state: float = 0.0
    integrator: float = 0.0
    controller_state: float = 0.0
    speed_state: float = 0.0


@dataclass
class MotorParameters:
    """Physical and controller parameters of a motor."""

    phif: float = 0.0
    pn: float = 0.0
    jm: float = 0.0
    speed_p: float = 0.0
    speed_i: float = 0.0
    state: MotorState = field(default_factory=MotorState)


# Parameters that must be strictly positive; the others only non-negative.
_STRICTLY_POSITIVE = {MotorParam.PHIF, MotorParam.PN, MotorParam.JM}

_ATTRIBUTES = {
    MotorParam.PHIF: "phif",
    MotorParam.PN: "pn",
    MotorParam.JM: "jm",
    MotorParam.SPEED_P: "speed_p",
    MotorParam.SPEED_I: "speed_i",
}


class Motor:
    """A motor with a PI speed loop; ``speed`` is in rad/s and ``angle`` in rad."""

    def __init__(self, params: MotorParameters | None = None) -> None:
        source = params if params is not None else MotorParameters()
        self._params = replace(source, state=MotorState())
        self.speed = 0.0
        self.angle = 0.0

    @property
    def state(self) -> MotorState:
        """The current internal state of the model."""
        return self._params.state

    def calculate(self, load_torque: float, speed_ref: float) -> None:
        """Advance the model by one sample.

        ``load_torque`` is the disturbance torque in N·m and ``speed_ref`` the
        requested speed in rad/s.
        """
        p = self._params
        s = p.state
        if p.jm == 0:
            raise ValueError("moment of inertia must be set before calculating")

        torque = ((s.current_output + 1.0) * 0.5 * 1.5 * p.pn * p.phif - load_torque) + s.torque_state
        self.speed = (0.0005 * torque + 0.0005 * s.torque_state) * (1.0 / p.jm)

        error = speed_ref - self.speed
        control = (error * p.speed_p + s.integrator) - 0.25 * s.controller_state

        speed_sum = self.speed + s.speed_state
        self.angle = 0.0005 * speed_sum + 0.0005 * s.speed_state

        s.current_output = 0.625 * control + 0.625 * s.controller_state
        s.torque_state = torque
        s.integrator += error * p.speed_i * 0.001
        s.controller_state = control
        s.speed_state = speed_sum

    def set_param(self, kind: MotorParam, value: float = 0.0) -> bool:
        """Set a parameter and return whether it changed.

        Setting ``MotorParam.STATE`` resets the internal state and ignores
        ``value``. Raises ValueError for a value the parameter cannot take.
        """
        if kind is MotorParam.STATE:
            self.reset_state()
            return True
        name = self._attribute(kind)
        if value == getattr(self._params, name):
            return False
        if kind in _STRICTLY_POSITIVE and value <= 0:
            raise ValueError(f"{kind.name} must be positive, got {value}")
        if value < 0:
            raise ValueError(f"{kind.name} must not be negative, got {value}")
        setattr(self._params, name, value)
        return True

    def get_param(self, kind: MotorParam) -> float:
        """Return the value of a scalar parameter."""
        if kind is MotorParam.STATE:
            raise ValueError("the motor state is not a scalar parameter")
        return getattr(self._params, self._attribute(kind))

    def reset_state(self) -> None:
        """Clear all internal states of the model."""
        self._params.state = MotorState()

    @staticmethod
    def _attribute(kind: MotorParam) -> str:
        try:
            return _ATTRIBUTES[kind]
        except (KeyError, TypeError):
            raise ValueError(f"unsupported motor parameter: {kind!r}") from None