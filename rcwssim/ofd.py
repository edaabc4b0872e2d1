"""Model of the optical director: an azimuth and an elevation motor."""

from __future__ import annotations

from rcwssim.motor import Motor, MotorParam
from rcwssim.units import wrap_azimuth

OFD_AZI_UPPER_BOUND = 180.0
"""Upper azimuth mount limit in degrees."""

OFD_AZI_LOWER_BOUND = -180.0
"""Lower azimuth mount limit in degrees."""

OFD_HGH_UPPER_BOUND = 50.0
"""Upper elevation mount limit in degrees."""

OFD_HGH_LOWER_BOUND = -10.0
"""Lower elevation mount limit in degrees."""

_MOTOR_SETTINGS = (
    (MotorParam.JM, 0.000339),
    (MotorParam.PN, 4.0),
    (MotorParam.PHIF, 0.0066667),
    (MotorParam.SPEED_P, 0.806),
    (MotorParam.SPEED_I, 1.6),
)


def _make_motor() -> Motor:
    motor = Motor()
    for kind, value in _MOTOR_SETTINGS:
        motor.set_param(kind, value)
    return motor


class Ofd:
    """Optical director with speeds in rad/s and angles in rad."""

    def __init__(self) -> None:
        self.azi_speed = 0.0
        self.azi_angle = 0.0
        self.hgh_speed = 0.0
        self.hgh_angle = 0.0
        self.azi_motor = _make_motor()
        self.hgh_motor = _make_motor()

    def calculate(
        self,
        azi_torque: float,
        azi_speed: float,
        hgh_torque: float,
        hgh_speed: float,
    ) -> None:
        """Advance both axes by one sample with the given load torques and speed requests."""
        self.azi_motor.calculate(azi_torque, azi_speed)
        self.azi_speed = self.azi_motor.speed
        self.azi_motor.angle = wrap_azimuth(self.azi_motor.angle)
        self.azi_angle = self.azi_motor.angle

        self.hgh_motor.calculate(hgh_torque, hgh_speed)
        self.hgh_speed = self.hgh_motor.speed
        self.hgh_motor.angle = wrap_azimuth(self.hgh_motor.angle)
        self.hgh_angle = self.hgh_motor.angle