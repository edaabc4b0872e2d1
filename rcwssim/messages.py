"""Wire messages exchanged between the station simulator and the central computer.

Layouts follow the native little-endian structures: each servo record is a
16-bit value, a byte of flag bits (least significant bit first) and one byte
of padding.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

_COMMAND = struct.Struct("<hBx")
_FEEDBACK = struct.Struct("<HBx")


def _flags_byte(*flags: bool) -> int:
    return sum(1 << bit for bit, flag in enumerate(flags) if flag)


def _flag(byte: int, bit: int) -> bool:
    return bool(byte >> bit & 1)


def _check_length(data: bytes, size: int, name: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"{name} needs {size} bytes, got {len(data)}")
    return data


@dataclass
class ServoCommand:
    """Control record for one servo drive.

    For the gun, rpm = motor_speed * 60 / 256; for the optics, rpm = motor_speed * 60.
    """

    SIZE: ClassVar[int] = _COMMAND.size

    motor_speed: int = 0
    pulse_enabled: bool = False
    drive_enabled: bool = False
    reset: bool = False
    zero: bool = False

    def pack(self) -> bytes:
        if not -0x8000 <= self.motor_speed <= 0x7FFF:
            raise ValueError(f"motor speed out of int16 range: {self.motor_speed}")
        flags = _flags_byte(self.pulse_enabled, self.drive_enabled, self.reset, self.zero)
        return _COMMAND.pack(self.motor_speed, flags)

    @classmethod
    def unpack(cls, data: bytes) -> ServoCommand:
        speed, flags = _COMMAND.unpack(_check_length(data, cls.SIZE, cls.__name__))
        return cls(speed, _flag(flags, 0), _flag(flags, 1), _flag(flags, 2), _flag(flags, 3))


@dataclass
class ServoFeedback:
    """Feedback record from one servo drive.

    For the gun, the load angle code is motor_angle / 256; for the optics it is motor_angle.
    """

    SIZE: ClassVar[int] = _FEEDBACK.size

    motor_angle: int = 0
    is_power_up: bool = False
    is_enabled: bool = False
    is_fault: bool = False
    is_zero: bool = False

    def pack(self) -> bytes:
        if not 0 <= self.motor_angle <= 0xFFFF:
            raise ValueError(f"motor angle out of uint16 range: {self.motor_angle}")
        flags = _flags_byte(self.is_power_up, self.is_enabled, self.is_fault, self.is_zero)
        return _FEEDBACK.pack(self.motor_angle, flags)

    @classmethod
    def unpack(cls, data: bytes) -> ServoFeedback:
        angle, flags = _FEEDBACK.unpack(_check_length(data, cls.SIZE, cls.__name__))
        return cls(angle, _flag(flags, 0), _flag(flags, 1), _flag(flags, 2), _flag(flags, 3))


@dataclass
class AxisPairCommand:
    """Control records for the azimuth and elevation drives of one unit."""

    SIZE: ClassVar[int] = 2 * ServoCommand.SIZE

    azimuth: ServoCommand = field(default_factory=ServoCommand)
    elevation: ServoCommand = field(default_factory=ServoCommand)

    def pack(self) -> bytes:
        return self.azimuth.pack() + self.elevation.pack()

    @classmethod
    def unpack(cls, data: bytes) -> AxisPairCommand:
        data = _check_length(data, cls.SIZE, cls.__name__)
        half = ServoCommand.SIZE
        return cls(ServoCommand.unpack(data[:half]), ServoCommand.unpack(data[half:]))


@dataclass
class AxisPairFeedback:
    """Feedback records from the azimuth and elevation drives of one unit."""

    SIZE: ClassVar[int] = 2 * ServoFeedback.SIZE

    azimuth: ServoFeedback = field(default_factory=ServoFeedback)
    elevation: ServoFeedback = field(default_factory=ServoFeedback)

    def pack(self) -> bytes:
        return self.azimuth.pack() + self.elevation.pack()

    @classmethod
    def unpack(cls, data: bytes) -> AxisPairFeedback:
        data = _check_length(data, cls.SIZE, cls.__name__)
        half = ServoFeedback.SIZE
        return cls(ServoFeedback.unpack(data[:half]), ServoFeedback.unpack(data[half:]))


@dataclass
class ControlMessage:
    """Message from the central computer to the simulator: optics first, then gun."""

    SIZE: ClassVar[int] = 2 * AxisPairCommand.SIZE

    ofd: AxisPairCommand = field(default_factory=AxisPairCommand)
    gun: AxisPairCommand = field(default_factory=AxisPairCommand)

    def pack(self) -> bytes:
        return self.ofd.pack() + self.gun.pack()

    @classmethod
    def unpack(cls, data: bytes) -> ControlMessage:
        data = _check_length(data, cls.SIZE, cls.__name__)
        half = AxisPairCommand.SIZE
        return cls(AxisPairCommand.unpack(data[:half]), AxisPairCommand.unpack(data[half:]))


@dataclass
class FeedbackMessage:
    """Message from the simulator to the central computer: optics first, then gun."""

    SIZE: ClassVar[int] = 2 * AxisPairFeedback.SIZE

    ofd: AxisPairFeedback = field(default_factory=AxisPairFeedback)
    gun: AxisPairFeedback = field(default_factory=AxisPairFeedback)

    def pack(self) -> bytes:
        return self.ofd.pack() + self.gun.pack()

    @classmethod
    def unpack(cls, data: bytes) -> FeedbackMessage:
        data = _check_length(data, cls.SIZE, cls.__name__)
        half = AxisPairFeedback.SIZE
        return cls(AxisPairFeedback.unpack(data[:half]), AxisPairFeedback.unpack(data[half:]))