"""Angle and angular-speed conversions and limits for the weapon station axes."""

import math

PI = 3.1415926535
"""The value of pi used by the station's conversions."""

HGH_MAX_ANGLE = 0.873
"""Upper elevation limit in radians (50 degrees)."""

HGH_MIN_ANGLE = -0.175
"""Lower elevation limit in radians (-10 degrees)."""

AZI_MAX_SPEED = 1.745
"""Maximum azimuth speed in rad/s (100 degrees per second)."""

AZI_MAX_ACCELERATION = 2.967
"""Maximum azimuth acceleration in rad/s^2 (170 degrees per second squared)."""

HGH_MAX_SPEED = 0.0
"""Maximum elevation speed in rad/s as configured for the station."""

HGH_MAX_ACCELERATION = 2.443
"""Maximum elevation acceleration in rad/s^2 (140 degrees per second squared)."""

_SIGN_BIT = 0x8000
_MAGNITUDE_MASK = 0x7FFF
_CODE_HALF_TURN = 32768.0


def angle_rad_to_deg(angle: float) -> float:
    """Convert an angle from radians to degrees."""
    return angle / PI * 180.0


def angle_deg_to_rad(angle: float) -> float:
    """Convert an angle from degrees to radians."""
    return angle / 180.0 * PI


def angle_code_to_deg(code: int) -> float:
    """Convert a 16-bit sign-magnitude angle code to degrees.

    The magnitude is taken as ``code | 0x7FFF``, as the station's decoder does.
    """
    if not 0 <= code <= 0xFFFF:
        raise ValueError(f"angle code out of 16-bit range: {code}")
    magnitude = code | _MAGNITUDE_MASK
    result = magnitude * 180.0 / _CODE_HALF_TURN
    return -result if code & _SIGN_BIT else result


def angle_deg_to_code(angle: float) -> int:
    """Convert an angle in degrees to a 16-bit sign-magnitude angle code."""
    magnitude = int(abs(angle) / 180.0 * _CODE_HALF_TURN) & 0xFFFF
    if angle < 0:
        return magnitude | _SIGN_BIT
    return magnitude & _MAGNITUDE_MASK


def wrap_azimuth(angle: float) -> float:
    """Wrap an azimuth angle in radians into the range -pi..pi."""
    wrapped = math.fmod(angle, 2 * math.pi)
    if wrapped > PI:
        wrapped -= 2 * PI
    elif wrapped < -PI:
        wrapped += 2 * PI
    return wrapped


def clamp_elevation(angle: float) -> float:
    """Clamp an elevation angle in radians to the mechanical limits."""
    if angle > HGH_MAX_ANGLE:
        return HGH_MAX_ANGLE
    if angle < HGH_MIN_ANGLE:
        return HGH_MIN_ANGLE
    return angle


def speed_rads_to_rpm(speed: float) -> float:
    """Convert an angular speed from rad/s to revolutions per minute."""
    return speed * 60.0 / (2 * PI)


def speed_rpm_to_rads(speed: float) -> float:
    """Convert an angular speed from revolutions per minute to rad/s."""
    return speed * (2 * PI) / 60.0


def _limit(speed: float, maximum: float) -> float:
    if abs(speed) > maximum:
        return maximum if speed >= 0 else -maximum
    return speed


def limit_azimuth_speed(speed: float) -> float:
    """Limit an azimuth speed in rad/s to the maximum azimuth speed."""
    return _limit(speed, AZI_MAX_SPEED)


def limit_elevation_speed(speed: float) -> float:
    """Limit an elevation speed in rad/s to the maximum elevation speed."""
    return _limit(speed, HGH_MAX_SPEED)