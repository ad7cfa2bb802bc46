#!/usr/bin/env python3

import math


TWO_PI = 2 * math.pi


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round to the given number of decimal places, ties away from -inf.

    Unlike the builtin round(), 0.5 always rounds up (2.5 -> 3, -2.5 -> -2).
    NaN and infinities are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def to_signed16(value: int) -> int:
    """Reinterpret an unsigned 16-bit value as two's complement."""
    if value >= 0x8000:
        value -= 0x10000
    return value


def wrap_angle(x: float) -> float:
    """ Wrap angle (radians) to [0, 2*pi)

    Args:
        x (float): angle to be wrapped

    Returns:
        float: equivalent angle in [0, 2*pi)
    """
    x = x % TWO_PI
    # -1e-17 % 2pi rounds up to exactly 2pi
    return 0.0 if x >= TWO_PI else x


def compute_heading(x: float, y: float, declination_radians: float = 0.0) -> int:
    """
    Compass heading from the horizontal field components.

    Args:
        x: Calibrated X reading
        y: Calibrated Y reading
        declination_radians: Offset from magnetic to true north

    Returns:
        int: heading in whole degrees, 0 <= heading < 360,
        or NaN when an input is NaN or infinite
    """
    theta = math.atan2(y, x) + declination_radians
    if not math.isfinite(theta):
        return math.nan
    theta = wrap_angle(theta)
    degrees = int(round_half_up(theta * 180 / math.pi))
    return degrees % 360


def declination_to_radians(degrees: float, minutes: float = 0.0) -> float:
    """Convert a declination in degrees and arc-minutes to radians."""
    return (degrees + minutes / 60) * math.pi / 180
