"""
Text rendering of magnetometer readings.

Output looks like::

    X: 9.20, Y: -9.20, Z: 4.60, Heading: 90°

Axis values are assembled from integer hundredths instead of going through
a float format spec, so the output does not depend on platform float
formatting or locale.
"""

import math

from .data_types import MagReading


DEGREE_SIGN = "°"


def _format_non_finite(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def format_fixed2(value: float) -> str:
    """Render a value with exactly 2 fractional digits (half-up rounding).

    NaN and infinities render as "NaN", "Infinity" and "-Infinity".
    """
    if not math.isfinite(value):
        return _format_non_finite(value)
    hundredths = math.floor(value * 100 + 0.5)
    sign = "-" if hundredths < 0 else ""
    hundredths = abs(hundredths)
    whole, frac = divmod(hundredths, 100)
    return sign + str(whole) + "." + str(frac).rjust(2, "0")


def format_result(reading: MagReading, heading: int) -> str:
    """
    Render a reading and heading as a single line.

    Args:
        reading: Calibrated reading
        heading: Heading in whole degrees, or NaN

    Returns:
        str: e.g. "X: 9.20, Y: -9.20, Z: 4.60, Heading: 90°"
    """
    if math.isfinite(heading):
        heading_text = str(int(heading))
    else:
        heading_text = _format_non_finite(heading)

    return (
        "X: " + format_fixed2(reading.x)
        + ", Y: " + format_fixed2(reading.y)
        + ", Z: " + format_fixed2(reading.z)
        + ", Heading: " + heading_text + DEGREE_SIGN
    )
