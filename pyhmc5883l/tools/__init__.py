"""Helpers shared by the driver: angle math and logging decorators."""

from .mathtools import (
    compute_heading,
    declination_to_radians,
    round_half_up,
    to_signed16,
    wrap_angle,
)
from .utilities import log_exceptions

__all__ = [
    "compute_heading",
    "declination_to_radians",
    "round_half_up",
    "to_signed16",
    "wrap_angle",
    "log_exceptions",
]
