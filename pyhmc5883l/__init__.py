"""
PyHMC5883L - HMC5883L Magnetometer Python Library
=================================================

A Python driver for the Honeywell HMC5883L three-axis magnetometer
on a Linux I2C bus.

Example:
    >>> from pyhmc5883l import HMC5883L
    >>>
    >>> with HMC5883L(bus=1, gain="1.3") as sensor:
    ...     reading = sensor.read()
    ...     print(sensor.heading())
"""

from .sensor import HMC5883L
from .transport import SMBusTransport
from .data_types import (
    Configuration,
    MagReading,
    RegisterWrite,
    decode_sample,
)
from .registers import (
    DEVICE_ADDRESS,
    GAIN_TABLE,
    Register,
    SensitivityRange,
    lookup_gain,
)
from .formatter import format_result
from .tools.mathtools import compute_heading

__version__ = "1.0.0"
__all__ = [
    "HMC5883L",
    "SMBusTransport",
    "Configuration",
    "MagReading",
    "RegisterWrite",
    "decode_sample",
    "DEVICE_ADDRESS",
    "GAIN_TABLE",
    "Register",
    "SensitivityRange",
    "lookup_gain",
    "format_result",
    "compute_heading",
]
