"""
Register Map for the HMC5883L Magnetometer
==========================================

This module defines the register addresses, fixed configuration bytes
and the gain table used to program the HMC5883L over I2C.

Register Overview
-----------------
    0x00  Configuration Register A   - averaging, output rate, bias mode
    0x01  Configuration Register B   - gain (top 3 bits)
    0x02  Mode Register              - continuous / single / idle
    0x03  Data Output X MSB          - followed by X LSB, Z MSB, Z LSB,
                                       Y MSB, Y LSB (note X, Z, Y order)

Gain Table
----------
    Range (Ga)   Field   Scale (mG/LSb)
    0.88         0x00    0.73
    1.3          0x20    0.92   (power-on default)
    1.9          0x40    1.22
    2.5          0x60    1.52
    4.0          0x80    2.27
    4.7          0xA0    2.56
    5.6          0xC0    3.03
    8.1          0xE0    4.35
"""

from enum import Enum
from typing import Optional, Tuple, Union


# Fixed 7-bit I2C address
DEVICE_ADDRESS = 0x1E


class Register:
    """Register addresses."""
    CONFIG_A = 0x00      # Configuration register A
    CONFIG_B = 0x01      # Configuration register B (gain)
    MODE = 0x02          # Mode register
    DATA_X_MSB = 0x03    # First data output register


# 8-sample average (0b11), 15 Hz output (0b100), normal measurement (0b00)
CONFIG_A_DEFAULT = 0b01110000

# Mode register: continuous measurement
MODE_CONTINUOUS = 0x00

# Bytes in one X/Z/Y sample
SAMPLE_SIZE = 6

# Gain field sits in the top 3 bits of configuration register B
GAIN_SHIFT = 5


class SensitivityRange(Enum):
    """Supported full-scale ranges, labelled in gauss."""
    GA_0_88 = "0.88"
    GA_1_3 = "1.3"
    GA_1_9 = "1.9"
    GA_2_5 = "2.5"
    GA_4_0 = "4.0"
    GA_4_7 = "4.7"
    GA_5_6 = "5.6"
    GA_8_1 = "8.1"

    @property
    def field_value(self) -> int:
        """Configuration register B byte for this range."""
        return GAIN_TABLE[self][0]

    @property
    def scale(self) -> float:
        """Milligauss per LSb for this range."""
        return GAIN_TABLE[self][1]


GAIN_TABLE = {
    SensitivityRange.GA_0_88: (0 << GAIN_SHIFT, 0.73),
    SensitivityRange.GA_1_3: (1 << GAIN_SHIFT, 0.92),
    SensitivityRange.GA_1_9: (2 << GAIN_SHIFT, 1.22),
    SensitivityRange.GA_2_5: (3 << GAIN_SHIFT, 1.52),
    SensitivityRange.GA_4_0: (4 << GAIN_SHIFT, 2.27),
    SensitivityRange.GA_4_7: (5 << GAIN_SHIFT, 2.56),
    SensitivityRange.GA_5_6: (6 << GAIN_SHIFT, 3.03),
    SensitivityRange.GA_8_1: (7 << GAIN_SHIFT, 4.35),
}

# Scale of the power-on range
DEFAULT_SCALE = GAIN_TABLE[SensitivityRange.GA_1_3][1]


def lookup_gain(
    sensitivity: Union[SensitivityRange, str, None]
) -> Optional[Tuple[int, float]]:
    """
    Look up the register field and scale for a sensitivity range.

    Args:
        sensitivity: SensitivityRange member or its label (e.g. "1.3")

    Returns:
        (field_value, scale) tuple, or None if the range is unknown
    """
    if not isinstance(sensitivity, SensitivityRange):
        try:
            sensitivity = SensitivityRange(sensitivity)
        except ValueError:
            return None
    return GAIN_TABLE[sensitivity]
