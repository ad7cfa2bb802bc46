"""
Data Types for the HMC5883L Magnetometer
========================================

This module contains the data structures used by the driver.
They are pure Python dataclasses with no bus dependencies, so they can be
fed bytes from any transport.

A raw sample is the 6 data output registers read in one transaction:
    X MSB, X LSB, Z MSB, Z LSB, Y MSB, Y LSB
"""

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Union

from .registers import (
    CONFIG_A_DEFAULT,
    DEFAULT_SCALE,
    MODE_CONTINUOUS,
    SAMPLE_SIZE,
    Register,
    SensitivityRange,
    lookup_gain,
)
from .tools.mathtools import declination_to_radians, round_half_up, to_signed16

logger = logging.getLogger(__name__)


class RegisterWrite(NamedTuple):
    """A single register write the transport must perform."""
    register: int
    value: int

    def __str__(self) -> str:
        return f"0x{self.register:02X} <- 0x{self.value:02X}"


@dataclass
class MagReading:
    """
    Calibrated magnetometer reading.

    Units:
        - x, y, z: milligauss, rounded to 2 decimal places
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_bytes(cls, raw: Sequence[int], scale: float) -> 'MagReading':
        """
        Decode a raw sample.

        Args:
            raw: 6 bytes in X, Z, Y order, high byte first
            scale: Scale factor for the configured range

        Returns:
            MagReading instance

        Raises:
            ValueError: If raw is not exactly 6 bytes long
        """
        if len(raw) != SAMPLE_SIZE:
            raise ValueError(
                f"Expected {SAMPLE_SIZE} sample bytes, got {len(raw)}"
            )

        x = to_signed16((raw[0] << 8) | raw[1])
        z = to_signed16((raw[2] << 8) | raw[3])
        y = to_signed16((raw[4] << 8) | raw[5])

        return cls(
            x=round_half_up(x * scale, 2),
            y=round_half_up(y * scale, 2),
            z=round_half_up(z * scale, 2),
        )

    def as_tuple(self) -> tuple:
        return (self.x, self.y, self.z)


def decode_sample(raw: Sequence[int], scale: float) -> MagReading:
    """Decode 6 raw data bytes into a calibrated reading."""
    return MagReading.from_bytes(raw, scale)


@dataclass
class Configuration:
    """
    Sensor configuration owned by one driver instance.

    Attributes
    ----------
    scale : float
        Milligauss per LSb of the active range
    declination_radians : float
        Offset between magnetic and true north
    """
    scale: float = DEFAULT_SCALE
    declination_radians: float = 0.0

    def apply(
        self,
        sensitivity: Union[SensitivityRange, str, None],
        declination_degrees: float = 0.0,
        declination_minutes: float = 0.0,
    ) -> List[RegisterWrite]:
        """
        Update the configuration and build the register program.

        An unknown range keeps the current scale and emits no gain write;
        the averaging/rate and mode writes are always emitted.

        Args:
            sensitivity: SensitivityRange member or its label (e.g. "1.3")
            declination_degrees: Whole degrees of declination
            declination_minutes: Arc-minutes of declination

        Returns:
            Ordered list of RegisterWrite to execute on the device
        """
        program: List[RegisterWrite] = []

        gain = lookup_gain(sensitivity)
        if gain is not None:
            field_value, self.scale = gain
            program.append(RegisterWrite(Register.CONFIG_B, field_value))
        else:
            logger.warning(
                "Unknown sensitivity range %r, keeping scale %.2f",
                sensitivity, self.scale
            )

        self.declination_radians = declination_to_radians(
            declination_degrees, declination_minutes
        )

        program.append(RegisterWrite(Register.CONFIG_A, CONFIG_A_DEFAULT))
        program.append(RegisterWrite(Register.MODE, MODE_CONTINUOUS))
        return program
