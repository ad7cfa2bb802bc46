"""
HMC5883L Magnetometer Driver
============================

A Python driver for the Honeywell HMC5883L three-axis magnetometer
on a Linux I2C bus.

The driver owns one Configuration and one transport. Several drivers can
coexist (e.g. one per bus), each with its own gain and declination.

Example:
    >>> from pyhmc5883l import HMC5883L
    >>>
    >>> # Using context manager (recommended)
    >>> with HMC5883L(bus=1, gain="1.3", declination_degrees=4) as sensor:
    ...     print(sensor.format_result())
    X: 210.45, Y: -95.22, Z: -401.96, Heading: 340°
    >>>
    >>> # Manual connection
    >>> sensor = HMC5883L(bus=1)
    >>> sensor.connect()
    >>> sensor.initialize()
    >>> reading = sensor.read()
    >>> sensor.disconnect()

Reference: Honeywell HMC5883L datasheet, Form #900405
"""

import logging
from dataclasses import replace
from typing import List, Optional, Union

from .data_types import Configuration, MagReading, RegisterWrite
from .formatter import format_result
from .registers import DEVICE_ADDRESS, SAMPLE_SIZE, Register, SensitivityRange
from .tools.mathtools import compute_heading
from .tools.utilities import log_exceptions
from .transport import SMBusTransport

logger = logging.getLogger(__name__)


class HMC5883L:
    """
    HMC5883L magnetometer.

    Attributes:
        DEFAULT_BUS: I2C bus number used when none is given
        DEFAULT_ADDRESS: Fixed device address (0x1E)
        DEFAULT_GAIN: Power-on sensitivity range (1.3 Ga)
    """

    DEFAULT_BUS = 1
    DEFAULT_ADDRESS = DEVICE_ADDRESS
    DEFAULT_GAIN = SensitivityRange.GA_1_3

    def __init__(
        self,
        bus: int = DEFAULT_BUS,
        address: int = DEFAULT_ADDRESS,
        gain: Union[SensitivityRange, str] = DEFAULT_GAIN,
        declination_degrees: float = 0.0,
        declination_minutes: float = 0.0,
        transport=None,
        auto_connect: bool = False,
    ):
        """
        Initialize the driver.

        Args:
            bus: I2C bus number (ignored when transport is given)
            address: Device address (ignored when transport is given)
            gain: Sensitivity range, SensitivityRange or label like "1.3"
            declination_degrees: Local declination, whole degrees
            declination_minutes: Local declination, arc-minutes
            transport: Object with open/close/is_open/write_register/read_bytes.
                       Defaults to an SMBusTransport on the given bus.
            auto_connect: Connect and initialize on construction
        """
        self.gain = gain
        self.declination_degrees = declination_degrees
        self.declination_minutes = declination_minutes

        self.config = Configuration()
        self.transport = transport if transport is not None else SMBusTransport(bus, address)
        self._program: Optional[List[RegisterWrite]] = None

        if auto_connect:
            self.connect()
            self.initialize()

    def __enter__(self) -> 'HMC5883L':
        """Context manager entry: connect and program the sensor."""
        self.connect()
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()

    # =========================================================================
    # Connection Management
    # =========================================================================

    @log_exceptions
    def connect(self) -> None:
        """
        Open the transport.

        Raises:
            OSError: If the bus cannot be opened
        """
        self.transport.open()

    def disconnect(self) -> None:
        """Close the transport."""
        self.transport.close()

    @property
    def is_connected(self) -> bool:
        """True while the transport is open.

        An open bus does not mean the device answers; the first
        register write will fail with OSError if it is absent.
        """
        return self.transport.is_open

    def _check_connected(self) -> None:
        if not self.is_connected:
            raise ConnectionError("Not connected to HMC5883L")

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def program(self) -> Optional[List[RegisterWrite]]:
        """Register program sent by the last initialize(), if any."""
        return self._program

    @log_exceptions
    def initialize(self) -> List[RegisterWrite]:
        """
        Apply the configuration and program the sensor.

        Writes are issued in program order: gain (when the range is known),
        configuration register A, then mode register. The new configuration
        takes effect only after every write succeeds, so a bus error leaves
        the previous scale and declination in place.

        Returns:
            The register program that was written
        """
        self._check_connected()

        config = replace(self.config)
        program = config.apply(
            self.gain, self.declination_degrees, self.declination_minutes
        )
        for write in program:
            self.transport.write_register(write.register, write.value)

        self.config = config
        self._program = program
        logger.info(
            "HMC5883L configured: scale=%.2f declination=%.4f rad",
            self.config.scale, self.config.declination_radians
        )
        return program

    def reconfigure(
        self,
        gain: Union[SensitivityRange, str],
        declination_degrees: float = 0.0,
        declination_minutes: float = 0.0,
    ) -> List[RegisterWrite]:
        """
        Change range and declination, then re-program the sensor.

        An unknown gain keeps the previous scale, see Configuration.apply.
        If programming fails the previous settings are restored and the
        bus error is re-raised.
        """
        previous = (self.gain, self.declination_degrees, self.declination_minutes)
        self.gain = gain
        self.declination_degrees = declination_degrees
        self.declination_minutes = declination_minutes
        try:
            return self.initialize()
        except Exception:
            self.gain, self.declination_degrees, self.declination_minutes = previous
            raise

    # =========================================================================
    # Measurements
    # =========================================================================

    @log_exceptions
    def read_raw(self) -> bytes:
        """Read the 6 data output bytes (X, Z, Y; MSB first)."""
        self._check_connected()
        return self.transport.read_bytes(Register.DATA_X_MSB, SAMPLE_SIZE)

    def read(self) -> MagReading:
        """
        Read one calibrated sample.

        Returns:
            MagReading in milligauss, rounded to 2 decimal places
        """
        return MagReading.from_bytes(self.read_raw(), self.config.scale)

    def heading_of(self, reading: MagReading) -> int:
        """Heading in degrees for an already-read sample."""
        return compute_heading(reading.x, reading.y, self.config.declination_radians)

    def heading(self) -> int:
        """Read one sample and return the compass heading in degrees."""
        return self.heading_of(self.read())

    def format_result(self) -> str:
        """Read one sample and render it with its heading."""
        reading = self.read()
        return format_result(reading, self.heading_of(reading))
