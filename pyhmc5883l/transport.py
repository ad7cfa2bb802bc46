"""
I2C Transport
=============

Thin adapter over ``smbus2`` that gives the driver two primitives:

    write_register(register, value)   - one register write
    read_bytes(register, count)       - block read starting at register

Any object with these two methods can be handed to the driver instead,
which is how the tests and the CLI ``--test`` mode run without hardware.
"""

import logging
from typing import Optional

from smbus2 import SMBus

from .registers import DEVICE_ADDRESS

logger = logging.getLogger(__name__)


class SMBusTransport:
    """
    Register access to one device on a Linux I2C bus.

    Bus errors are raised by smbus2 as OSError and are not retried.
    """

    def __init__(self, bus: int = 1, address: int = DEVICE_ADDRESS):
        """
        Args:
            bus: I2C bus number (1 on a Raspberry Pi, /dev/i2c-1)
            address: 7-bit device address
        """
        self.bus = bus
        self.address = address
        self._smbus: Optional[SMBus] = None

    def __enter__(self) -> 'SMBusTransport':
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def open(self) -> None:
        """
        Open the bus device.

        Raises:
            OSError: If the bus device cannot be opened
        """
        if self._smbus is not None:
            return
        self._smbus = SMBus(self.bus)
        logger.debug("Opened I2C bus %d for device 0x%02X", self.bus, self.address)

    def close(self) -> None:
        if self._smbus is not None:
            self._smbus.close()
            self._smbus = None
            logger.debug("Closed I2C bus %d", self.bus)

    @property
    def is_open(self) -> bool:
        return self._smbus is not None

    def _require_bus(self) -> SMBus:
        if self._smbus is None:
            raise ConnectionError(f"I2C bus {self.bus} is not open")
        return self._smbus

    def write_register(self, register: int, value: int) -> None:
        """Write one byte to a device register."""
        bus = self._require_bus()
        logger.debug("Write 0x%02X <- 0x%02X", register, value)
        bus.write_byte_data(self.address, register, value)

    def read_bytes(self, register: int, count: int) -> bytes:
        """Read count bytes starting at register in one transaction."""
        bus = self._require_bus()
        data = bytes(bus.read_i2c_block_data(self.address, register, count))
        logger.debug("Read %d bytes from 0x%02X: %s", count, register, data.hex())
        return data
