#!/usr/bin/env python3

from typing import Callable
import functools
import logging


def log_exceptions(func: Callable) -> Callable:
    """
    Log a failed bus operation with its traceback, then re-raise.

    Used on the driver methods that touch the I2C bus, so a NACK or a
    missing /dev/i2c-N shows up in the driver's log even when the caller
    handles the OSError itself:

    >>> from pyhmc5883l.tools import log_exceptions
    >>>
    >>> class Compass:
    ...
    ...     @log_exceptions
    ...     def program_gain(self, bus, field_value):
    ...         bus.write_byte_data(0x1E, 0x01, field_value)

    Records go to the logger named after the module that defines ``func``
    (e.g. ``pyhmc5883l.sensor``) and name the failing method by its
    qualified name, e.g. ``HMC5883L.initialize``.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            logging.getLogger(func.__module__).error(
                "%s failed: %s", func.__qualname__, exc, exc_info=True
            )
            raise

    return wrapper
