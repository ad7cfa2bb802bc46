"""
Command-line reader for the HMC5883L.

Entry point for the ``hmc5883l-read`` command:

    hmc5883l-read --bus 1 --gain 1.3 --declination 4 12 --interval 0.5
    hmc5883l-read --test --count 3
"""

import argparse
import logging
import sys
import time

from .registers import DEVICE_ADDRESS, SensitivityRange


class SimulatedTransport:
    """Stands in for the I2C bus in --test mode."""

    # X=+10, Z=+5, Y=-10 counts
    SAMPLE = bytes([0x00, 0x0A, 0x00, 0x05, 0xFF, 0xF6])

    def __init__(self):
        self.is_open = False

    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False

    def write_register(self, register, value):
        print(f"  [MOCK] 0x{register:02X} <- 0x{value:02X}")

    def read_bytes(self, register, count):
        return self.SAMPLE[:count]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hmc5883l-read",
        description="HMC5883L Magnetometer Reader",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    hmc5883l-read --bus 1 --gain 1.3 --declination 4 12

Prints one line per sample:
    X: 9.20, Y: -9.20, Z: 4.60, Heading: 315°
        """
    )
    parser.add_argument('--bus', type=int, default=1,
                        help='I2C bus number (default: 1)')
    parser.add_argument('--address', type=lambda s: int(s, 0), default=DEVICE_ADDRESS,
                        help='Device address (default: 0x1E)')
    parser.add_argument('--gain', '-g', default=SensitivityRange.GA_1_3.value,
                        choices=[r.value for r in SensitivityRange],
                        help='Sensitivity range in gauss (default: 1.3)')
    parser.add_argument('--declination', '-d', type=float, nargs=2,
                        default=[0.0, 0.0], metavar=('DEG', 'MIN'),
                        help='Magnetic declination in degrees and minutes')
    parser.add_argument('--interval', '-i', type=float, default=0.5,
                        help='Seconds between samples (default: 0.5)')
    parser.add_argument('--count', '-n', type=int, default=0,
                        help='Number of samples, 0 = until Ctrl+C (default: 0)')
    parser.add_argument('--test', action='store_true',
                        help='Test mode with simulated sensor')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log register traffic')
    return parser


def run_reader_cli(argv=None):
    """
    Command-line interface for periodic readings.

    Entry point for `hmc5883l-read` command.
    """
    from .sensor import HMC5883L

    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    transport = None
    if args.test:
        print("TEST MODE - Using simulated sensor")
        transport = SimulatedTransport()

    sensor = HMC5883L(
        bus=args.bus,
        address=args.address,
        gain=args.gain,
        declination_degrees=args.declination[0],
        declination_minutes=args.declination[1],
        transport=transport,
    )

    try:
        sensor.connect()
        sensor.initialize()
        if not args.test:
            print(f"✓ Connected to HMC5883L on bus {args.bus}")
    except OSError as e:
        print(f"ERROR: Could not connect to sensor: {e}")
        sensor.disconnect()
        sys.exit(1)

    try:
        taken = 0
        while args.count <= 0 or taken < args.count:
            print(sensor.format_result())
            taken += 1
            if args.count <= 0 or taken < args.count:
                time.sleep(args.interval)
    except KeyboardInterrupt:
        print("\nStopped.")
    finally:
        sensor.disconnect()


if __name__ == '__main__':
    run_reader_cli()
