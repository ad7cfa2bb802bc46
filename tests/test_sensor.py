"""
Driver Test Suite for PyHMC5883L
================================

This test suite validates:
1. Transport register access over a mocked smbus2 bus
2. Driver initialization and register write ordering
3. Reading, heading and formatting through the driver
4. Error handling for closed buses and bus failures
5. The hmc5883l-read command line tool

Run with:
    pytest tests/test_sensor.py -v
    pytest tests/test_sensor.py::TestDriverInitialize -v  # Single class
"""

import logging
import math
from unittest.mock import patch

import pytest

from pyhmc5883l import HMC5883L, SMBusTransport, MagReading, SensitivityRange
from pyhmc5883l.cli import SimulatedTransport, run_reader_cli


# =============================================================================
# FIXTURES AND MOCKS
# =============================================================================

REFERENCE_SAMPLE = [0x00, 0x0A, 0x00, 0x05, 0xFF, 0xF6]


class MockBus:
    """Mock smbus2.SMBus for testing without hardware."""

    def __init__(self, bus=None):
        self.bus = bus
        self.written = []
        self.reads = []
        self.sample = list(REFERENCE_SAMPLE)
        self.closed = False
        self.fail_writes = False

    def write_byte_data(self, i2c_addr, register, value):
        if self.fail_writes:
            raise OSError(121, "Remote I/O error")
        self.written.append((i2c_addr, register, value))

    def read_i2c_block_data(self, i2c_addr, register, length):
        self.reads.append((i2c_addr, register, length))
        return self.sample[:length]

    def close(self):
        self.closed = True

    def get_registers_written(self) -> list:
        """(register, value) pairs in write order."""
        return [(reg, val) for _, reg, val in self.written]


@pytest.fixture
def mock_bus():
    """Patch smbus2.SMBus inside the transport module."""
    bus = MockBus()
    with patch('pyhmc5883l.transport.SMBus') as mock_smbus_class:
        mock_smbus_class.return_value = bus
        yield bus


@pytest.fixture
def sensor(mock_bus):
    """Connected driver on a mock bus."""
    sensor = HMC5883L(bus=1)
    sensor.connect()
    yield sensor
    sensor.disconnect()


# =============================================================================
# TRANSPORT
# =============================================================================

class TestTransport:
    """Test the smbus2 adapter."""

    def test_open_and_close(self, mock_bus):
        transport = SMBusTransport(bus=1)
        assert not transport.is_open

        transport.open()
        assert transport.is_open

        transport.close()
        assert not transport.is_open
        assert mock_bus.closed

    def test_open_uses_bus_number(self):
        with patch('pyhmc5883l.transport.SMBus') as mock_smbus_class:
            with SMBusTransport(bus=3):
                pass
            mock_smbus_class.assert_called_once_with(3)

    def test_open_twice_keeps_bus(self):
        with patch('pyhmc5883l.transport.SMBus') as mock_smbus_class:
            transport = SMBusTransport()
            transport.open()
            transport.open()
            assert mock_smbus_class.call_count == 1

    def test_write_register(self, mock_bus):
        with SMBusTransport(bus=1, address=0x1E) as transport:
            transport.write_register(0x01, 0x20)
        assert mock_bus.written == [(0x1E, 0x01, 0x20)]

    def test_read_bytes_returns_bytes(self, mock_bus):
        with SMBusTransport() as transport:
            data = transport.read_bytes(0x03, 6)
        assert data == bytes(REFERENCE_SAMPLE)
        assert mock_bus.reads == [(0x1E, 0x03, 6)]

    def test_closed_transport_raises(self):
        transport = SMBusTransport()
        with pytest.raises(ConnectionError):
            transport.write_register(0x02, 0x00)
        with pytest.raises(ConnectionError):
            transport.read_bytes(0x03, 6)


# =============================================================================
# DRIVER - INITIALIZE
# =============================================================================

class TestDriverInitialize:
    """Test register programming through the driver."""

    def test_initialize_writes_program_in_order(self, sensor, mock_bus):
        program = sensor.initialize()

        assert mock_bus.get_registers_written() == [
            (0x01, 0x20),
            (0x00, 0x70),
            (0x02, 0x00),
        ]
        assert program == [(0x01, 0x20), (0x00, 0x70), (0x02, 0x00)]
        assert sensor.program == program

    def test_initialize_uses_device_address(self, sensor, mock_bus):
        sensor.initialize()
        assert {addr for addr, _, _ in mock_bus.written} == {0x1E}

    def test_initialize_with_enum_gain(self, mock_bus):
        sensor = HMC5883L(gain=SensitivityRange.GA_4_7)
        sensor.connect()
        sensor.initialize()

        assert mock_bus.get_registers_written()[0] == (0x01, 0xA0)
        assert sensor.config.scale == 2.56

    def test_unknown_gain_skips_gain_write(self, mock_bus):
        sensor = HMC5883L(gain="bogus")
        sensor.connect()
        sensor.initialize()

        assert mock_bus.get_registers_written() == [(0x00, 0x70), (0x02, 0x00)]
        assert sensor.config.scale == 0.92

    def test_reconfigure_keeps_scale_on_unknown_gain(self, sensor, mock_bus):
        sensor.reconfigure("5.6")
        mock_bus.written.clear()

        sensor.reconfigure("bogus", 2, 0)

        assert mock_bus.get_registers_written() == [(0x00, 0x70), (0x02, 0x00)]
        assert sensor.config.scale == 3.03
        assert sensor.config.declination_radians == pytest.approx(math.radians(2))

    def test_initialize_twice_is_identical(self, sensor, mock_bus):
        first = sensor.initialize()
        second = sensor.initialize()

        assert first == second
        written = mock_bus.get_registers_written()
        assert written[:3] == written[3:]

    def test_initialize_requires_connection(self, mock_bus):
        sensor = HMC5883L()
        with pytest.raises(ConnectionError):
            sensor.initialize()
        assert mock_bus.written == []

    def test_context_manager(self, mock_bus):
        with HMC5883L(bus=1) as sensor:
            assert sensor.is_connected
            assert len(mock_bus.written) == 3
        assert not sensor.is_connected
        assert mock_bus.closed

    def test_auto_connect(self, mock_bus):
        sensor = HMC5883L(auto_connect=True)
        assert sensor.is_connected
        assert len(mock_bus.written) == 3
        sensor.disconnect()

    def test_instances_have_independent_configuration(self, mock_bus):
        a = HMC5883L(gain="0.88", auto_connect=True)
        b = HMC5883L(gain="8.1", declination_degrees=10, auto_connect=True)

        assert a.config.scale == 0.73
        assert b.config.scale == 4.35
        assert a.config.declination_radians == 0.0
        assert b.config is not a.config


# =============================================================================
# DRIVER - MEASUREMENTS
# =============================================================================

class TestDriverMeasurements:
    """Test reading, heading and formatting through the driver."""

    def test_read_requests_six_bytes_from_data_register(self, sensor, mock_bus):
        sensor.initialize()
        sensor.read()
        assert mock_bus.reads == [(0x1E, 0x03, 6)]

    def test_read_decodes_with_scale(self, sensor):
        sensor.initialize()
        reading = sensor.read()
        assert reading == MagReading(x=9.2, y=-9.2, z=4.6)

    def test_read_uses_updated_scale(self, sensor):
        sensor.reconfigure("8.1")
        reading = sensor.read()
        assert reading.x == 43.5
        assert reading.y == -43.5

    def test_read_raw(self, sensor):
        assert sensor.read_raw() == bytes(REFERENCE_SAMPLE)

    def test_heading(self, sensor):
        sensor.initialize()
        assert sensor.heading() == 315

    def test_heading_with_declination(self, mock_bus):
        with HMC5883L(declination_degrees=4, declination_minutes=12) as sensor:
            assert sensor.heading() == 319

    def test_heading_north(self, sensor, mock_bus):
        mock_bus.sample = [0x01, 0x00, 0x00, 0x00, 0x00, 0x00]
        sensor.initialize()
        assert sensor.heading() == 0

    def test_format_result(self, sensor):
        sensor.initialize()
        assert sensor.format_result() == "X: 9.20, Y: -9.20, Z: 4.60, Heading: 315°"

    def test_format_result_reads_once(self, sensor, mock_bus):
        sensor.initialize()
        sensor.format_result()
        assert len(mock_bus.reads) == 1

    def test_read_requires_connection(self, mock_bus):
        sensor = HMC5883L()
        with pytest.raises(ConnectionError):
            sensor.read()

    def test_short_read_raises(self, sensor, mock_bus):
        mock_bus.sample = [0x00, 0x01, 0x00]
        with pytest.raises(ValueError):
            sensor.read()


# =============================================================================
# ERROR HANDLING
# =============================================================================

class TestErrorHandling:
    """Test propagation and logging of bus failures."""

    def test_bus_error_propagates(self, sensor, mock_bus):
        mock_bus.fail_writes = True
        with pytest.raises(OSError):
            sensor.initialize()
        assert sensor.program is None

    def test_bus_error_is_logged(self, sensor, mock_bus, caplog):
        mock_bus.fail_writes = True
        with caplog.at_level(logging.ERROR, logger="pyhmc5883l.sensor"):
            with pytest.raises(OSError):
                sensor.initialize()
        assert "HMC5883L.initialize failed" in caplog.text

    def test_failed_reconfigure_keeps_previous_scale(self, mock_bus):
        sensor = HMC5883L(gain="1.3", auto_connect=True)
        mock_bus.fail_writes = True

        with pytest.raises(OSError):
            sensor.reconfigure("8.1", 10, 0)

        assert sensor.config.scale == 0.92
        assert sensor.config.declination_radians == 0.0
        assert sensor.gain == "1.3"
        assert sensor.declination_degrees == 0.0

        mock_bus.fail_writes = False
        assert sensor.read() == MagReading(x=9.2, y=-9.2, z=4.6)
        assert sensor.heading() == 315
        sensor.disconnect()

    def test_failed_initialize_keeps_configuration_object(self, sensor, mock_bus):
        sensor.initialize()
        config = sensor.config
        mock_bus.fail_writes = True
        sensor.gain = "5.6"

        with pytest.raises(OSError):
            sensor.initialize()

        assert sensor.config is config
        assert sensor.config.scale == 0.92

    def test_successful_reconfigure_replaces_configuration(self, sensor):
        sensor.initialize()
        before = sensor.config

        sensor.reconfigure("2.5")

        assert sensor.config is not before
        assert sensor.config.scale == 1.52
        assert before.scale == 0.92

    def test_open_failure_propagates(self):
        with patch('pyhmc5883l.transport.SMBus', side_effect=FileNotFoundError(2, "No such file")):
            sensor = HMC5883L(bus=9)
            with pytest.raises(OSError):
                sensor.connect()
            assert not sensor.is_connected

    def test_custom_transport(self):
        transport = SimulatedTransport()
        with HMC5883L(transport=transport) as sensor:
            assert sensor.read() == MagReading(x=9.2, y=-9.2, z=4.6)
        assert not transport.is_open


# =============================================================================
# COMMAND LINE
# =============================================================================

class TestCli:
    """Test the hmc5883l-read tool."""

    def test_test_mode_prints_samples(self, capsys):
        run_reader_cli(['--test', '--count', '2', '--interval', '0'])
        out = capsys.readouterr().out

        assert "TEST MODE" in out
        assert "[MOCK] 0x01 <- 0x20" in out
        assert out.count("X: 9.20, Y: -9.20, Z: 4.60, Heading: 315°") == 2

    def test_gain_and_declination_flags(self, capsys):
        run_reader_cli(['--test', '--count', '1', '--gain', '8.1',
                        '--declination', '4', '12'])
        out = capsys.readouterr().out

        assert "[MOCK] 0x01 <- 0xE0" in out
        assert "X: 43.50, Y: -43.50, Z: 21.75, Heading: 319°" in out

    def test_invalid_gain_rejected(self):
        with pytest.raises(SystemExit):
            run_reader_cli(['--test', '--gain', 'bogus'])

    def test_hardware_mode_uses_bus(self, mock_bus, capsys):
        run_reader_cli(['--bus', '1', '--count', '1'])
        out = capsys.readouterr().out

        assert "Connected to HMC5883L on bus 1" in out
        assert len(mock_bus.written) == 3
        assert mock_bus.closed

    def test_connection_failure_exits(self, capsys):
        with patch('pyhmc5883l.transport.SMBus', side_effect=OSError(2, "No such file")):
            with pytest.raises(SystemExit) as excinfo:
                run_reader_cli(['--bus', '7', '--count', '1'])
        assert excinfo.value.code == 1
        assert "ERROR" in capsys.readouterr().out
