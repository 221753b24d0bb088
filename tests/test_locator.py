"""
Unit tests for serial endpoint discovery
"""

from types import SimpleNamespace
import unittest
from unittest.mock import patch

from monitors.water_monitor.libs.wm_protocol.exceptions import ConnectionError
from monitors.water_monitor.libs.wm_protocol.locator import find_port, locate

LOCATOR = "monitors.water_monitor.libs.wm_protocol.locator"


def usb_port(device, serial_number, vid=0x0483):
    return SimpleNamespace(device=device, vid=vid, serial_number=serial_number)


def plain_port(device):
    # Built-in UARTs and Bluetooth ports have no USB metadata
    return SimpleNamespace(device=device, vid=None, serial_number=None)


class TestFindPort(unittest.TestCase):
    """Test port matching"""

    def test_single_match(self):
        ports = [usb_port("/dev/ttyUSB0", "A1B2"), usb_port("/dev/ttyACM0", "WM")]
        self.assertEqual(find_port("WM", ports), "/dev/ttyACM0")

    def test_no_match(self):
        ports = [usb_port("/dev/ttyUSB0", "A1B2"), usb_port("/dev/ttyUSB1", None)]
        self.assertIsNone(find_port("WM", ports))

    def test_empty(self):
        self.assertIsNone(find_port("WM", []))

    def test_skips_ports_without_usb_metadata(self):
        ports = [plain_port("/dev/ttyS0"), plain_port("/dev/ttyAMA0"),
                 usb_port("/dev/ttyACM1", "WM")]
        self.assertEqual(find_port("WM", ports), "/dev/ttyACM1")

    def test_metadata_less_objects(self):
        ports = [SimpleNamespace(device="/dev/ttyS1"), usb_port("/dev/ttyACM0", "WM")]
        self.assertEqual(find_port("WM", ports), "/dev/ttyACM0")

    def test_first_match_wins(self):
        ports = [usb_port("/dev/ttyACM0", "WM"), usb_port("/dev/ttyACM1", "WM")]
        self.assertEqual(find_port("WM", ports), "/dev/ttyACM0")

    def test_serial_number_must_match_exactly(self):
        self.assertIsNone(find_port("WM", [usb_port("/dev/ttyACM0", "WM2")]))

    def test_enumerates_system_ports_by_default(self):
        with patch(f"{LOCATOR}.serial.tools.list_ports.comports",
                   return_value=[usb_port("COM4", "WM")]):
            self.assertEqual(find_port("WM"), "COM4")


class TestLocate(unittest.TestCase):
    """Test opening the located port"""

    def test_not_found_returns_none(self):
        with patch(f"{LOCATOR}.SerialTransport") as transport_cls:
            self.assertIsNone(locate("WM", ports=[plain_port("/dev/ttyS0")]))
            transport_cls.assert_not_called()

    def test_opens_matching_port(self):
        with patch(f"{LOCATOR}.SerialTransport") as transport_cls:
            transport = locate("WM", baudrate=115200, timeout=0.5,
                               ports=[usb_port("/dev/ttyACM0", "WM")])

        transport_cls.assert_called_once_with("/dev/ttyACM0", baudrate=115200, timeout=0.5)
        transport_cls.return_value.open.assert_called_once_with()
        self.assertIs(transport, transport_cls.return_value)

    def test_open_failure_propagates(self):
        with patch(f"{LOCATOR}.SerialTransport") as transport_cls:
            transport_cls.return_value.open.side_effect = ConnectionError("busy")
            with self.assertRaises(ConnectionError):
                locate("WM", ports=[usb_port("/dev/ttyACM0", "WM")])


if __name__ == '__main__':
    unittest.main()
