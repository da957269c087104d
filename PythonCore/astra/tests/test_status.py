import unittest
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from astra.state import DeviceState, INITIAL_STATE, invariant_violations
from astra.status import status_blocks, format_status


class TestStatus(unittest.TestCase):
    def test_initial_blocks(self):
        blocks = {b.label: b for b in status_blocks(INITIAL_STATE)}
        self.assertEqual(len(blocks), 8)
        self.assertEqual(blocks["Wi-Fi"].value, "Connected")
        self.assertEqual(blocks["Bluetooth"].meta, "Connected devices paused")
        self.assertEqual(blocks["Sound"].value, "46%")
        self.assertEqual(blocks["Alerts"].value, "Standard")

    def test_silent_and_focus_labels(self):
        s = DeviceState(silent_mode_on=True, volume_percent=0, do_not_disturb_on=True)
        blocks = {b.label: b for b in status_blocks(s)}
        self.assertEqual(blocks["Silent"].value, "Muted")
        self.assertEqual(blocks["Focus"].meta, "Priority only")

    def test_format_status_mentions_brightness(self):
        text = format_status(INITIAL_STATE)
        self.assertIn("Brightness", text)
        self.assertIn("72%", text)


class TestDeviceState(unittest.TestCase):
    def test_initial_snapshot(self):
        s = INITIAL_STATE
        self.assertTrue(s.wifi_enabled)
        self.assertTrue(s.location_enabled)
        self.assertFalse(s.bluetooth_enabled)
        self.assertEqual(s.brightness_percent, 72)
        self.assertEqual(s.volume_percent, 46)

    def test_round_trip_dict(self):
        s = DeviceState(flashlight_on=True, volume_percent=10)
        self.assertEqual(DeviceState.from_dict(s.to_dict()), s)

    def test_from_dict_rejects_unknown(self):
        with self.assertRaises(ValueError):
            DeviceState.from_dict({"nfc": True})

    def test_violations(self):
        bad = DeviceState(airplane_mode_on=True, wifi_enabled=True, brightness_percent=120)
        problems = invariant_violations(bad)
        self.assertEqual(len(problems), 2)
        self.assertEqual(invariant_violations(INITIAL_STATE), [])


if __name__ == "__main__":
    unittest.main()
