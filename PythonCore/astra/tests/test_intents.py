import unittest
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from astra.intents import IntentKind, NO_MATCH, RULES, match
from astra.normalizer import EmptyInputError, normalize


class TestNormalizer(unittest.TestCase):
    def test_trims_and_lowercases(self):
        self.assertEqual(normalize("  Turn ON WiFi \n"), "turn on wifi")

    def test_empty_raises(self):
        with self.assertRaises(EmptyInputError):
            normalize("   ")
        with self.assertRaises(EmptyInputError):
            normalize(None)


class TestIntentMatcher(unittest.TestCase):
    def test_toggle_captures(self):
        intent = match("switch off bluetooth")
        self.assertEqual(intent.kind, IntentKind.TOGGLE)
        self.assertEqual(intent.captures["field"], "bluetooth_enabled")
        self.assertEqual(intent.captures["label"], "Bluetooth")
        self.assertFalse(intent.captures["desired"])

    def test_feature_order_wins(self):
        # wifi is checked before bluetooth
        intent = match("turn on bluetooth and wifi")
        self.assertEqual(intent.captures["field"], "wifi_enabled")

    def test_toggle_beats_mute_rule(self):
        intent = match("turn on mute")
        self.assertEqual(intent.kind, IntentKind.TOGGLE)
        self.assertEqual(intent.captures["field"], "silent_mode_on")

    def test_unmute_is_not_mute(self):
        self.assertEqual(match("unmute phone").kind, IntentKind.UNMUTE)
        self.assertEqual(match("mute phone").kind, IntentKind.MUTE)
        self.assertEqual(match("silence the device").kind, IntentKind.MUTE)

    def test_mute_rule_precedes_volume_set(self):
        self.assertEqual(match("mute and set volume to 20").kind, IntentKind.MUTE)

    def test_relative_precedes_absolute(self):
        intent = match("increase brightness to 90")
        self.assertEqual(intent.kind, IntentKind.BRIGHTNESS_ADJUST)
        self.assertEqual(intent.captures["delta"], 12)

    def test_absolute_value_is_int(self):
        intent = match("volume to 75")
        self.assertEqual(intent.kind, IntentKind.VOLUME_SET)
        self.assertEqual(intent.captures["value"], 75)

    def test_call_captures_letters_only(self):
        intent = match("call alex johnson")
        self.assertEqual(intent.kind, IntentKind.CALL)
        self.assertEqual(intent.captures["name"].strip(), "alex johnson")
        self.assertIs(match("recall that"), NO_MATCH)

    def test_message_body_optional(self):
        intent = match("send a message to taylor saying running late")
        self.assertEqual(intent.kind, IntentKind.MESSAGE)
        self.assertEqual(intent.captures["name"], "taylor")
        self.assertEqual(intent.captures["body"], "running late")
        intent = match("send a message to taylor")
        self.assertIsNone(intent.captures["body"])

    def test_open_app_vocabulary(self):
        self.assertEqual(match("open maps").captures["app"], "maps")
        self.assertIs(match("open browser"), NO_MATCH)

    def test_dnd_requires_verb(self):
        self.assertEqual(match("disable dnd").captures["desired"], False)
        self.assertIs(match("dnd"), NO_MATCH)

    def test_rule_table_size(self):
        # 7 features x on/off, 2 dnd, 2+1 brightness, 2 volume, mute, unmute,
        # volume set, call, message, app, battery
        self.assertEqual(len(RULES), 28)


if __name__ == "__main__":
    unittest.main()
