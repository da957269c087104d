import re
import unittest
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from astra.action_history import ActivityLog, ActivityEntry, new_entry_id


class TestActivityLog(unittest.TestCase):
    def test_newest_first(self):
        h = ActivityLog(max_entries=14)
        h.record("turn on bluetooth", "Bluetooth is now on.", True, "voice")
        h.record("mute", "Muting the phone.", True, "text")
        last = h.get_last()
        self.assertIsNotNone(last)
        self.assertEqual(last.command, "mute")
        self.assertEqual(last.source, "text")
        self.assertEqual([e.command for e in h.entries()], ["mute", "turn on bluetooth"])

    def test_cap(self):
        h = ActivityLog(max_entries=14)
        for i in range(20):
            h.record(f"volume {i}", f"Volume set to {i}%", True)
        self.assertEqual(len(h), 14)
        self.assertEqual(h.get_last().command, "volume 19")
        self.assertEqual(h.entries()[-1].command, "volume 6")

    def test_no_history(self):
        h = ActivityLog()
        self.assertIsNone(h.get_last())
        self.assertEqual(h.entries(), [])

    def test_unknown_source_falls_back_to_voice(self):
        h = ActivityLog()
        entry = h.push(ActivityEntry(command="call sam", result="Placing a call to Sam...", success=True, source="pager"))
        self.assertEqual(entry.source, "voice")

    def test_entry_shape(self):
        entry = ActivityEntry(command="make me a sandwich", result="nope", success=False)
        d = entry.to_dict()
        self.assertEqual(set(d), {"id", "command", "timestamp", "result", "success", "source"})
        self.assertTrue(d["timestamp"].endswith("Z"))
        self.assertRegex(new_entry_id(1.5), r"^1500-[0-9a-z]{6}$")
        self.assertTrue(re.match(r"^\d+-[0-9a-z]{6}$", entry.id))

    def test_clear(self):
        h = ActivityLog()
        h.record("mute", "Muting the phone.", True)
        h.clear()
        self.assertEqual(len(h), 0)


if __name__ == "__main__":
    unittest.main()
