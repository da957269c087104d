import io
import unittest
import os
import sys
from contextlib import redirect_stdout
from unittest import mock

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import requests

from astra.intent_api import AstraClient, start_local_api


class TestAstraClient(unittest.TestCase):
    def setUp(self):
        self._redirect = redirect_stdout(io.StringIO())
        self._redirect.__enter__()

    def tearDown(self):
        self._redirect.__exit__(None, None, None)

    def test_send_command(self):
        resp = mock.Mock(status_code=200)
        resp.json.return_value = {"response": "Muting the phone.", "success": True, "state": {}}
        with mock.patch("astra.intent_api.requests.request", return_value=resp) as req:
            out = AstraClient("http://127.0.0.1:8008/").send_command("mute")
        self.assertEqual(out["response"], "Muting the phone.")
        req.assert_called_once_with(
            "POST", "http://127.0.0.1:8008/command",
            json={"text": "mute", "source": "text"}, timeout=5,
        )

    def test_http_error_returns_none(self):
        resp = mock.Mock(status_code=500)
        with mock.patch("astra.intent_api.requests.request", return_value=resp):
            self.assertIsNone(AstraClient("http://x").get_state())

    def test_connection_error_returns_none(self):
        err = requests.exceptions.ConnectionError("refused")
        with mock.patch("astra.intent_api.requests.request", side_effect=err):
            self.assertIsNone(AstraClient("http://x").reset())

    def test_start_local_api_skips_when_port_open(self):
        with mock.patch("astra.intent_api.is_port_open", return_value=True), \
                mock.patch("astra.intent_api.subprocess.Popen") as popen:
            self.assertTrue(start_local_api("/nowhere"))
        popen.assert_not_called()

    def test_start_local_api_missing_app(self):
        with mock.patch("astra.intent_api.is_port_open", return_value=False):
            self.assertFalse(start_local_api("/nowhere"))


if __name__ == "__main__":
    unittest.main()
