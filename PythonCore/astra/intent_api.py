import os
import sys
import socket
import time
import subprocess

import requests

from .config import API_HOST, API_PORT
from .logui import info, warn, error


def is_port_open(host: str, port: int, timeout=0.25) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def start_local_api(base_dir: str, host: str = API_HOST, port: int = API_PORT) -> bool:
    if is_port_open(host, port):
        return True

    api_dir = os.path.join(base_dir, "Api")
    app_py = os.path.join(api_dir, "app.py")
    if not os.path.exists(app_py):
        warn(f"Local API not found: {app_py}")
        return False

    try:
        subprocess.Popen(
            [sys.executable, "-m", "uvicorn", "app:app", "--host", host, "--port", str(port)],
            cwd=api_dir,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        warn(f"Failed to start local API: {e}")
        return False

    for _ in range(30):
        if is_port_open(host, port):
            info(f"Local API listening on {host}:{port}")
            return True
        time.sleep(0.1)

    warn(f"Local API did not open port {port}")
    return False


class AstraClient:
    def __init__(self, base_url: str, timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, payload: dict | None = None):
        try:
            r = requests.request(method, f"{self.base_url}{path}", json=payload, timeout=self.timeout)
            if r.status_code == 200:
                return r.json()
            error(f"API error: HTTP {r.status_code}")
            return None
        except requests.exceptions.RequestException as e:
            error(f"API connection error: {e}")
            return None

    def send_command(self, text: str, source: str = "text"):
        return self._request("POST", "/command", {"text": text, "source": source})

    def get_state(self):
        return self._request("GET", "/state")

    def get_log(self):
        return self._request("GET", "/log")

    def reset(self):
        return self._request("POST", "/reset")
