import json
import os
import sys
from datetime import datetime

UI_MODE = "--ui" in sys.argv

UI_STATES = {"STARTING", "IDLE", "LISTENING", "EXECUTING", "SPEAKING", "ERROR"}


def _bridge(tag: str, payload: str):
    if UI_MODE:
        print(f"{tag}:{payload}", flush=True)

def ui_state(name: str):
    if name not in UI_STATES:
        name = "IDLE"
    _bridge("STATE", name)

def ui_command(text: str):
    _bridge("COMMAND", text)

def ui_response(text: str, success: bool):
    _bridge("RESPONSE", json.dumps({"text": text, "success": bool(success)}))

def ui_device(settings: dict):
    _bridge("DEVICE", json.dumps(settings, sort_keys=True))


LOG_LEVEL = os.environ.get("ASTRA_LOG", "INFO").upper()
LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


def set_log_level(level: str) -> str:
    global LOG_LEVEL
    level = (level or "").strip().upper()
    if level in LEVELS:
        LOG_LEVEL = level
    return LOG_LEVEL

def _ts():
    return datetime.now().strftime("%H:%M:%S")

def log(level: str, msg: str):
    if LEVELS.get(level, 20) >= LEVELS.get(LOG_LEVEL, 20):
        print(f"{_ts()} [{level:<5}] {msg}", flush=True)

def debug(msg):
    log("DEBUG", msg)

def info(msg):
    log("INFO", msg)

def warn(msg):
    log("WARN", msg)

def error(msg):
    log("ERROR", msg)
