import os

API_URL = os.environ.get("ASTRA_API_URL", "http://127.0.0.1:8008")
API_HOST = "127.0.0.1"
API_PORT = 8008

ACTIVITY_LOG_LIMIT = int(os.environ.get("ASTRA_LOG_LIMIT", "14"))


INITIAL_SETTINGS = {
    "wifi_enabled": True,
    "bluetooth_enabled": False,
    "flashlight_on": False,
    "silent_mode_on": False,
    "do_not_disturb_on": False,
    "airplane_mode_on": False,
    "location_enabled": True,
    "battery_saver_on": False,
    "brightness_percent": 72,
    "volume_percent": 46,
}

STEP_PERCENT = 12
SILENT_OFF_RESTORE_VOLUME = 35
UNMUTE_RESTORE_VOLUME = 40
CALL_MIN_VOLUME = 30
CALL_RESTORE_VOLUME = 50


# (state field, label, keyword pattern); order is match priority
TOGGLE_FEATURES = (
    ("wifi_enabled", "Wi-Fi", r"wi-?fi"),
    ("bluetooth_enabled", "Bluetooth", r"bluetooth"),
    ("flashlight_on", "Flashlight", r"flashlight|torch"),
    ("location_enabled", "Location", r"location|gps|navigation"),
    ("battery_saver_on", "Battery saver", r"battery\s+saver|low\s+power"),
    ("airplane_mode_on", "Airplane mode", r"(?:airplane|flight)\s+mode"),
    ("silent_mode_on", "Silent mode", r"silent|mute"),
)

RADIO_FIELDS = ("wifi_enabled", "bluetooth_enabled")

TURN_ON_VERBS = r"(?:turn|switch)\s+on|enable|activate"
TURN_OFF_VERBS = r"(?:turn|switch)\s+off|disable|deactivate"

DND_LABEL = "Do not disturb"
DND_KEYWORDS = r"do\s*not\s*disturb|dnd"

DEVICE_TARGETS = r"phone|device|it"

APP_NAMES = ("camera", "maps", "calendar", "spotify", "music")

DEFAULT_CONTACT = "your contact"


RESPONSES = {
    "empty": "I did not catch that command.",
    "no_match": "I couldn't map that request to a phone control just yet.",
    "airplane_on": "Turning on airplane mode and disabling Wi-Fi and Bluetooth.",
    "airplane_off": "Airplane mode is off. Wi-Fi and Bluetooth remain disabled.",
    "radio_blocked": "Turn off airplane mode before enabling {label}.",
    "already": "{label} is already {state}.",
    "now": "{label} is now {state}.",
    "brightness": "Brightness set to {value}%",
    "volume_up": "Volume increased to {value}%",
    "volume_down": "Volume reduced to {value}%",
    "volume_set": "Volume set to {value}%",
    "already_muted": "The phone is already muted.",
    "muting": "Muting the phone.",
    "already_unmuted": "The phone is already unmuted.",
    "unmuting": "Restoring sound.",
    "call": "Placing a call to {name}...",
    "message_sent": 'Sending "{body}" to {name}.',
    "message_ask": "What should I say to {name}?",
    "open_app": "Opening {app}.",
    "battery_saver": "Battery saver is preserving power.",
    "battery_stable": "Battery level is stable.",
}


EXAMPLE_COMMANDS = (
    "Turn on Bluetooth",
    "Set brightness to 40 percent",
    "Enable airplane mode",
    "Call Alex",
    "Send a message to Taylor saying I'm on my way",
    "Mute the phone",
    "Turn off location services",
    "Increase the volume",
)

READY_RESPONSE = "Ready when you are."

CONSOLE_EXIT = {"exit", "quit", "bye"}
CONSOLE_STATUS = {"status", "state"}
CONSOLE_LOG = {"log", "history"}
CONSOLE_HELP = {"help", "?", "examples"}
CONSOLE_RESET = {"reset"}


SAMPLE_RATE = 16000
CHUNK_SAMPLES = 4000
FRAME_MS = 250
VAD_START_THRESHOLD = 250
VAD_SILENCE_MS = 650

VOSK_MODEL_NAME = "vosk-model-small-en-us-0.15"
VOSK_MODEL_URL = f"https://alphacephei.com/vosk/models/{VOSK_MODEL_NAME}.zip"

TTS_RATE = 180
TTS_VOLUME = 0.9
