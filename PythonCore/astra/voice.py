import pyttsx3

from .config import TTS_RATE, TTS_VOLUME
from .logui import warn


class Voice:
    def __init__(self, rate: int = TTS_RATE, volume: float = TTS_VOLUME, muted: bool = False):
        self.muted = muted
        self.engine = pyttsx3.init()
        self.engine.setProperty("rate", rate)
        self.engine.setProperty("volume", volume)

        voices = self.engine.getProperty("voices") or []
        for v in voices:
            name = (getattr(v, "name", "") or "").lower()
            if "zira" in name or "female" in name:
                self.engine.setProperty("voice", v.id)
                break

    def say(self, text: str):
        if self.muted or not (text or "").strip():
            return
        try:
            self.engine.say(text)
            self.engine.runAndWait()
        except Exception as e:
            warn(f"TTS failed: {e}")

    def mute(self):
        self.muted = True

    def unmute(self):
        self.muted = False
