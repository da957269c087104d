import json
import os
import time
import urllib.request
import zipfile

import numpy as np
import pyaudio
import vosk

from .config import (
    SAMPLE_RATE,
    CHUNK_SAMPLES,
    FRAME_MS,
    VAD_START_THRESHOLD,
    VAD_SILENCE_MS,
    VOSK_MODEL_NAME,
    VOSK_MODEL_URL,
)
from .logui import ui_state, ui_command, debug, info, warn


def frame_rms(data: bytes) -> int:
    samples = np.frombuffer(data, dtype=np.int16).astype(np.float64)
    if samples.size == 0:
        return 0
    return int(np.sqrt(np.mean(samples * samples)))


def ensure_model(base_dir: str) -> str | None:
    model_path = os.path.join(base_dir, VOSK_MODEL_NAME)
    if os.path.exists(os.path.join(model_path, "am", "final.mdl")):
        return model_path

    info("Vosk model missing -> downloading...")
    zip_path = os.path.join(base_dir, "vosk_model.zip")
    try:
        urllib.request.urlretrieve(VOSK_MODEL_URL, zip_path)
        with zipfile.ZipFile(zip_path, "r") as z:
            z.extractall(base_dir)
        os.remove(zip_path)
        info("Vosk model downloaded")
    except Exception as e:
        warn(f"Failed to download Vosk model: {e}")
        return None
    return model_path


class Listener:
    """Transcribes one spoken command at a time from the default microphone."""

    def __init__(self, base_dir: str):
        self.base_dir = os.path.abspath(base_dir)
        model_path = ensure_model(self.base_dir)
        if model_path is None:
            raise RuntimeError("Vosk model is not available")
        self.model = vosk.Model(model_path)
        self.audio = pyaudio.PyAudio()
        self.stream = None

    def start_stream(self):
        if self.stream is not None:
            return
        self.stream = self.audio.open(
            format=pyaudio.paInt16,
            channels=1,
            rate=SAMPLE_RATE,
            input=True,
            frames_per_buffer=CHUNK_SAMPLES,
        )
        self.stream.start_stream()
        debug("Audio stream started")

    def stop_stream(self):
        if self.stream:
            self.stream.stop_stream()
            self.stream.close()
            self.stream = None
            debug("Audio stream stopped")

    def close(self):
        self.stop_stream()
        self.audio.terminate()

    def listen(self, max_seconds: float = 8, min_listen_ms: int = 1500) -> str | None:
        self.start_stream()
        ui_state("LISTENING")
        info("Command: listening...")

        rec = vosk.KaldiRecognizer(self.model, SAMPLE_RATE)
        started = False
        silence_ms = 0
        start_time = time.time()
        best_final = ""

        while time.time() - start_time < max_seconds:
            data = self.stream.read(CHUNK_SAMPLES, exception_on_overflow=False)
            rms = frame_rms(data)
            elapsed_ms = int((time.time() - start_time) * 1000)

            if not started:
                if rms >= VAD_START_THRESHOLD:
                    started = True
                    silence_ms = 0
                    debug(f"VAD: start (rms={rms})")
                elif elapsed_ms < min_listen_ms:
                    continue
            elif rms < VAD_START_THRESHOLD:
                silence_ms += FRAME_MS
            else:
                silence_ms = 0

            if rec.AcceptWaveform(data):
                t = (json.loads(rec.Result()).get("text") or "").strip().lower()
                if t:
                    best_final = t

            if started and silence_ms >= VAD_SILENCE_MS:
                debug("VAD: stop (silence)")
                break

        if not best_final:
            best_final = (json.loads(rec.FinalResult()).get("text") or "").strip().lower()

        if not best_final:
            ui_state("IDLE")
            warn("Command: empty")
            return None

        ui_command(best_final)
        info(f'Heard: "{best_final}"')
        return best_final
