import threading

from .action_history import ActivityLog, SOURCE_TEXT, SOURCE_VOICE
from .config import (
    EXAMPLE_COMMANDS,
    READY_RESPONSE,
    CONSOLE_EXIT,
    CONSOLE_STATUS,
    CONSOLE_LOG,
    CONSOLE_HELP,
    CONSOLE_RESET,
)
from .decision_core import interpret, explain
from .logui import ui_state, ui_command, ui_response, ui_device, debug, info, warn, error, UI_MODE, LOG_LEVEL
from .state import DeviceState, CommandOutcome, INITIAL_STATE
from .status import format_status


class Astra:
    """Owns the session's device snapshot and serialises commands against it."""

    def __init__(
        self,
        state: DeviceState | None = None,
        log: ActivityLog | None = None,
        voice=None,
        listener=None,
    ):
        self.state = state or INITIAL_STATE
        self.log = log if log is not None else ActivityLog()
        self.voice = voice
        self.listener = listener
        self.last_command = ""
        self.last_response = READY_RESPONSE
        self._lock = threading.Lock()

    def snapshot(self) -> DeviceState:
        with self._lock:
            return self.state

    def replace_state(self, state: DeviceState):
        with self._lock:
            self.state = state
        ui_device(state.to_dict())

    def reset(self):
        with self._lock:
            self.state = INITIAL_STATE
            self.log.clear()
            self.last_command = ""
            self.last_response = READY_RESPONSE
        info("Session reset")

    def handle_command(self, raw: str, source: str = SOURCE_VOICE) -> CommandOutcome | None:
        command = (raw or "").strip()
        if not command:
            return None

        ui_state("EXECUTING")
        ui_command(command)
        intent = explain(command)
        if intent is not None:
            debug(f"Intent: {intent.kind.value} {intent.captures}")

        with self._lock:
            outcome = interpret(self.state, command)
            self.state = outcome.next_state
            self.last_command = command
            self.last_response = outcome.response
            self.log.record(command, outcome.response, outcome.success, source)

        if outcome.success:
            info(f"Result: {outcome.response}")
        else:
            warn(f"Result: {outcome.response}")
        ui_response(outcome.response, outcome.success)
        ui_device(outcome.next_state.to_dict())

        self._speak(outcome.response)
        ui_state("IDLE")
        return outcome

    def _safe_handle_command(self, raw: str, source: str) -> CommandOutcome | None:
        try:
            return self.handle_command(raw, source)
        except Exception as e:
            ui_state("ERROR")
            error(f"Command failed: {e}")
            ui_state("IDLE")
            return None

    def _speak(self, text: str):
        if self.voice is None or getattr(self.voice, "muted", False):
            return
        ui_state("SPEAKING")
        self.voice.say(text)

    def _print_log(self):
        entries = self.log.entries()
        if not entries:
            print("No commands yet.", flush=True)
            return
        for e in entries:
            mark = "ok " if e.success else "err"
            print(f"[{mark}] {e.timestamp} ({e.source}) {e.command} -> {e.result}", flush=True)

    def _print_help(self):
        print("Try one of:", flush=True)
        for example in EXAMPLE_COMMANDS:
            print(f"  {example}", flush=True)
        print("Built-ins: status, log, reset, help, exit", flush=True)

    def handle_builtin(self, text: str) -> bool | None:
        """Console words that never reach the engine.

        Returns ``None`` for anything that is not a built-in, ``False`` to
        stop the loop and ``True`` otherwise.
        """
        t = " ".join((text or "").strip().lower().split())
        if t in CONSOLE_EXIT:
            return False
        if t in CONSOLE_STATUS:
            print(format_status(self.snapshot()), flush=True)
            return True
        if t in CONSOLE_LOG:
            self._print_log()
            return True
        if t in CONSOLE_HELP:
            self._print_help()
            return True
        if t in CONSOLE_RESET:
            self.reset()
            return True
        return None

    def _read_command(self) -> tuple[str | None, str]:
        if self.listener is not None:
            return self.listener.listen(), SOURCE_VOICE
        ui_state("LISTENING")
        return input("> "), SOURCE_TEXT

    def run(self):
        info("ASTRA start")
        info(f"Mode: {'UI bridge' if UI_MODE else 'Console'} | log={LOG_LEVEL}")
        info(f"Input: {'voice' if self.listener is not None else 'text'}")
        info(self.last_response)
        ui_state("STARTING")
        ui_device(self.state.to_dict())

        try:
            while True:
                text, source = self._read_command()
                if not text or not text.strip():
                    ui_state("IDLE")
                    continue
                builtin = self.handle_builtin(text)
                if builtin is False:
                    break
                if builtin:
                    continue
                self._safe_handle_command(text, source)
        except (KeyboardInterrupt, EOFError):
            info("Shutdown: Ctrl+C")
        except Exception as e:
            ui_state("ERROR")
            error(f"Fatal: {e}")
        finally:
            ui_state("IDLE")
            if self.listener is not None:
                self.listener.close()
            info("ASTRA stopped")
