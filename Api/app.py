import os
import sys
from typing import Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
CORE_DIR = os.path.join(os.path.dirname(BASE_DIR), "PythonCore")
if CORE_DIR not in sys.path:
    sys.path.insert(0, CORE_DIR)

from astra.assistant import Astra
from astra.config import EXAMPLE_COMMANDS, RESPONSES
from astra.decision_core import interpret
from astra.intents import RULES
from astra.state import DeviceState, invariant_violations
from astra.status import status_blocks

app = FastAPI(title="Astra Voice API (rule-based phone controls)")


class DeviceSettings(BaseModel):
    wifi_enabled: bool = True
    bluetooth_enabled: bool = False
    flashlight_on: bool = False
    silent_mode_on: bool = False
    do_not_disturb_on: bool = False
    airplane_mode_on: bool = False
    location_enabled: bool = True
    battery_saver_on: bool = False
    brightness_percent: int = Field(72, ge=0, le=100)
    volume_percent: int = Field(46, ge=0, le=100)


class CommandRequest(BaseModel):
    text: str
    source: Literal["voice", "text"] = "text"


class InterpretRequest(BaseModel):
    text: str
    state: DeviceSettings = Field(default_factory=DeviceSettings)


session = Astra()


def _to_state(settings: DeviceSettings) -> DeviceState:
    state = DeviceState.from_dict(settings.model_dump())
    problems = invariant_violations(state)
    if problems:
        raise HTTPException(status_code=422, detail=problems)
    return state


@app.get("/")
def root():
    return {
        "status": "ok",
        "state": session.snapshot().to_dict(),
        "last_response": session.last_response,
        "log_size": len(session.log),
        "rules": len(RULES),
    }

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/state")
def get_state():
    return session.snapshot().to_dict()

@app.put("/state")
def put_state(settings: DeviceSettings):
    state = _to_state(settings)
    session.replace_state(state)
    return state.to_dict()

@app.post("/command")
def command(req: CommandRequest):
    outcome = session.handle_command(req.text, source=req.source)
    if outcome is None:
        return {"response": RESPONSES["empty"], "success": False, "state": session.snapshot().to_dict()}
    return {
        "response": outcome.response,
        "success": outcome.success,
        "state": outcome.next_state.to_dict(),
    }

@app.post("/interpret")
def interpret_only(req: InterpretRequest):
    outcome = interpret(_to_state(req.state), req.text)
    return {
        "response": outcome.response,
        "success": outcome.success,
        "state": outcome.next_state.to_dict(),
    }

@app.get("/status")
def status():
    return [b.to_dict() for b in status_blocks(session.snapshot())]

@app.get("/log")
def log():
    return [e.to_dict() for e in session.log.entries()]

@app.post("/reset")
def reset():
    session.reset()
    return session.snapshot().to_dict()

@app.get("/examples")
def examples():
    return list(EXAMPLE_COMMANDS)
