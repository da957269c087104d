from dataclasses import dataclass, asdict, fields, replace

from .config import INITIAL_SETTINGS, RADIO_FIELDS


def clamp_percent(value) -> int:
    return min(100, max(0, int(round(value))))


@dataclass(frozen=True)
class DeviceState:
    wifi_enabled: bool = INITIAL_SETTINGS["wifi_enabled"]
    bluetooth_enabled: bool = INITIAL_SETTINGS["bluetooth_enabled"]
    flashlight_on: bool = INITIAL_SETTINGS["flashlight_on"]
    silent_mode_on: bool = INITIAL_SETTINGS["silent_mode_on"]
    do_not_disturb_on: bool = INITIAL_SETTINGS["do_not_disturb_on"]
    airplane_mode_on: bool = INITIAL_SETTINGS["airplane_mode_on"]
    location_enabled: bool = INITIAL_SETTINGS["location_enabled"]
    battery_saver_on: bool = INITIAL_SETTINGS["battery_saver_on"]
    brightness_percent: int = INITIAL_SETTINGS["brightness_percent"]
    volume_percent: int = INITIAL_SETTINGS["volume_percent"]

    def with_changes(self, **changes) -> "DeviceState":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict | None) -> "DeviceState":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown device settings: {', '.join(unknown)}")
        values = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            if f.type in (int, "int"):
                values[f.name] = int(data[f.name])
            else:
                values[f.name] = bool(data[f.name])
        return cls(**values)


INITIAL_STATE = DeviceState()


@dataclass(frozen=True)
class CommandOutcome:
    next_state: DeviceState
    response: str
    success: bool


def invariant_violations(state: DeviceState) -> list[str]:
    problems = []
    if state.airplane_mode_on:
        for name in RADIO_FIELDS:
            if getattr(state, name):
                problems.append(f"{name} must be off while airplane mode is on")
    for name in ("brightness_percent", "volume_percent"):
        value = getattr(state, name)
        if not 0 <= value <= 100:
            problems.append(f"{name} out of range: {value}")
    return problems
