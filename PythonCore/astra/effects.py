from typing import Callable

from .config import (
    RESPONSES,
    RADIO_FIELDS,
    DND_LABEL,
    DEFAULT_CONTACT,
    SILENT_OFF_RESTORE_VOLUME,
    UNMUTE_RESTORE_VOLUME,
    CALL_MIN_VOLUME,
    CALL_RESTORE_VOLUME,
)
from .intents import Intent, IntentKind
from .state import DeviceState, CommandOutcome, clamp_percent


def _derive(state: DeviceState, **changes) -> DeviceState:
    """Build the next snapshot and re-derive fields that depend on others."""
    nxt = state.with_changes(**changes)
    fixes = {}
    if nxt.airplane_mode_on:
        for name in RADIO_FIELDS:
            if getattr(nxt, name):
                fixes[name] = False
    for name in ("brightness_percent", "volume_percent"):
        value = getattr(nxt, name)
        if clamp_percent(value) != value:
            fixes[name] = clamp_percent(value)
    if fixes:
        nxt = nxt.with_changes(**fixes)
    return nxt


def _ok(state: DeviceState, response: str) -> CommandOutcome:
    return CommandOutcome(next_state=state, response=response, success=True)


def _fail(state: DeviceState, response: str) -> CommandOutcome:
    return CommandOutcome(next_state=state, response=response, success=False)


def _on_off(value: bool) -> str:
    return "on" if value else "off"


def title_name(raw: str | None) -> str:
    name = " ".join(part.capitalize() for part in (raw or "").split())
    return name or DEFAULT_CONTACT


def apply_toggle(state: DeviceState, captures: dict) -> CommandOutcome:
    field_name = captures["field"]
    label = captures["label"]
    desired = bool(captures["desired"])

    if getattr(state, field_name) == desired:
        return _fail(state, RESPONSES["already"].format(label=label, state=_on_off(desired)))

    if desired and field_name in RADIO_FIELDS and state.airplane_mode_on:
        return _fail(state, RESPONSES["radio_blocked"].format(label=label))

    changes = {field_name: desired}
    response = RESPONSES["now"].format(label=label, state=_on_off(desired))

    if field_name == "airplane_mode_on":
        if desired:
            changes.update({name: False for name in RADIO_FIELDS})
            response = RESPONSES["airplane_on"]
        else:
            # radios are not restored
            response = RESPONSES["airplane_off"]

    if field_name == "silent_mode_on":
        if desired:
            changes["volume_percent"] = 0
        elif state.volume_percent == 0:
            changes["volume_percent"] = SILENT_OFF_RESTORE_VOLUME

    return _ok(_derive(state, **changes), response)


def apply_do_not_disturb(state: DeviceState, captures: dict) -> CommandOutcome:
    desired = bool(captures["desired"])
    if state.do_not_disturb_on == desired:
        return _fail(state, RESPONSES["already"].format(label=DND_LABEL, state=_on_off(desired)))
    response = RESPONSES["now"].format(label=DND_LABEL, state=_on_off(desired))
    return _ok(_derive(state, do_not_disturb_on=desired), response)


def apply_brightness_adjust(state: DeviceState, captures: dict) -> CommandOutcome:
    current = state.brightness_percent
    nxt = clamp_percent(current + int(captures["delta"]))
    return CommandOutcome(
        next_state=_derive(state, brightness_percent=nxt),
        response=RESPONSES["brightness"].format(value=nxt),
        success=nxt != current,
    )


def apply_brightness_set(state: DeviceState, captures: dict) -> CommandOutcome:
    nxt = clamp_percent(captures["value"])
    return _ok(_derive(state, brightness_percent=nxt), RESPONSES["brightness"].format(value=nxt))


def apply_volume_adjust(state: DeviceState, captures: dict) -> CommandOutcome:
    delta = int(captures["delta"])
    current = state.volume_percent
    nxt = clamp_percent(current + delta)
    key = "volume_up" if delta > 0 else "volume_down"
    return CommandOutcome(
        next_state=_derive(state, volume_percent=nxt, silent_mode_on=nxt == 0),
        response=RESPONSES[key].format(value=nxt),
        success=nxt != current,
    )


def apply_mute(state: DeviceState, captures: dict) -> CommandOutcome:
    if state.silent_mode_on and state.volume_percent == 0:
        return _fail(state, RESPONSES["already_muted"])
    return _ok(_derive(state, silent_mode_on=True, volume_percent=0), RESPONSES["muting"])


def apply_unmute(state: DeviceState, captures: dict) -> CommandOutcome:
    if not state.silent_mode_on and state.volume_percent > 0:
        return _fail(state, RESPONSES["already_unmuted"])
    volume = UNMUTE_RESTORE_VOLUME if state.volume_percent == 0 else state.volume_percent
    return _ok(_derive(state, silent_mode_on=False, volume_percent=volume), RESPONSES["unmuting"])


def apply_volume_set(state: DeviceState, captures: dict) -> CommandOutcome:
    nxt = clamp_percent(captures["value"])
    return _ok(
        _derive(state, volume_percent=nxt, silent_mode_on=nxt == 0),
        RESPONSES["volume_set"].format(value=nxt),
    )


def apply_call(state: DeviceState, captures: dict) -> CommandOutcome:
    name = title_name(captures.get("name"))
    volume = state.volume_percent
    if volume < CALL_MIN_VOLUME:
        volume = CALL_RESTORE_VOLUME
    return _ok(
        _derive(state, silent_mode_on=False, volume_percent=volume),
        RESPONSES["call"].format(name=name),
    )


def apply_message(state: DeviceState, captures: dict) -> CommandOutcome:
    name = title_name(captures.get("name"))
    body = (captures.get("body") or "").strip()
    if body:
        return _ok(state, RESPONSES["message_sent"].format(body=body, name=name))
    return _fail(state, RESPONSES["message_ask"].format(name=name))


def apply_open_app(state: DeviceState, captures: dict) -> CommandOutcome:
    return _ok(state, RESPONSES["open_app"].format(app=captures.get("app") or "app"))


def apply_battery_query(state: DeviceState, captures: dict) -> CommandOutcome:
    if state.battery_saver_on:
        return _ok(state, RESPONSES["battery_saver"])
    return _ok(state, RESPONSES["battery_stable"])


def apply_no_match(state: DeviceState, captures: dict) -> CommandOutcome:
    return _fail(state, RESPONSES["no_match"])


HANDLERS: dict[IntentKind, Callable[[DeviceState, dict], CommandOutcome]] = {
    IntentKind.TOGGLE: apply_toggle,
    IntentKind.DO_NOT_DISTURB: apply_do_not_disturb,
    IntentKind.BRIGHTNESS_ADJUST: apply_brightness_adjust,
    IntentKind.BRIGHTNESS_SET: apply_brightness_set,
    IntentKind.VOLUME_ADJUST: apply_volume_adjust,
    IntentKind.MUTE: apply_mute,
    IntentKind.UNMUTE: apply_unmute,
    IntentKind.VOLUME_SET: apply_volume_set,
    IntentKind.CALL: apply_call,
    IntentKind.MESSAGE: apply_message,
    IntentKind.OPEN_APP: apply_open_app,
    IntentKind.BATTERY_QUERY: apply_battery_query,
    IntentKind.NO_MATCH: apply_no_match,
}


def apply(state: DeviceState, intent: Intent) -> CommandOutcome:
    handler = HANDLERS.get(intent.kind, apply_no_match)
    return handler(state, dict(intent.captures))
