from dataclasses import dataclass, asdict

from .state import DeviceState


@dataclass(frozen=True)
class StatusBlock:
    label: str
    value: str
    meta: str

    def to_dict(self) -> dict:
        return asdict(self)


def status_blocks(state: DeviceState) -> list[StatusBlock]:
    s = state
    return [
        StatusBlock(
            "Wi-Fi",
            "Connected" if s.wifi_enabled else "Offline",
            "Network secured" if s.wifi_enabled else "Tap to enable",
        ),
        StatusBlock(
            "Bluetooth",
            "On" if s.bluetooth_enabled else "Off",
            "Discoverable" if s.bluetooth_enabled else "Connected devices paused",
        ),
        StatusBlock(
            "Location",
            "Active" if s.location_enabled else "Disabled",
            "Precise tracking" if s.location_enabled else "Apps limited",
        ),
        StatusBlock(
            "Flashlight",
            "On" if s.flashlight_on else "Off",
            "Torch engaged" if s.flashlight_on else "Tap to toggle",
        ),
        StatusBlock(
            "Airplane Mode",
            "Enabled" if s.airplane_mode_on else "Disabled",
            "Radio signals paused" if s.airplane_mode_on else "All radios active",
        ),
        StatusBlock(
            "Battery Saver",
            "On" if s.battery_saver_on else "Off",
            "Performance limited" if s.battery_saver_on else "Full performance",
        ),
        StatusBlock(
            "Silent" if s.silent_mode_on else "Sound",
            "Muted" if s.silent_mode_on else f"{s.volume_percent}%",
            "Calls silenced" if s.silent_mode_on else "Ringer audible",
        ),
        StatusBlock(
            "Focus" if s.do_not_disturb_on else "Alerts",
            "Do Not Disturb" if s.do_not_disturb_on else "Standard",
            "Priority only" if s.do_not_disturb_on else "All notifications",
        ),
    ]


def format_status(state: DeviceState) -> str:
    blocks = status_blocks(state)
    width = max(len(b.label) for b in blocks)
    lines = [f"{b.label:<{width}}  {b.value:<16} {b.meta}" for b in blocks]
    lines.append(f"{'Brightness':<{width}}  {state.brightness_percent}%")
    return "\n".join(lines)
