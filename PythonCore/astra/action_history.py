import random
import string
import time
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone

from .config import ACTIVITY_LOG_LIMIT

SOURCE_VOICE = "voice"
SOURCE_TEXT = "text"
SOURCES = {SOURCE_VOICE, SOURCE_TEXT}

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_entry_id(now: float | None = None) -> str:
    now = time.time() if now is None else now
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(6))
    return f"{int(now * 1000)}-{suffix}"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class ActivityEntry:
    command: str
    result: str
    success: bool
    source: str = SOURCE_VOICE
    id: str = field(default_factory=new_entry_id)
    timestamp: str = field(default_factory=_iso_now)

    def to_dict(self) -> dict:
        return asdict(self)


class ActivityLog:
    def __init__(self, max_entries: int = ACTIVITY_LOG_LIMIT):
        self.max_entries = max(1, int(max_entries))
        self._entries: list[ActivityEntry] = []

    def push(self, entry: ActivityEntry) -> ActivityEntry:
        if entry.source not in SOURCES:
            entry.source = SOURCE_VOICE
        self._entries.insert(0, entry)
        if len(self._entries) > self.max_entries:
            self._entries = self._entries[: self.max_entries]
        return entry

    def record(self, command: str, result: str, success: bool, source: str = SOURCE_VOICE) -> ActivityEntry:
        return self.push(ActivityEntry(command=command, result=result, success=bool(success), source=source))

    def entries(self) -> list[ActivityEntry]:
        return list(self._entries)

    def get_last(self) -> ActivityEntry | None:
        if not self._entries:
            return None
        return self._entries[0]

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
