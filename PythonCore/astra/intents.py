import re
from dataclasses import dataclass, field
from enum import Enum

from .config import (
    TOGGLE_FEATURES,
    TURN_ON_VERBS,
    TURN_OFF_VERBS,
    DND_KEYWORDS,
    DEVICE_TARGETS,
    APP_NAMES,
    STEP_PERCENT,
)


class IntentKind(Enum):
    TOGGLE = "toggle"
    DO_NOT_DISTURB = "do_not_disturb"
    BRIGHTNESS_ADJUST = "brightness_adjust"
    BRIGHTNESS_SET = "brightness_set"
    VOLUME_ADJUST = "volume_adjust"
    MUTE = "mute"
    UNMUTE = "unmute"
    VOLUME_SET = "volume_set"
    CALL = "call"
    MESSAGE = "message"
    OPEN_APP = "open_app"
    BATTERY_QUERY = "battery_query"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    captures: dict = field(default_factory=dict)


NO_MATCH = Intent(IntentKind.NO_MATCH)


@dataclass(frozen=True)
class Rule:
    """One row of the matching table.

    ``pattern`` must be found in the text; ``keyword``, when set, must also
    be found somewhere in it. Named groups of ``pattern`` become captures,
    merged over the rule's ``fixed`` captures.
    """

    kind: IntentKind
    pattern: re.Pattern
    keyword: re.Pattern | None = None
    fixed: dict = field(default_factory=dict)

    def match(self, text: str) -> dict | None:
        m = self.pattern.search(text)
        if not m:
            return None
        if self.keyword is not None and not self.keyword.search(text):
            return None
        captures = dict(self.fixed)
        captures.update(m.groupdict())
        return captures


_ON = re.compile(rf"\b(?:{TURN_ON_VERBS})\b")
_OFF = re.compile(rf"\b(?:{TURN_OFF_VERBS})\b")
_TARGET = rf"(?:\s+(?:the\s+)?(?:{DEVICE_TARGETS})\b)?"
_APPS = "|".join(APP_NAMES)


def _toggle_rules() -> list[Rule]:
    rules = []
    for field_name, label, keywords in TOGGLE_FEATURES:
        keyword = re.compile(rf"\b(?:{keywords})\b")
        for verb, desired in ((_ON, True), (_OFF, False)):
            rules.append(Rule(
                IntentKind.TOGGLE,
                verb,
                keyword,
                {"field": field_name, "label": label, "desired": desired},
            ))
    return rules


def _build_rules() -> tuple[Rule, ...]:
    rules = _toggle_rules()
    rules += [
        Rule(IntentKind.DO_NOT_DISTURB,
             re.compile(rf"\b(?:{TURN_ON_VERBS})\s+(?:the\s+)?(?:{DND_KEYWORDS})\b"),
             fixed={"desired": True}),
        Rule(IntentKind.DO_NOT_DISTURB,
             re.compile(rf"\b(?:{TURN_OFF_VERBS})\s+(?:the\s+)?(?:{DND_KEYWORDS})\b"),
             fixed={"desired": False}),
        Rule(IntentKind.BRIGHTNESS_ADJUST,
             re.compile(r"\b(?:increase|raise)\s+(?:the\s+)?brightness\b"),
             fixed={"delta": STEP_PERCENT}),
        Rule(IntentKind.BRIGHTNESS_ADJUST,
             re.compile(r"\b(?:decrease|lower)\s+(?:the\s+)?brightness\b"),
             fixed={"delta": -STEP_PERCENT}),
        Rule(IntentKind.BRIGHTNESS_SET,
             re.compile(r"\bbrightness(?:\s+to)?\s+(?P<value>\d{1,3})")),
        Rule(IntentKind.VOLUME_ADJUST,
             re.compile(r"\b(?:increase|raise)\s+(?:the\s+)?volume\b"),
             fixed={"delta": STEP_PERCENT}),
        Rule(IntentKind.VOLUME_ADJUST,
             re.compile(r"\b(?:decrease|lower|reduce)\s+(?:the\s+)?volume\b"),
             fixed={"delta": -STEP_PERCENT}),
        Rule(IntentKind.MUTE, re.compile(rf"\b(?:mute|silence)\b{_TARGET}")),
        Rule(IntentKind.UNMUTE, re.compile(rf"\b(?:unmute|sound)\b{_TARGET}")),
        Rule(IntentKind.VOLUME_SET,
             re.compile(r"\bvolume(?:\s+to)?\s+(?P<value>\d{1,3})")),
        Rule(IntentKind.CALL,
             re.compile(r"\b(?:call|dial)\s+(?P<name>[a-z\s]+)")),
        Rule(IntentKind.MESSAGE,
             re.compile(
                 r"\bsend\s+(?:a\s+)?message\s+to\s+(?P<name>[a-z\s]+?)"
                 r"(?:\s+saying\s+(?P<body>.+))?$"
             )),
        Rule(IntentKind.OPEN_APP,
             re.compile(rf"\b(?:open|launch)\s+(?:the\s+)?(?P<app>{_APPS})\b")),
        Rule(IntentKind.BATTERY_QUERY,
             re.compile(r"\bwhat(?:['’]s|\s+is)\s+(?:the\s+)?battery\b")),
    ]
    return tuple(rules)


RULES = _build_rules()


def match(normalized: str, rules: tuple[Rule, ...] = RULES) -> Intent:
    for rule in rules:
        captures = rule.match(normalized)
        if captures is None:
            continue
        if captures.get("value") is not None:
            captures["value"] = int(captures["value"])
        return Intent(rule.kind, captures)
    return NO_MATCH
