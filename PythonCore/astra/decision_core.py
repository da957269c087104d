from .config import RESPONSES
from .effects import apply
from .intents import Intent, match
from .normalizer import EmptyInputError, normalize
from .state import DeviceState, CommandOutcome


def interpret(current_state: DeviceState, raw_command: str) -> CommandOutcome:
    """Map one free-text command onto the next device snapshot.

    Pure and synchronous. Every failure (empty text, a request that already
    holds, an unrecognised phrase) comes back as ``success=False`` with a
    response for the user; nothing is raised.
    """
    try:
        command = normalize(raw_command)
    except EmptyInputError:
        return CommandOutcome(next_state=current_state, response=RESPONSES["empty"], success=False)
    return apply(current_state, match(command))


def explain(raw_command: str) -> Intent | None:
    try:
        return match(normalize(raw_command))
    except EmptyInputError:
        return None
