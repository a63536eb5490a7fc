"""Upload dialog state machine."""

from enum import StrEnum


class DialogState(StrEnum):
    """Visibility of the upload modal."""

    CLOSED = "closed"
    OPEN = "open"


class DialogTrigger(StrEnum):
    """Named transitions of the upload modal."""

    OPEN = "open"
    CLOSE = "close"
    GATE_REJECTED = "gate_rejected"
    SUBMITTED = "submitted"


class DialogStateError(RuntimeError):
    """Raised when a trigger is not valid for the current state."""


_TRANSITIONS: dict[tuple[DialogState, DialogTrigger], DialogState] = {
    (DialogState.CLOSED, DialogTrigger.OPEN): DialogState.OPEN,
    (DialogState.OPEN, DialogTrigger.OPEN): DialogState.OPEN,
    (DialogState.OPEN, DialogTrigger.CLOSE): DialogState.CLOSED,
    (DialogState.CLOSED, DialogTrigger.CLOSE): DialogState.CLOSED,
    (DialogState.OPEN, DialogTrigger.GATE_REJECTED): DialogState.CLOSED,
    (DialogState.OPEN, DialogTrigger.SUBMITTED): DialogState.CLOSED,
}


def next_state(state: DialogState, trigger: DialogTrigger) -> DialogState:
    """Return the state reached by applying a trigger."""
    try:
        return _TRANSITIONS[(state, trigger)]
    except KeyError:
        raise DialogStateError(
            f"Cannot apply {trigger.value!r} while dialog is {state.value}"
        ) from None
