from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from ..models.challenge import ChallengeStatus, ChallengeEvent
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

StatusLike = Union[ChallengeStatus, str]
EventLike = Union[ChallengeEvent, str]

# current state -> {event: next state}; empty rows are terminal
STATE_TRANSITIONS: Mapping[ChallengeStatus, Mapping[ChallengeEvent, ChallengeStatus]] = MappingProxyType({
    ChallengeStatus.PENDING: MappingProxyType({
        ChallengeEvent.ACCEPT: ChallengeStatus.ACCEPTED,
        ChallengeEvent.DECLINE: ChallengeStatus.DECLINED,
        ChallengeEvent.CANCEL: ChallengeStatus.CANCELLED,
        ChallengeEvent.EXPIRE: ChallengeStatus.EXPIRED,
    }),
    ChallengeStatus.ACCEPTED: MappingProxyType({
        ChallengeEvent.COMPLETE: ChallengeStatus.COMPLETED,
        ChallengeEvent.CANCEL: ChallengeStatus.CANCELLED,
    }),
    ChallengeStatus.DECLINED: MappingProxyType({}),
    ChallengeStatus.COMPLETED: MappingProxyType({}),
    ChallengeStatus.CANCELLED: MappingProxyType({}),
    ChallengeStatus.EXPIRED: MappingProxyType({}),
})


class InvalidTransitionError(Exception):
    """Raised when a status change is requested that the transition table does not allow.

    Reaching this means a caller skipped validation; it is not a user-facing error.
    """

    def __init__(self, current: StatusLike, event: EventLike):
        self.current = _value(current)
        self.event = _value(event)
        super().__init__(f"Invalid transition: cannot {self.event} from {self.current} state")


def _value(member) -> str:
    return member.value if isinstance(member, (ChallengeStatus, ChallengeEvent)) else str(member)


def _transitions_for(current: StatusLike) -> Mapping[ChallengeEvent, ChallengeStatus]:
    try:
        return STATE_TRANSITIONS[ChallengeStatus(current)]
    except ValueError:
        return MappingProxyType({})


def get_next_state(current: StatusLike, event: EventLike) -> Optional[ChallengeStatus]:
    try:
        event = ChallengeEvent(event)
    except ValueError:
        return None
    return _transitions_for(current).get(event)


def can_transition(current: StatusLike, event: EventLike) -> bool:
    return get_next_state(current, event) is not None


def transition(current: StatusLike, event: EventLike) -> ChallengeStatus:
    next_state = get_next_state(current, event)
    if next_state is None:
        error = InvalidTransitionError(current, event)
        logger.error(str(error))
        raise error
    return next_state


def get_valid_events(current: StatusLike) -> List[ChallengeEvent]:
    return list(_transitions_for(current).keys())


def is_terminal_state(status: StatusLike) -> bool:
    return len(_transitions_for(status)) == 0


def is_active_state(status: StatusLike) -> bool:
    return status == ChallengeStatus.ACCEPTED


def is_pending_state(status: StatusLike) -> bool:
    return status == ChallengeStatus.PENDING


def can_user_perform_event(
    event: EventLike,
    user_id: str,
    challenger_id: str,
    target_id: str
) -> bool:
    """Whether user_id may trigger event, regardless of the current status."""
    if event in (ChallengeEvent.ACCEPT, ChallengeEvent.DECLINE):
        return user_id == target_id
    if event == ChallengeEvent.CANCEL:
        return user_id in (challenger_id, target_id)
    # complete and expire are system-only
    return False


EVENT_LABELS: Mapping[ChallengeEvent, str] = MappingProxyType({
    ChallengeEvent.ACCEPT: "Accept Challenge",
    ChallengeEvent.DECLINE: "Decline",
    ChallengeEvent.CANCEL: "Cancel Challenge",
    ChallengeEvent.COMPLETE: "Complete",
    ChallengeEvent.EXPIRE: "Expire",
})

STATUS_LABELS: Mapping[ChallengeStatus, str] = MappingProxyType({
    ChallengeStatus.PENDING: "Pending",
    ChallengeStatus.ACCEPTED: "Active",
    ChallengeStatus.DECLINED: "Declined",
    ChallengeStatus.COMPLETED: "Completed",
    ChallengeStatus.CANCELLED: "Cancelled",
    ChallengeStatus.EXPIRED: "Expired",
})

# Semantic color names, left to the client to map onto its palette
STATUS_COLORS: Mapping[ChallengeStatus, str] = MappingProxyType({
    ChallengeStatus.PENDING: "warning",
    ChallengeStatus.ACCEPTED: "success",
    ChallengeStatus.DECLINED: "muted",
    ChallengeStatus.COMPLETED: "primary",
    ChallengeStatus.CANCELLED: "muted",
    ChallengeStatus.EXPIRED: "muted",
})
