from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple, TypeVar, Union

from ..models.challenge import (
    Challenge,
    ChallengeBuckets,
    ChallengeCreate,
    ChallengeEvent,
    ChallengeStatus,
)
from ..models.metric import MetricType
from ..utils.logging import setup_logger
from ..utils.periods import parse_date
from .state_machine import is_terminal_state, transition
from .validation import ValidationResult, validate_challenge_action

logger = setup_logger(__name__)

ChallengeT = TypeVar("ChallengeT", bound=Challenge)

# Timestamp column stamped by each event
EVENT_TIMESTAMPS = {
    ChallengeEvent.ACCEPT: "accepted_at",
    ChallengeEvent.DECLINE: "declined_at",
    ChallengeEvent.CANCEL: "cancelled_at",
    ChallengeEvent.COMPLETE: "resolved_at",
    ChallengeEvent.EXPIRE: "resolved_at",
}


def build_challenge(
    request: ChallengeCreate,
    challenger_id: str,
    now: Optional[datetime] = None
) -> Challenge:
    """Create the pending challenge for an already validated request."""
    return Challenge(
        challenger_id=challenger_id,
        target_id=request.target_id,
        metric_type=request.metric_type or MetricType.STEPS,
        period_start=parse_date(request.period_start),
        period_end=parse_date(request.period_end),
        message=request.message or None,
        template_id=request.template_id or None,
        status=ChallengeStatus.PENDING,
        created_at=now or datetime.now(timezone.utc)
    )


def apply_challenge_event(
    challenge: ChallengeT,
    event: Union[ChallengeEvent, str],
    now: Optional[datetime] = None,
    **updates
) -> ChallengeT:
    """Return a copy of challenge moved through event.

    Raises InvalidTransitionError if the table has no such transition.
    """
    event = ChallengeEvent(event)
    new_status = transition(challenge.status, event)

    changes = dict(updates)
    changes["status"] = new_status
    changes[EVENT_TIMESTAMPS[event]] = now or datetime.now(timezone.utc)

    logger.debug(f"Challenge {challenge.id}: {challenge.status.value} -> {new_status.value} ({event.value})")
    return challenge.model_copy(update=changes)


def perform_challenge_action(
    challenge: ChallengeT,
    action: str,
    user_id: str,
    now: Optional[datetime] = None
) -> Tuple[ValidationResult, Optional[ChallengeT]]:
    """Validate a participant's action and apply it.

    The updated copy is None when validation fails.
    """
    validation = validate_challenge_action(
        action,
        challenge.status,
        user_id,
        challenge.challenger_id,
        challenge.target_id
    )
    if not validation.valid:
        return validation, None

    return validation, apply_challenge_event(challenge, action, now)


def group_challenges(challenges: Iterable[Challenge], user_id: str) -> ChallengeBuckets:
    """Split a user's challenges the way the challenges page lists them."""
    buckets = ChallengeBuckets()

    for challenge in challenges:
        if challenge.status == ChallengeStatus.PENDING:
            if challenge.target_id == user_id:
                buckets.pending_received.append(challenge)
            elif challenge.challenger_id == user_id:
                buckets.pending_sent.append(challenge)
        elif challenge.status == ChallengeStatus.ACCEPTED:
            buckets.active.append(challenge)
        elif is_terminal_state(challenge.status):
            buckets.history.append(challenge)

    return buckets
