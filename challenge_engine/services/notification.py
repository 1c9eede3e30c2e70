from pydantic import BaseModel, Field
from typing import Any, Dict, List
from enum import Enum

from .. import config
from ..models.challenge import ChallengeResult, ChallengeWithUsers
from ..models.metric import format_number, get_metric_config
from .messages import format_challenge_period

class NotificationType(str, Enum):
    CHALLENGE_CREATED = "challenge_created"
    CHALLENGE_ACCEPTED = "challenge_accepted"
    CHALLENGE_DECLINED = "challenge_declined"
    CHALLENGE_RESULT = "challenge_result"

class ChallengeNotification(BaseModel):
    user_id: str
    type: NotificationType
    title: str
    message: str
    action_url: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


NOTIFICATION_EVENTS = {
    "created": NotificationType.CHALLENGE_CREATED,
    "accepted": NotificationType.CHALLENGE_ACCEPTED,
    "declined": NotificationType.CHALLENGE_DECLINED,
    "completed": NotificationType.CHALLENGE_RESULT,
}


def _challenge_url(challenge: ChallengeWithUsers) -> str:
    return f"{config.CHALLENGES_URL}/{challenge.id}"


def generate_challenge_notification(
    event: str,
    challenge: ChallengeWithUsers,
    recipient_id: str
) -> ChallengeNotification:
    """Build the in-app notification sent to recipient_id for a lifecycle event.

    event is one of "created", "accepted", "declined" or "completed".
    """
    if event not in NOTIFICATION_EVENTS:
        raise ValueError(f"Unknown notification event: {event}")

    recipient_is_challenger = challenge.challenger_id == recipient_id
    opponent = challenge.target if recipient_is_challenger else challenge.challenger
    metric = get_metric_config(challenge.metric_type)
    metric_name = metric.display_name.lower()
    period = format_challenge_period(challenge.period_start, challenge.period_end)
    notification_type = NOTIFICATION_EVENTS[event]

    if event == "created":
        title = f"{opponent.display_name} challenged you!"
        message = f"{metric.emoji} Can you beat them in {metric.unit_plural} {period}?"
        action_url = config.CHALLENGES_URL
    elif event == "accepted":
        title = "Challenge accepted!"
        message = f"{opponent.display_name} accepted your {metric_name} challenge"
        action_url = _challenge_url(challenge)
    elif event == "declined":
        title = "Challenge declined"
        message = f"{opponent.display_name} declined your challenge"
        action_url = config.CHALLENGES_URL
    elif challenge.winner_id is None:
        title = "Challenge ended - It's a tie!"
        message = f"You and {opponent.display_name} tied in your {metric_name} challenge"
        action_url = _challenge_url(challenge)
    elif challenge.winner_id == recipient_id:
        title = "You won! 🏆"
        message = f"You beat {opponent.display_name} in your {metric_name} challenge!"
        action_url = _challenge_url(challenge)
    else:
        title = "Challenge complete"
        message = f"{opponent.display_name} won your {metric_name} challenge. Good effort!"
        action_url = _challenge_url(challenge)

    return ChallengeNotification(
        user_id=recipient_id,
        type=notification_type,
        title=title,
        message=message,
        action_url=action_url,
        metadata={"challenge_id": challenge.id}
    )


def generate_result_notifications(
    challenge: ChallengeWithUsers,
    result: ChallengeResult
) -> List[ChallengeNotification]:
    """One result notification per participant once a challenge is resolved."""
    metric = get_metric_config(challenge.metric_type)
    notifications = []

    for user_id, opponent, own_total, opponent_total in (
        (challenge.challenger_id, challenge.target, result.challenger_total, result.target_total),
        (challenge.target_id, challenge.challenger, result.target_total, result.challenger_total),
    ):
        if result.is_tie:
            outcome = "tie"
            title = "It's a tie! 🤝"
            message = f"You and {opponent.display_name} tied with {format_number(own_total)} {metric.unit_plural}!"
        elif result.winner_id == user_id:
            outcome = "won"
            title = "You won! 🏆"
            message = f"You beat {opponent.display_name} with {format_number(own_total)} {metric.unit_plural}!"
        else:
            outcome = "lost"
            title = "Challenge complete"
            message = f"{opponent.display_name} won with {format_number(opponent_total)} {metric.unit_plural}"

        notifications.append(ChallengeNotification(
            user_id=user_id,
            type=NotificationType.CHALLENGE_RESULT,
            title=title,
            message=message,
            action_url=_challenge_url(challenge),
            metadata={
                "challenge_id": challenge.id,
                "result": outcome,
                "your_total": own_total,
                "opponent_total": opponent_total,
            }
        ))

    return notifications
