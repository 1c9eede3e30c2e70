from typing import Union

from .. import config
from ..models.challenge import (
    Challenge,
    ChallengeShareMessage,
    ChallengeStatus,
    ChallengeWithUsers,
)
from ..models.metric import MetricType, format_number, format_with_unit, get_metric_config
from ..utils.periods import DateLike, format_custom_period_label
from .results import percent_of


def format_challenge_period(period_start: DateLike, period_end: DateLike) -> str:
    return format_custom_period_label(period_start, period_end)


def format_challenge_value(value: float, metric_type: Union[MetricType, str]) -> str:
    return format_with_unit(value, metric_type)


def get_challenge_outcome_emoji(challenge: Challenge, user_id: str) -> str:
    if challenge.status != ChallengeStatus.COMPLETED:
        return ""
    if challenge.winner_id is None:
        return "🤝"
    if challenge.winner_id == user_id:
        return "🏆"
    return "👏"


def _perspective(challenge: ChallengeWithUsers, user_id: str):
    """Return (is_challenger, opponent, user_value, opponent_value) for user_id."""
    is_challenger = challenge.challenger_id == user_id
    if is_challenger:
        return True, challenge.target, challenge.challenger_value, challenge.target_value
    return False, challenge.challenger, challenge.target_value, challenge.challenger_value


def format_challenge_result_message(challenge: ChallengeWithUsers, user_id: str) -> str:
    if challenge.status != ChallengeStatus.COMPLETED:
        return "Challenge in progress"

    _, opponent, user_value, opponent_value = _perspective(challenge, user_id)
    metric = get_metric_config(challenge.metric_type)

    if challenge.winner_id is None:
        return f"It's a tie! You both got {format_number(user_value)} {metric.unit_plural}"

    margin = abs(user_value - opponent_value)
    if challenge.winner_id == user_id:
        margin_pct = percent_of(margin, opponent_value)
        return f"You won by {format_number(margin)} {metric.unit_plural} ({margin_pct}%)!"
    return f"{opponent.display_name} won by {format_number(margin)} {metric.unit_plural}"


def generate_challenge_share_message(challenge: ChallengeWithUsers, user_id: str) -> ChallengeShareMessage:
    is_challenger, opponent, user_value, _ = _perspective(challenge, user_id)
    metric = get_metric_config(challenge.metric_type)
    period = format_challenge_period(challenge.period_start, challenge.period_end)
    hashtags = list(config.SHARE_HASHTAGS)
    metric_name = metric.display_name.lower()

    if challenge.status == ChallengeStatus.PENDING:
        text = f"I just challenged {opponent.display_name} to a {metric_name} competition! {metric.emoji}"
    elif challenge.status == ChallengeStatus.ACCEPTED:
        owner = "My" if is_challenger else "A"
        text = (
            f"{owner} challenge vs {opponent.display_name} is ON! "
            f"Who will get more {metric.unit_plural}? {metric.emoji}"
        )
    elif challenge.status == ChallengeStatus.COMPLETED:
        if challenge.winner_id is None:
            text = (
                f"It's a tie! {opponent.display_name} and I both hit "
                f"{format_number(user_value)} {metric.unit_plural} {period}! {metric.emoji}"
            )
        elif challenge.winner_id == user_id:
            text = (
                f"I won my challenge against {opponent.display_name}! "
                f"{format_number(user_value)} {metric.unit_plural} {period} 🏆"
            )
            hashtags.append("Victory")
        else:
            text = f"Good game {opponent.display_name}! They beat me in our {metric_name} challenge {period} 💪"
            hashtags.append("GoodSportsmanship")
    else:
        text = f"Check out my step challenge on {config.APP_NAME}! {metric.emoji}"

    return ChallengeShareMessage(text=text, hashtags=hashtags)

