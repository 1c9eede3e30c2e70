from pydantic import BaseModel, Field
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.challenge import Challenge, ChallengeEvent, ChallengeResult, ChallengeStatus, ChallengeWithUsers
from ..models.submission import DailySubmission
from ..services.lifecycle import apply_challenge_event
from ..services.notification import ChallengeNotification, generate_result_notifications
from ..services.results import calculate_challenge_result, sum_daily_totals
from ..utils.logging import setup_logger

logger = setup_logger(__name__)

class ResolutionSummary(BaseModel):
    resolved: List[Challenge] = Field(default_factory=list)
    results: Dict[str, ChallengeResult] = Field(default_factory=dict)
    notifications: List[ChallengeNotification] = Field(default_factory=list)


def find_resolvable_challenges(challenges: Iterable[Challenge], today: Optional[date] = None) -> List[Challenge]:
    """Accepted challenges whose period ended before today."""
    today = today or date.today()
    return [
        challenge for challenge in challenges
        if challenge.status == ChallengeStatus.ACCEPTED and challenge.period_end < today
    ]


def resolve_challenge(
    challenge: Challenge,
    challenger_submissions: Iterable[DailySubmission],
    target_submissions: Iterable[DailySubmission],
    now: Optional[datetime] = None
) -> Tuple[Challenge, ChallengeResult]:
    challenger_total = sum_daily_totals(challenger_submissions, challenge.period_start, challenge.period_end)
    target_total = sum_daily_totals(target_submissions, challenge.period_start, challenge.period_end)

    result = calculate_challenge_result(
        challenger_total,
        target_total,
        challenge.challenger_id,
        challenge.target_id
    )

    resolved = apply_challenge_event(
        challenge,
        ChallengeEvent.COMPLETE,
        now,
        challenger_value=result.challenger_total,
        target_value=result.target_total,
        winner_id=result.winner_id
    )
    return resolved, result


def resolve_challenges(
    challenges: Iterable[Challenge],
    submissions: Iterable[DailySubmission],
    today: Optional[date] = None,
    now: Optional[datetime] = None
) -> ResolutionSummary:
    """Resolve every accepted challenge whose period is over.

    submissions may hold any users' daily submissions; they are matched by user_id.
    """
    now = now or datetime.now(timezone.utc)
    summary = ResolutionSummary()

    to_resolve = find_resolvable_challenges(challenges, today)
    if not to_resolve:
        logger.info("No challenges to resolve")
        return summary

    by_user: Dict[str, List[DailySubmission]] = defaultdict(list)
    for submission in submissions:
        by_user[submission.user_id].append(submission)

    for challenge in to_resolve:
        resolved, result = resolve_challenge(
            challenge,
            by_user.get(challenge.challenger_id, []),
            by_user.get(challenge.target_id, []),
            now
        )
        summary.resolved.append(resolved)
        summary.results[resolved.id] = result
        if isinstance(resolved, ChallengeWithUsers):
            summary.notifications.extend(generate_result_notifications(resolved, result))
        logger.info(f"Resolved challenge {resolved.id}: winner={result.winner_id} tie={result.is_tie}")

    logger.info(f"Resolved {len(summary.resolved)} challenges")
    return summary


def find_expirable_challenges(challenges: Iterable[Challenge], today: Optional[date] = None) -> List[Challenge]:
    """Pending challenges whose whole period went by without an answer."""
    today = today or date.today()
    return [
        challenge for challenge in challenges
        if challenge.status == ChallengeStatus.PENDING and challenge.period_end < today
    ]


def expire_challenges(
    challenges: Iterable[Challenge],
    today: Optional[date] = None,
    now: Optional[datetime] = None
) -> List[Challenge]:
    now = now or datetime.now(timezone.utc)
    expired = [
        apply_challenge_event(challenge, ChallengeEvent.EXPIRE, now)
        for challenge in find_expirable_challenges(challenges, today)
    ]
    logger.info(f"Expired {len(expired)} pending challenges")
    return expired
