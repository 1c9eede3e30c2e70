import math
from datetime import date, datetime, time, timezone
from typing import Dict, Iterable, List, Optional

from ..models.challenge import (
    Challenge,
    ChallengeResult,
    ChallengeStats,
    ChallengeProgress,
    ChallengeStatus,
)
from ..models.submission import DailySubmission
from ..utils.periods import DateLike, calculate_days_between, parse_date


def percent_of(part: float, whole: float) -> int:
    """Whole-number percentage, rounding halves up. 0 when whole is not positive."""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


def calculate_challenge_result(
    challenger_total: float,
    target_total: float,
    challenger_id: str,
    target_id: str
) -> ChallengeResult:
    margin = abs(challenger_total - target_total)
    loser_total = min(challenger_total, target_total)
    margin_pct = percent_of(margin, loser_total)

    winner_id = None
    is_tie = False
    if challenger_total > target_total:
        winner_id = challenger_id
    elif target_total > challenger_total:
        winner_id = target_id
    else:
        is_tie = True

    return ChallengeResult(
        challenger_total=challenger_total,
        target_total=target_total,
        winner_id=winner_id,
        is_tie=is_tie,
        margin=margin,
        margin_pct=margin_pct
    )


def _resolution_order(challenge: Challenge) -> datetime:
    # Naive timestamps are taken as UTC so they sort alongside aware ones
    moment = challenge.resolved_at or challenge.created_at
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def calculate_challenge_stats(challenges: Iterable[Challenge], user_id: str) -> ChallengeStats:
    stats = ChallengeStats()
    completed: List[Challenge] = []

    for challenge in challenges:
        if challenge.status == ChallengeStatus.PENDING:
            if challenge.challenger_id == user_id:
                stats.pending_sent += 1
            else:
                stats.pending_received += 1
        elif challenge.status == ChallengeStatus.ACCEPTED:
            stats.active += 1
        elif challenge.status == ChallengeStatus.COMPLETED:
            completed.append(challenge)
            if challenge.winner_id == user_id:
                stats.wins += 1
            elif challenge.winner_id is None:
                stats.ties += 1
            else:
                stats.losses += 1

    # Streaks only look at completed challenges, oldest first. A tie breaks a streak.
    completed.sort(key=_resolution_order)
    run = 0
    for challenge in completed:
        if challenge.winner_id == user_id:
            run += 1
            stats.best_win_streak = max(stats.best_win_streak, run)
        else:
            run = 0

    for challenge in reversed(completed):
        if challenge.winner_id != user_id:
            break
        stats.current_win_streak += 1

    stats.total_challenges = stats.wins + stats.losses + stats.ties
    stats.win_rate = percent_of(stats.wins, stats.total_challenges)

    return stats


def calculate_challenge_progress(
    period_start: DateLike,
    period_end: DateLike,
    today: Optional[date] = None
) -> ChallengeProgress:
    today = today or date.today()
    start = parse_date(period_start)
    end = parse_date(period_end)

    total_days = calculate_days_between(start, end)

    if today < start:
        days_passed = 0
    elif today > end:
        days_passed = total_days
    else:
        days_passed = calculate_days_between(start, today)

    progress = min(100, percent_of(days_passed, total_days))

    return ChallengeProgress(days_passed=max(days_passed, 0), total_days=total_days, progress=progress)


def is_challenge_in_progress(
    period_start: DateLike,
    period_end: DateLike,
    today: Optional[date] = None
) -> bool:
    today = today or date.today()
    return parse_date(period_start) <= today <= parse_date(period_end)


def has_challenge_period_ended(period_end: DateLike, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    end_of_period = datetime.combine(parse_date(period_end), time(23, 59, 59))
    return now.replace(tzinfo=None) > end_of_period


def sum_daily_totals(
    submissions: Iterable[DailySubmission],
    period_start: Optional[DateLike] = None,
    period_end: Optional[DateLike] = None
) -> float:
    """Sum a user's submissions, keeping only the highest value per day.

    When a period is given, submissions outside it are ignored.
    """
    start = parse_date(period_start) if period_start is not None else None
    end = parse_date(period_end) if period_end is not None else None

    by_date: Dict[date, float] = {}
    for submission in submissions:
        if start is not None and submission.for_date < start:
            continue
        if end is not None and submission.for_date > end:
            continue
        by_date[submission.for_date] = max(by_date.get(submission.for_date, 0), submission.value or 0)

    return sum(by_date.values())


def get_challenge_leader(challenger_total: float, target_total: float) -> str:
    if challenger_total > target_total:
        return "challenger"
    if target_total > challenger_total:
        return "target"
    return "tie"
