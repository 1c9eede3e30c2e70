from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from ..models.challenge import ChallengePeriod
from ..models.metric import MetricType
from ..utils.periods import (
    add_days,
    first_of_next_month,
    format_date_ymd,
    last_day_of_month,
    next_weekday,
)

SATURDAY = 5
MONDAY = 0


@dataclass(frozen=True)
class ChallengeTemplate:
    id: str
    name: str
    description: str
    emoji: str
    duration_days: int
    # Both work on local calendar days; today defaults to date.today()
    get_period_start: Callable[..., date]
    get_period_end: Callable[[date], date]
    metric_type: Optional[MetricType] = None


def _today(today: Optional[date] = None) -> date:
    return today or date.today()


CHALLENGE_TEMPLATES = (
    ChallengeTemplate(
        id="today_only",
        name="Today Only",
        description="Head-to-head for today's steps",
        emoji="⚡",
        duration_days=1,
        get_period_start=_today,
        get_period_end=lambda start: start,
    ),
    ChallengeTemplate(
        id="weekend_warrior",
        name="Weekend Warrior",
        description="Saturday & Sunday showdown",
        emoji="🌴",
        duration_days=2,
        get_period_start=lambda today=None: next_weekday(SATURDAY, today),
        get_period_end=lambda start: add_days(start, 1),
    ),
    ChallengeTemplate(
        id="week_sprint",
        name="Week Sprint",
        description="7-day competition (Mon-Sun)",
        emoji="🏃",
        duration_days=7,
        get_period_start=lambda today=None: next_weekday(MONDAY, today),
        get_period_end=lambda start: add_days(start, 6),
    ),
    ChallengeTemplate(
        id="workweek",
        name="Workweek Challenge",
        description="Monday through Friday",
        emoji="💼",
        duration_days=5,
        get_period_start=lambda today=None: next_weekday(MONDAY, today),
        get_period_end=lambda start: add_days(start, 4),
    ),
    ChallengeTemplate(
        id="two_week",
        name="Two Week Battle",
        description="14-day endurance challenge",
        emoji="🔥",
        duration_days=14,
        get_period_start=lambda today=None: next_weekday(MONDAY, today),
        get_period_end=lambda start: add_days(start, 13),
    ),
    ChallengeTemplate(
        id="monthly_marathon",
        name="Monthly Marathon",
        description="Full month competition",
        emoji="🏆",
        duration_days=30,  # Approximate
        get_period_start=first_of_next_month,
        get_period_end=last_day_of_month,
    ),
)

TEMPLATES_BY_ID: Mapping[str, ChallengeTemplate] = MappingProxyType(
    {template.id: template for template in CHALLENGE_TEMPLATES}
)


def get_template_by_id(template_id: str) -> Optional[ChallengeTemplate]:
    return TEMPLATES_BY_ID.get(template_id)


def apply_template(template_id: str, today: Optional[date] = None) -> Optional[ChallengePeriod]:
    template = get_template_by_id(template_id)
    if template is None:
        return None

    period_start = template.get_period_start(today)
    period_end = template.get_period_end(period_start)

    return ChallengePeriod(
        period_start=format_date_ymd(period_start),
        period_end=format_date_ymd(period_end)
    )


def get_template_options() -> List[dict]:
    return [
        {
            "value": template.id,
            "label": template.name,
            "emoji": template.emoji,
            "description": template.description,
            "duration": template.duration_days,
        }
        for template in CHALLENGE_TEMPLATES
    ]


def format_template_duration(days: int) -> str:
    if days == 1:
        return "1 day"
    if days == 7:
        return "1 week"
    if days == 14:
        return "2 weeks"
    if 28 <= days <= 31:
        return "1 month"
    return f"{days} days"
