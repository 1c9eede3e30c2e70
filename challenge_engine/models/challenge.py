from sqlmodel import SQLModel, Field
from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime, timezone
from enum import Enum
from uuid import uuid4

from .metric import MetricType

class ChallengeStatus(str, Enum):
    PENDING = "pending"  # Awaiting target's response
    ACCEPTED = "accepted"  # In progress
    DECLINED = "declined"
    COMPLETED = "completed"  # Period ended, winner determined
    CANCELLED = "cancelled"
    EXPIRED = "expired"  # Target didn't respond in time

class ChallengeEvent(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"
    CANCEL = "cancel"
    COMPLETE = "complete"
    EXPIRE = "expire"

class ChallengeAction(str, Enum):
    """Events a participant may trigger themselves."""
    ACCEPT = "accept"
    DECLINE = "decline"
    CANCEL = "cancel"

class ChallengeBase(SQLModel):
    challenger_id: str = Field(index=True)
    target_id: str = Field(index=True)
    metric_type: MetricType = Field(default=MetricType.STEPS)
    period_start: date
    period_end: date
    challenger_value: float = Field(default=0, ge=0)
    target_value: float = Field(default=0, ge=0)
    winner_id: Optional[str] = None
    status: ChallengeStatus = Field(default=ChallengeStatus.PENDING)
    # Length is enforced by validation against CHALLENGE_MAX_MESSAGE_LENGTH
    message: Optional[str] = None
    template_id: Optional[str] = Field(default=None, max_length=50)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    accepted_at: Optional[datetime] = None
    declined_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

class Challenge(ChallengeBase):
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)

class ChallengeParticipant(SQLModel):
    id: str
    display_name: str
    avatar_url: Optional[str] = None

class ChallengeWithUsers(Challenge):
    challenger: ChallengeParticipant
    target: ChallengeParticipant
    winner: Optional[ChallengeParticipant] = None


# Request shapes. Values stay raw so validation can report every problem at once.
class ChallengeCreate(BaseModel):
    target_id: Optional[str] = None
    metric_type: Optional[str] = None
    period_start: Optional[str] = None  # YYYY-MM-DD
    period_end: Optional[str] = None  # YYYY-MM-DD
    message: Optional[str] = None
    template_id: Optional[str] = None

class ChallengeUpdate(BaseModel):
    action: str


class ChallengeResult(BaseModel):
    challenger_total: float
    target_total: float
    winner_id: Optional[str]
    is_tie: bool
    margin: float  # Absolute difference
    margin_pct: int  # Percentage difference from loser's perspective

class ChallengeStats(BaseModel):
    total_challenges: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    pending_received: int = 0
    pending_sent: int = 0
    active: int = 0
    win_rate: int = 0  # 0-100
    current_win_streak: int = 0
    best_win_streak: int = 0

class ChallengeProgress(BaseModel):
    days_passed: int
    total_days: int
    progress: int  # 0-100

class ChallengePeriod(BaseModel):
    period_start: str  # YYYY-MM-DD
    period_end: str  # YYYY-MM-DD

class ChallengeShareMessage(BaseModel):
    text: str
    hashtags: List[str]

class ChallengeBuckets(SQLModel):
    pending_received: List[Challenge] = Field(default_factory=list)
    pending_sent: List[Challenge] = Field(default_factory=list)
    active: List[Challenge] = Field(default_factory=list)
    history: List[Challenge] = Field(default_factory=list)
