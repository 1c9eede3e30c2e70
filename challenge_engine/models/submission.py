from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import date, datetime, timezone

class DailySubmissionBase(SQLModel):
    user_id: str = Field(index=True)
    for_date: date = Field(index=True)
    value: float = Field(default=0, ge=0)
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class DailySubmission(DailySubmissionBase):
    submission_id: Optional[str] = Field(default=None, primary_key=True)
