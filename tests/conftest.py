"""Shared fixtures for the challenge engine tests."""

from datetime import date, timedelta

import pytest

from challenge_engine.models.challenge import Challenge, ChallengeParticipant, ChallengeWithUsers

from factories import CHALLENGER_ID, TARGET_ID, NOW


@pytest.fixture
def make_challenge():
    """Factory for plain challenges between CHALLENGER_ID and TARGET_ID."""
    def _make(**overrides) -> Challenge:
        data = {
            "challenger_id": CHALLENGER_ID,
            "target_id": TARGET_ID,
            "period_start": date(2026, 1, 12),
            "period_end": date(2026, 1, 18),
            "created_at": NOW - timedelta(days=7),
        }
        data.update(overrides)
        return Challenge(**data)
    return _make


@pytest.fixture
def make_challenge_with_users():
    """Factory for challenges carrying display names for both parties."""
    def _make(**overrides) -> ChallengeWithUsers:
        data = {
            "id": "challenge-1",
            "challenger_id": CHALLENGER_ID,
            "target_id": TARGET_ID,
            "period_start": date(2026, 1, 12),
            "period_end": date(2026, 1, 18),
            "created_at": NOW - timedelta(days=7),
            "challenger": ChallengeParticipant(id=CHALLENGER_ID, display_name="Alice"),
            "target": ChallengeParticipant(id=TARGET_ID, display_name="Bob"),
        }
        data.update(overrides)
        return ChallengeWithUsers(**data)
    return _make
