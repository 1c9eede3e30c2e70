"""Tests for display strings, share messages and notifications."""

import pytest

from challenge_engine.models.challenge import ChallengeResult, ChallengeStatus
from challenge_engine.models.metric import MetricType, format_metric_value, format_with_unit
from challenge_engine.services.messages import (
    format_challenge_period,
    format_challenge_result_message,
    format_challenge_value,
    generate_challenge_share_message,
    get_challenge_outcome_emoji,
)
from challenge_engine.services.notification import (
    NotificationType,
    generate_challenge_notification,
    generate_result_notifications,
)

from factories import CHALLENGER_ID, TARGET_ID


class TestPeriodAndValues:

    @pytest.mark.parametrize("start,end,label", [
        ("2026-01-15", "2026-01-15", "Jan 15"),
        ("2026-01-15", "2026-01-22", "Jan 15-22"),
        ("2026-01-15", "2026-02-10", "Jan 15 - Feb 10"),
        ("2025-12-28", "2026-01-05", "Dec 28, 2025 - Jan 5, 2026"),
    ])
    def test_format_challenge_period(self, start, end, label):
        assert format_challenge_period(start, end) == label

    def test_format_challenge_value(self):
        assert format_challenge_value(12345, MetricType.STEPS) == "12,345 steps"
        assert format_challenge_value(1, "steps") == "1 step"
        assert format_challenge_value(12.34, MetricType.DISTANCE) == "12.3 km"

    def test_unknown_metric_formats_as_steps(self):
        assert format_with_unit(2000, "pushups") == "2,000 steps"

    def test_format_metric_value_whole_floats(self):
        assert format_metric_value(10000.0, MetricType.STEPS) == "10,000"


class TestOutcomeEmoji:

    def test_unfinished_has_no_emoji(self, make_challenge):
        assert get_challenge_outcome_emoji(make_challenge(status=ChallengeStatus.ACCEPTED), CHALLENGER_ID) == ""

    def test_completed_outcomes(self, make_challenge):
        won = make_challenge(status=ChallengeStatus.COMPLETED, winner_id=CHALLENGER_ID)
        tied = make_challenge(status=ChallengeStatus.COMPLETED, winner_id=None)

        assert get_challenge_outcome_emoji(won, CHALLENGER_ID) == "🏆"
        assert get_challenge_outcome_emoji(won, TARGET_ID) == "👏"
        assert get_challenge_outcome_emoji(tied, TARGET_ID) == "🤝"


class TestResultMessage:

    def test_in_progress(self, make_challenge_with_users):
        challenge = make_challenge_with_users(status=ChallengeStatus.ACCEPTED)
        assert format_challenge_result_message(challenge, CHALLENGER_ID) == "Challenge in progress"

    def test_win(self, make_challenge_with_users):
        challenge = make_challenge_with_users(
            status=ChallengeStatus.COMPLETED,
            challenger_value=10000,
            target_value=8000,
            winner_id=CHALLENGER_ID,
        )
        assert format_challenge_result_message(challenge, CHALLENGER_ID) == "You won by 2,000 steps (25%)!"

    def test_loss_names_opponent(self, make_challenge_with_users):
        challenge = make_challenge_with_users(
            status=ChallengeStatus.COMPLETED,
            challenger_value=10000,
            target_value=8000,
            winner_id=CHALLENGER_ID,
        )
        assert format_challenge_result_message(challenge, TARGET_ID) == "Alice won by 2,000 steps"

    def test_tie(self, make_challenge_with_users):
        challenge = make_challenge_with_users(
            status=ChallengeStatus.COMPLETED,
            challenger_value=5000,
            target_value=5000,
        )
        assert format_challenge_result_message(challenge, TARGET_ID) == "It's a tie! You both got 5,000 steps"


class TestShareMessage:

    def test_pending(self, make_challenge_with_users):
        share = generate_challenge_share_message(make_challenge_with_users(), CHALLENGER_ID)
        assert share.text == "I just challenged Bob to a steps competition! 🚶"
        assert share.hashtags == ["StepLeague", "StepChallenge"]

    def test_accepted_from_each_side(self, make_challenge_with_users):
        challenge = make_challenge_with_users(status=ChallengeStatus.ACCEPTED)
        assert generate_challenge_share_message(challenge, CHALLENGER_ID).text.startswith("My challenge vs Bob is ON!")
        assert generate_challenge_share_message(challenge, TARGET_ID).text.startswith("A challenge vs Alice is ON!")

    def test_win_adds_victory_tag(self, make_challenge_with_users):
        challenge = make_challenge_with_users(
            status=ChallengeStatus.COMPLETED,
            challenger_value=10000,
            target_value=8000,
            winner_id=CHALLENGER_ID,
        )

        share = generate_challenge_share_message(challenge, CHALLENGER_ID)

        assert share.text == "I won my challenge against Bob! 10,000 steps Jan 12-18 🏆"
        assert share.hashtags[-1] == "Victory"

    def test_loss_adds_sportsmanship_tag(self, make_challenge_with_users):
        challenge = make_challenge_with_users(status=ChallengeStatus.COMPLETED, winner_id=CHALLENGER_ID)

        share = generate_challenge_share_message(challenge, TARGET_ID)

        assert "Alice" in share.text
        assert "Jan 12-18" in share.text
        assert share.hashtags[-1] == "GoodSportsmanship"

    def test_tie_mentions_value_and_period(self, make_challenge_with_users):
        challenge = make_challenge_with_users(
            status=ChallengeStatus.COMPLETED, challenger_value=7000, target_value=7000
        )

        share = generate_challenge_share_message(challenge, TARGET_ID)

        assert share.text.startswith("It's a tie! Alice and I both hit 7,000 steps Jan 12-18!")
        assert share.hashtags == ["StepLeague", "StepChallenge"]

    def test_other_states_use_generic_text(self, make_challenge_with_users):
        share = generate_challenge_share_message(
            make_challenge_with_users(status=ChallengeStatus.DECLINED), CHALLENGER_ID
        )
        assert share.text == "Check out my step challenge on StepLeague! 🚶"

    def test_is_deterministic(self, make_challenge_with_users):
        challenge = make_challenge_with_users(status=ChallengeStatus.ACCEPTED)
        assert generate_challenge_share_message(challenge, TARGET_ID) == generate_challenge_share_message(
            challenge, TARGET_ID
        )


class TestNotifications:

    def test_created(self, make_challenge_with_users):
        notification = generate_challenge_notification("created", make_challenge_with_users(), TARGET_ID)

        assert notification.user_id == TARGET_ID
        assert notification.type == NotificationType.CHALLENGE_CREATED
        assert notification.title == "Alice challenged you!"
        assert notification.message == "🚶 Can you beat them in steps Jan 12-18?"
        assert notification.action_url == "/challenges"

    def test_accepted_links_to_challenge(self, make_challenge_with_users):
        notification = generate_challenge_notification("accepted", make_challenge_with_users(), CHALLENGER_ID)

        assert notification.title == "Challenge accepted!"
        assert notification.message == "Bob accepted your steps challenge"
        assert notification.action_url == "/challenges/challenge-1"

    def test_declined(self, make_challenge_with_users):
        notification = generate_challenge_notification("declined", make_challenge_with_users(), CHALLENGER_ID)
        assert notification.message == "Bob declined your challenge"
        assert notification.type == NotificationType.CHALLENGE_DECLINED

    @pytest.mark.parametrize("winner_id,recipient,title", [
        (CHALLENGER_ID, CHALLENGER_ID, "You won! 🏆"),
        (CHALLENGER_ID, TARGET_ID, "Challenge complete"),
        (None, TARGET_ID, "Challenge ended - It's a tie!"),
    ])
    def test_completed(self, make_challenge_with_users, winner_id, recipient, title):
        challenge = make_challenge_with_users(status=ChallengeStatus.COMPLETED, winner_id=winner_id)

        notification = generate_challenge_notification("completed", challenge, recipient)

        assert notification.title == title
        assert notification.type == NotificationType.CHALLENGE_RESULT

    def test_unknown_event(self, make_challenge_with_users):
        with pytest.raises(ValueError):
            generate_challenge_notification("cancelled", make_challenge_with_users(), TARGET_ID)

    def test_result_notifications_for_both_parties(self, make_challenge_with_users):
        challenge = make_challenge_with_users(status=ChallengeStatus.COMPLETED, winner_id=TARGET_ID)
        result = ChallengeResult(
            challenger_total=6000,
            target_total=9000,
            winner_id=TARGET_ID,
            is_tie=False,
            margin=3000,
            margin_pct=50,
        )

        challenger_note, target_note = generate_result_notifications(challenge, result)

        assert challenger_note.user_id == CHALLENGER_ID
        assert challenger_note.message == "Bob won with 9,000 steps"
        assert challenger_note.metadata["result"] == "lost"
        assert challenger_note.metadata["your_total"] == 6000
        assert target_note.user_id == TARGET_ID
        assert target_note.title == "You won! 🏆"
        assert target_note.message == "You beat Alice with 9,000 steps!"
        assert target_note.metadata["opponent_total"] == 6000

    def test_result_notifications_on_tie(self, make_challenge_with_users):
        challenge = make_challenge_with_users(status=ChallengeStatus.COMPLETED)
        result = ChallengeResult(
            challenger_total=4000, target_total=4000, winner_id=None, is_tie=True, margin=0, margin_pct=0
        )

        notifications = generate_result_notifications(challenge, result)

        assert [n.metadata["result"] for n in notifications] == ["tie", "tie"]
        assert notifications[0].message == "You and Bob tied with 4,000 steps!"
