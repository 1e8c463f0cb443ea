"""Tests for conversion trigger evaluation"""

from datetime import datetime

from companion_guest.domain.models.companion import TEMP_COMPANION_TEMPLATES
from companion_guest.domain.models.message import GuestMessage, Sender
from companion_guest.domain.models.session import GuestSession
from companion_guest.domain.models.trigger import CONVERSION_TRIGGER_CATALOG, TriggerType
from companion_guest.domain.services.conversion import (
    TriggerSnapshot,
    evaluate_triggers,
    get_next_conversion_prompt,
    should_show_conversion_prompt,
)

START = datetime(2026, 1, 1, 12, 0, 0)
PROMPTS = {d.type: d.message for d in CONVERSION_TRIGGER_CATALOG}


def new_session() -> GuestSession:
    companion = TEMP_COMPANION_TEMPLATES[0]
    return GuestSession(
        session_id="s",
        temporary_companion=companion,
        conversation_history=[
            GuestMessage(id="g", content=companion.greeting, sender=Sender.COMPANION, timestamp=START)
        ],
        experience_start_time=START,
    )


class TestEvaluateTriggers:

    def test_nothing_fires_below_thresholds(self):
        snapshot = TriggerSnapshot(message_count=2, engagement_score=0.79, time_spent_seconds=299.9)
        assert evaluate_triggers(new_session(), snapshot) == []

    def test_thresholds_are_inclusive(self):
        snapshot = TriggerSnapshot(message_count=3, engagement_score=0.8, time_spent_seconds=300)
        assert evaluate_triggers(new_session(), snapshot) == [
            TriggerType.MESSAGE_COUNT,
            TriggerType.ENGAGEMENT_HIGH,
            TriggerType.TIME_SPENT,
        ]

    def test_only_time_spent(self):
        snapshot = TriggerSnapshot(message_count=1, engagement_score=0.3, time_spent_seconds=600)
        assert evaluate_triggers(new_session(), snapshot) == [TriggerType.TIME_SPENT]

    def test_fired_triggers_are_not_reported_again(self):
        session = new_session()
        session.fire(TriggerType.MESSAGE_COUNT)

        snapshot = TriggerSnapshot(message_count=10, engagement_score=0.0, time_spent_seconds=0)
        assert evaluate_triggers(session, snapshot) == []

    def test_evaluation_does_not_mutate_session(self):
        session = new_session()
        snapshot = TriggerSnapshot(message_count=5, engagement_score=0.9, time_spent_seconds=400)

        evaluate_triggers(session, snapshot)

        assert not should_show_conversion_prompt(session)

    def test_fired_trigger_stays_fired_when_condition_no_longer_holds(self):
        session = new_session()
        session.fire(TriggerType.ENGAGEMENT_HIGH)

        evaluate_triggers(session, TriggerSnapshot(0, 0.1, 0))

        assert session.is_fired(TriggerType.ENGAGEMENT_HIGH)

    def test_snapshot_of_session(self):
        session = new_session()
        session.message_count = 2
        session.engagement_score = 0.5
        snapshot = TriggerSnapshot.of(session, datetime(2026, 1, 1, 12, 1, 30))
        assert snapshot == TriggerSnapshot(2, 0.5, 90.0)


class TestConversionPrompt:

    def test_no_prompt_before_any_trigger(self):
        session = new_session()
        assert get_next_conversion_prompt(session) is None
        assert should_show_conversion_prompt(session) is False

    def test_prompt_follows_catalog_order(self):
        """発火順ではなくカタログ順で最初のもの"""
        session = new_session()
        session.fire(TriggerType.TIME_SPENT)
        assert get_next_conversion_prompt(session) == PROMPTS[TriggerType.TIME_SPENT]

        session.fire(TriggerType.ENGAGEMENT_HIGH)
        assert get_next_conversion_prompt(session) == PROMPTS[TriggerType.ENGAGEMENT_HIGH]

        session.fire(TriggerType.MESSAGE_COUNT)
        assert get_next_conversion_prompt(session) == PROMPTS[TriggerType.MESSAGE_COUNT]
        assert should_show_conversion_prompt(session) is True
