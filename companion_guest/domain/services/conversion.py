"""
コンバージョントリガー評価

トリガーごとの状態機械 (PENDING → FIRED)。
evaluate_triggers はセッションのスナップショットから新たに発火すべき
トリガーを返すだけで、セッション自体は変更しない。
"""

from dataclasses import dataclass
from datetime import datetime

from ..models.session import GuestSession
from ..models.trigger import CONVERSION_TRIGGER_CATALOG, TriggerDefinition, TriggerType


@dataclass(frozen=True)
class TriggerSnapshot:
    """トリガー評価に使う値"""
    message_count: int
    engagement_score: float
    time_spent_seconds: float

    @classmethod
    def of(cls, session: GuestSession, now: datetime) -> "TriggerSnapshot":
        return cls(
            message_count=session.message_count,
            engagement_score=session.engagement_score,
            time_spent_seconds=session.elapsed_seconds(now),
        )


def _condition_met(definition: TriggerDefinition, snapshot: TriggerSnapshot) -> bool:
    if definition.type is TriggerType.MESSAGE_COUNT:
        return snapshot.message_count >= definition.threshold
    if definition.type is TriggerType.ENGAGEMENT_HIGH:
        return snapshot.engagement_score >= definition.threshold
    if definition.type is TriggerType.TIME_SPENT:
        return snapshot.time_spent_seconds >= definition.threshold
    return False


def evaluate_triggers(session: GuestSession, snapshot: TriggerSnapshot) -> list[TriggerType]:
    """
    新たに発火するトリガーをカタログ順で返す

    既に FIRED のトリガーは評価対象外。
    """
    return [
        definition.type
        for definition in CONVERSION_TRIGGER_CATALOG
        if not session.is_fired(definition.type) and _condition_met(definition, snapshot)
    ]


def get_next_conversion_prompt(session: GuestSession) -> str | None:
    """カタログ順で最初に発火済みのトリガーのメッセージ"""
    for trigger in session.conversion_triggers:
        if trigger.triggered:
            return trigger.message
    return None


def should_show_conversion_prompt(session: GuestSession) -> bool:
    return any(trigger.triggered for trigger in session.conversion_triggers)
