"""
ゲストセッションモデル
端末ごとに1つだけ存在する匿名体験セッション
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .companion import TempCompanion
from .message import GuestMessage, parse_timestamp
from .trigger import (
    CONVERSION_TRIGGER_CATALOG,
    ConversionTrigger,
    TriggerState,
    TriggerType,
    initial_trigger_states,
)


@dataclass
class SessionStats:
    """セッション統計（移行ペイロードと画面表示用）"""
    time_spent: int           # 経過秒数
    message_count: int
    engagement_score: int     # 0-100 (%)
    companion_name: str
    conversation_length: int  # 双方のメッセージ総数

    def to_dict(self) -> dict[str, Any]:
        return {
            "timeSpent": self.time_spent,
            "messageCount": self.message_count,
            "engagementScore": self.engagement_score,
            "companionName": self.companion_name,
            "conversationLength": self.conversation_length,
        }


@dataclass
class GuestSession:
    """
    ゲストセッション

    conversation_history は挨拶メッセージ1件から始まる追記専用の履歴。
    message_count はユーザー発言数のみを数える。
    trigger_states の FIRED は一度立ったら戻らない。
    """
    session_id: str
    temporary_companion: TempCompanion
    conversation_history: list[GuestMessage]
    experience_start_time: datetime
    message_count: int = 0
    engagement_score: float = 0.0
    trigger_states: dict[TriggerType, TriggerState] = field(default_factory=initial_trigger_states)

    @property
    def user_messages(self) -> list[GuestMessage]:
        return [m for m in self.conversation_history if m.is_user]

    @property
    def conversion_triggers(self) -> list[ConversionTrigger]:
        """カタログ順のトリガー一覧"""
        return [
            ConversionTrigger(
                type=definition.type,
                threshold=definition.threshold,
                triggered=self.is_fired(definition.type),
                message=definition.message,
            )
            for definition in CONVERSION_TRIGGER_CATALOG
        ]

    def is_fired(self, trigger_type: TriggerType) -> bool:
        return self.trigger_states.get(trigger_type) is TriggerState.FIRED

    def fire(self, trigger_type: TriggerType) -> None:
        self.trigger_states[trigger_type] = TriggerState.FIRED

    def elapsed_seconds(self, now: datetime) -> float:
        return (now - self.experience_start_time).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "temporaryCompanion": self.temporary_companion.to_dict(),
            "conversationHistory": [m.to_dict() for m in self.conversation_history],
            "experienceStartTime": self.experience_start_time.isoformat(),
            "messageCount": self.message_count,
            "engagementScore": self.engagement_score,
            "conversionTriggers": [
                {
                    "type": t.type.value,
                    "threshold": t.threshold,
                    "triggered": t.triggered,
                    "message": t.message,
                }
                for t in self.conversion_triggers
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GuestSession":
        """
        保存データから復元

        Raises:
            KeyError, TypeError, ValueError: 構造が不正な場合
        """
        if not isinstance(data, dict):
            raise TypeError("session data must be an object")

        history = [GuestMessage.from_dict(m) for m in data["conversationHistory"]]
        if not history:
            raise ValueError("conversationHistory must not be empty")

        message_count = data.get("messageCount", 0)
        if not isinstance(message_count, int) or message_count < 0:
            raise ValueError(f"invalid messageCount: {message_count!r}")

        engagement_score = float(data.get("engagementScore", 0.0))
        if not 0.0 <= engagement_score <= 1.0:
            raise ValueError(f"invalid engagementScore: {engagement_score!r}")

        trigger_states = initial_trigger_states()
        for trigger in data.get("conversionTriggers", []):
            if trigger.get("triggered"):
                trigger_states[TriggerType(trigger["type"])] = TriggerState.FIRED

        return cls(
            session_id=str(data["sessionId"]),
            temporary_companion=TempCompanion.from_dict(data["temporaryCompanion"]),
            conversation_history=history,
            experience_start_time=parse_timestamp(data["experienceStartTime"]),
            message_count=message_count,
            engagement_score=engagement_score,
            trigger_states=trigger_states,
        )
