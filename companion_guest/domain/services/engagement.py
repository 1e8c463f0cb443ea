"""
エンゲージメントスコア計算

発言の長さ・頻度・滞在時間の3軸を 0-1 に正規化し平均する。
毎回ゼロから再計算する（増分更新しない）。
"""

from dataclasses import dataclass
from datetime import datetime

from ..models.session import GuestSession

# 満点となる基準値
FULL_SCORE_MESSAGE_LENGTH = 50      # 平均50文字
FULL_SCORE_MESSAGES_PER_MINUTE = 2  # 毎分2通
FULL_SCORE_SECONDS = 300            # 5分


@dataclass(frozen=True)
class EngagementBreakdown:
    """スコアの内訳"""
    avg_message_length: float
    message_frequency: float
    length_score: float
    frequency_score: float
    persistence_score: float

    @property
    def score(self) -> float:
        return (self.length_score + self.frequency_score + self.persistence_score) / 3


def engagement_breakdown(session: GuestSession, now: datetime) -> EngagementBreakdown | None:
    """内訳を計算（ユーザー発言がなければNone）"""
    user_messages = session.user_messages
    if not user_messages:
        return None

    time_spent = session.elapsed_seconds(now)
    avg_message_length = sum(len(m.content) for m in user_messages) / len(user_messages)
    message_frequency = len(user_messages) / max(time_spent / 60, 1)

    return EngagementBreakdown(
        avg_message_length=avg_message_length,
        message_frequency=message_frequency,
        length_score=_clamp(avg_message_length / FULL_SCORE_MESSAGE_LENGTH),
        frequency_score=_clamp(message_frequency / FULL_SCORE_MESSAGES_PER_MINUTE),
        persistence_score=_clamp(time_spent / FULL_SCORE_SECONDS),
    )


def calculate_engagement_score(session: GuestSession, now: datetime) -> float:
    """エンゲージメントスコア (0.0-1.0)"""
    breakdown = engagement_breakdown(session, now)
    if breakdown is None:
        return 0.0
    return breakdown.score


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))
