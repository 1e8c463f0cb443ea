"""
コンバージョントリガーモデル

トリガー定義（不変カタログ）とセッションごとの発火状態を分離して持つ。
"""

from dataclasses import dataclass
from enum import Enum


class TriggerType(Enum):
    """トリガー種別"""
    MESSAGE_COUNT = "message_count"       # ユーザー発言数
    ENGAGEMENT_HIGH = "engagement_high"   # エンゲージメントスコア
    TIME_SPENT = "time_spent"             # 滞在時間(秒)


class TriggerState(Enum):
    """発火状態（PENDING → FIRED の一方向のみ）"""
    PENDING = "pending"
    FIRED = "fired"


@dataclass(frozen=True)
class TriggerDefinition:
    """トリガー定義"""
    type: TriggerType
    threshold: float
    message: str


@dataclass(frozen=True)
class ConversionTrigger:
    """セッション内のトリガーのスナップショット"""
    type: TriggerType
    threshold: float
    triggered: bool
    message: str


CONVERSION_TRIGGER_CATALOG: tuple[TriggerDefinition, ...] = (
    TriggerDefinition(
        type=TriggerType.MESSAGE_COUNT,
        threshold=3,
        message="我们聊得很开心呢！想要创建专属于你的AI伴侣吗？这样我们就能有更深入的交流了～",
    ),
    TriggerDefinition(
        type=TriggerType.ENGAGEMENT_HIGH,
        threshold=0.8,
        message="感觉你很喜欢和我聊天！注册后我们可以解锁更多有趣的功能哦～",
    ),
    TriggerDefinition(
        type=TriggerType.TIME_SPENT,
        threshold=300,  # 5分
        message="时间过得真快！注册一个账户，我们就能保存这些美好的对话回忆了💕",
    ),
)


def initial_trigger_states() -> dict[TriggerType, TriggerState]:
    """新規セッション用の発火状態（すべてPENDING）"""
    return {definition.type: TriggerState.PENDING for definition in CONVERSION_TRIGGER_CATALOG}
