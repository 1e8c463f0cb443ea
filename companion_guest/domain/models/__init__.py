"""
Domain Models
ゲスト体験のドメインモデル
"""

from .companion import (
    TEMP_COMPANION_TEMPLATES,
    Personality,
    TempCompanion,
)
from .message import (
    GuestMessage,
    Sender,
)
from .session import (
    GuestSession,
    SessionStats,
)
from .trigger import (
    CONVERSION_TRIGGER_CATALOG,
    ConversionTrigger,
    TriggerDefinition,
    TriggerState,
    TriggerType,
)

__all__ = [
    # コンパニオン
    "Personality",
    "TempCompanion",
    "TEMP_COMPANION_TEMPLATES",
    # メッセージ
    "Sender",
    "GuestMessage",
    # トリガー
    "TriggerType",
    "TriggerState",
    "TriggerDefinition",
    "ConversionTrigger",
    "CONVERSION_TRIGGER_CATALOG",
    # セッション
    "GuestSession",
    "SessionStats",
]
