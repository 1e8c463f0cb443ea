"""
Domain Layer
ゲスト体験のコアロジックとドメインモデル
"""

from __future__ import annotations

from .models import (
    GuestMessage,
    GuestSession,
    Personality,
    Sender,
    SessionStats,
    TempCompanion,
    TriggerType,
)

__all__ = [
    "Personality",
    "TempCompanion",
    "Sender",
    "GuestMessage",
    "TriggerType",
    "GuestSession",
    "SessionStats",
]
