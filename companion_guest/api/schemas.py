"""
API Schemas
Pydanticモデル定義（JSONはcamelCase）
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..domain.models.companion import Personality, TempCompanion
from ..domain.models.message import GuestMessage, Sender


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# === 移行リクエスト ===


class TempCompanionSchema(CamelModel):
    """体験用コンパニオン"""

    id: str
    name: str
    personality: Literal["gentle", "lively", "intellectual"]
    avatar: str
    backstory: str
    traits: list[str] = Field(default_factory=list)
    greeting: str

    def to_domain(self) -> TempCompanion:
        return TempCompanion(
            id=self.id,
            name=self.name,
            personality=Personality(self.personality),
            avatar=self.avatar,
            backstory=self.backstory,
            traits=tuple(self.traits),
            greeting=self.greeting,
        )


class GuestMessageSchema(CamelModel):
    """体験チャットのメッセージ"""

    id: str
    content: str = Field(..., min_length=1)
    sender: Literal["user", "companion"]
    timestamp: datetime
    emotion: str | None = None

    def to_domain(self) -> GuestMessage:
        return GuestMessage(
            id=self.id,
            content=self.content,
            sender=Sender(self.sender),
            timestamp=self.timestamp,
            emotion=self.emotion,
        )


class SessionStatsSchema(CamelModel):
    """セッション統計"""

    time_spent: int = Field(0, alias="timeSpent")
    message_count: int = Field(0, alias="messageCount")
    engagement_score: int = Field(0, alias="engagementScore")
    companion_name: str = Field("", alias="companionName")
    conversation_length: int = Field(0, alias="conversationLength")


class MigrationRequestSchema(CamelModel):
    """移行リクエスト"""

    user_id: str = Field(..., min_length=1, alias="userId", description="移行先アカウントID")
    session_id: str | None = Field(None, alias="sessionId", description="ゲストセッションID")
    temporary_companion: TempCompanionSchema | None = Field(None, alias="temporaryCompanion")
    conversation_history: list[GuestMessageSchema] | None = Field(
        None, alias="conversationHistory"
    )
    session_stats: SessionStatsSchema | None = Field(None, alias="sessionStats")


# === レスポンス ===


class MigrationResponseSchema(CamelModel):
    """移行レスポンス"""

    success: bool
    companion: dict[str, Any]
    migrated_messages: int = Field(..., alias="migratedMessages")
    message: str


class ErrorResponse(BaseModel):
    """エラーレスポンス"""

    error: str


class HealthResponse(BaseModel):
    """ヘルスチェック"""

    status: str
    timestamp: datetime
    version: str
