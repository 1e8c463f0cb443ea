"""
アカウント移行サービス（エンドポイント側）

ゲスト体験のコンパニオンと会話履歴を正式アカウントへ書き込む。
1. コンパニオン作成（失敗したら全体失敗）
2. 会話履歴の保存（失敗はログのみ）
3. 移行統計の記録（失敗はログのみ）
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ...core.exceptions import StorageError
from ...core.logging import get_logger, log_business_event, log_error
from ..models.companion import TempCompanion
from ..models.message import GuestMessage
from ..ports.account_port import IAccountStore

logger = get_logger(__name__)

MIGRATION_SUCCESS_MESSAGE = "数据迁移成功！欢迎加入AI伴侣平台！"


@dataclass
class MigrationRequest:
    """移行リクエスト"""
    user_id: str
    temporary_companion: TempCompanion
    conversation_history: list[GuestMessage]
    session_stats: dict[str, Any] = field(default_factory=dict)
    session_id: str | None = None


@dataclass
class MigrationResult:
    """移行結果"""
    companion: dict[str, Any]
    migrated_messages: int
    messages_saved: bool
    message: str = MIGRATION_SUCCESS_MESSAGE


class AccountMigrationService:
    """アカウント移行サービス"""

    def __init__(self, account_store: IAccountStore, clock=datetime.now):
        self.account_store = account_store
        self._clock = clock

    async def migrate(self, request: MigrationRequest) -> MigrationResult:
        """
        移行を実行

        Raises:
            StorageError: コンパニオンの作成に失敗した場合
        """
        companion = await self.account_store.create_companion(
            self._build_companion_record(request)
        )

        messages_saved = True
        try:
            await self.account_store.insert_chat_messages([
                {
                    "user_id": request.user_id,
                    "companion_id": companion["id"],
                    "sender_type": message.sender.value,
                    "content": message.content,
                    "message_type": "text",
                    "created_at": message.timestamp.isoformat(),
                }
                for message in request.conversation_history
            ])
        except StorageError as e:
            messages_saved = False
            log_error(logger, e, {"operation": "insert_chat_messages", "user_id": request.user_id})

        try:
            await self.account_store.record_migration({
                "user_id": request.user_id,
                "companion_id": companion["id"],
                "original_session_id": request.session_id or "unknown",
                "messages_migrated": len(request.conversation_history),
                "session_duration": request.session_stats.get("timeSpent", 0),
                "engagement_score": request.session_stats.get("engagementScore", 0),
                "migrated_at": self._clock().isoformat(),
            })
        except StorageError as e:
            log_error(logger, e, {"operation": "record_migration", "user_id": request.user_id})

        log_business_event(
            logger, "guest_account_migrated",
            session_id=request.session_id,
            user_id=request.user_id,
            companion_id=companion["id"],
        )
        return MigrationResult(
            companion=companion,
            migrated_messages=len(request.conversation_history),
            messages_saved=messages_saved,
        )

    def _build_companion_record(self, request: MigrationRequest) -> dict[str, Any]:
        temp = request.temporary_companion
        now = self._clock().isoformat()
        return {
            "user_id": request.user_id,
            "name": temp.name,
            "companion_type": temp.personality.value,
            "background": temp.backstory,
            "is_public": False,
            "intimacy_level": 1,
            "intimacy_points": max(1, request.session_stats.get("messageCount") or 0),
            "appearance_config": {
                "avatar": temp.avatar,
                "style": temp.personality.value,
            },
            "personality_config": {
                "type": temp.personality.value,
                "traits": list(temp.traits),
                "greeting": temp.greeting,
            },
            "created_at": now,
            "updated_at": now,
        }
