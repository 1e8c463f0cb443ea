"""
ゲストセッションマネージャー

端末ごとに1つの匿名体験セッションのライフサイクルを管理する。
- 作成: ランダムなプリセットコンパニオンと挨拶メッセージで開始
- 追記: ユーザー発言ごとにスコア再計算とトリガー評価
- 期限: 開始から TTL (24時間) を超えたものは読み込み時に破棄
- 移行: 正式アカウントへの移行成功時のみローカルを削除
"""

import json
import math
import random
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from ...core.exceptions import ConfigurationError, MigrationError, StorageError, ValidationError
from ...core.logging import get_logger, log_business_event, log_error
from ..models.companion import TEMP_COMPANION_TEMPLATES
from ..models.message import GuestMessage, Sender
from ..models.session import GuestSession, SessionStats
from ..models.trigger import initial_trigger_states
from ..ports.kv_storage_port import IKeyValueStorage
from ..ports.migration_port import IMigrationGateway
from . import conversion
from .engagement import calculate_engagement_score

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "ai_companion_guest_session"
DEFAULT_SESSION_TTL = timedelta(hours=24)


def _round_half_up(value: float) -> int:
    """0.5 は切り上げる（round() の偶数丸めは使わない）"""
    return math.floor(value + 0.5)


class GuestSessionManager:
    """
    ゲストセッションマネージャー

    保存先・移行先・時計は注入する。
    読み込みは毎回ストレージから行い、鮮度をキャッシュしない。
    """

    def __init__(
        self,
        storage: IKeyValueStorage,
        migration_gateway: IMigrationGateway | None = None,
        clock: Callable[[], datetime] = datetime.now,
        rng: random.Random | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
    ):
        self.storage = storage
        self.migration_gateway = migration_gateway
        self.storage_key = storage_key
        self.session_ttl = session_ttl
        self._clock = clock
        self._rng = rng or random.Random()

    # === ライフサイクル ===

    def create_session(self) -> GuestSession:
        """
        新しいセッションを作成して保存（既存セッションは無条件で上書き）

        Raises:
            StorageError: 保存に失敗した場合
        """
        companion = self._rng.choice(TEMP_COMPANION_TEMPLATES)
        now = self._clock()

        session = GuestSession(
            session_id=str(uuid.uuid4()),
            temporary_companion=companion,
            conversation_history=[
                GuestMessage(
                    id=str(uuid.uuid4()),
                    content=companion.greeting,
                    sender=Sender.COMPANION,
                    timestamp=now,
                )
            ],
            experience_start_time=now,
            message_count=0,
            engagement_score=0.0,
            trigger_states=initial_trigger_states(),
        )

        self.save_session(session)
        log_business_event(
            logger, "guest_session_created",
            session_id=session.session_id,
            companion_id=companion.id,
        )
        return session

    def get_current_session(self) -> GuestSession | None:
        """
        現在のセッションを取得

        存在しない・壊れている・期限切れの場合はNone。
        壊れたデータと期限切れのデータは削除する。
        """
        try:
            stored = self.storage.get(self.storage_key)
        except StorageError as e:
            log_error(logger, e, {"operation": "load_guest_session"})
            self._purge_quietly()
            return None

        if not stored:
            return None

        try:
            session = GuestSession.from_dict(json.loads(stored))
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            logger.warning(f"Discarding malformed guest session: {e}")
            self._purge_quietly()
            return None

        if self._is_expired(session):
            log_business_event(logger, "guest_session_expired", session_id=session.session_id)
            self._purge_quietly()
            return None

        return session

    def save_session(self, session: GuestSession) -> None:
        """
        セッション全体を上書き保存

        Raises:
            StorageError: 保存に失敗した場合
        """
        blob = json.dumps(session.to_dict(), ensure_ascii=False)
        self.storage.set(self.storage_key, blob)

    def clear_session(self) -> None:
        """セッションを削除（冪等）"""
        self.storage.delete(self.storage_key)

    # === メッセージ ===

    def add_message(
        self,
        content: str,
        sender: Sender,
        emotion: str | None = None,
    ) -> GuestSession | None:
        """
        メッセージを追加

        Returns:
            Optional[GuestSession]: 更新後のセッション（セッションがなければNone）

        Raises:
            ValidationError: content が空の場合
            StorageError: 保存に失敗した場合
        """
        if not content or not content.strip():
            raise ValidationError("Message content must not be empty", field="content")

        session = self.get_current_session()
        if session is None:
            return None

        now = self._clock()
        session.conversation_history.append(
            GuestMessage(
                id=str(uuid.uuid4()),
                content=content,
                sender=sender,
                timestamp=now,
                emotion=emotion,
            )
        )

        if sender is Sender.USER:
            session.message_count += 1
            session.engagement_score = calculate_engagement_score(session, now)
            self._advance_triggers(session, now)

        self.save_session(session)
        return session

    def _advance_triggers(self, session: GuestSession, now: datetime) -> None:
        snapshot = conversion.TriggerSnapshot.of(session, now)
        for trigger_type in conversion.evaluate_triggers(session, snapshot):
            session.fire(trigger_type)
            log_business_event(
                logger, "conversion_trigger_fired",
                session_id=session.session_id,
                trigger_type=trigger_type.value,
            )

    # === 表示用（純粋関数） ===

    def get_next_conversion_prompt(self, session: GuestSession) -> str | None:
        return conversion.get_next_conversion_prompt(session)

    def should_show_conversion_prompt(self, session: GuestSession) -> bool:
        return conversion.should_show_conversion_prompt(session)

    def get_session_stats(self, session: GuestSession) -> SessionStats:
        """セッション統計"""
        return SessionStats(
            time_spent=_round_half_up(session.elapsed_seconds(self._clock())),
            message_count=session.message_count,
            engagement_score=_round_half_up(session.engagement_score * 100),
            companion_name=session.temporary_companion.name,
            conversation_length=len(session.conversation_history),
        )

    # === 移行 ===

    def build_migration_payload(self, session: GuestSession, user_id: str) -> dict[str, Any]:
        """移行エンドポイントへ送るペイロード"""
        return {
            "userId": user_id,
            "sessionId": session.session_id,
            "temporaryCompanion": session.temporary_companion.to_dict(),
            "conversationHistory": [m.to_dict() for m in session.conversation_history],
            "sessionStats": self.get_session_stats(session).to_dict(),
        }

    async def migrate_to_account(self, user_id: str) -> bool:
        """
        セッションを正式アカウントへ移行

        成功時のみローカルのセッションを削除する。
        失敗時はセッションを残したまま False を返す（リトライは呼び出し側の責務）。

        Raises:
            ConfigurationError: 移行ゲートウェイが未設定の場合
        """
        if self.migration_gateway is None:
            raise ConfigurationError("Migration gateway is not configured")

        session = self.get_current_session()
        if session is None:
            return False

        payload = self.build_migration_payload(session, user_id)

        try:
            await self.migration_gateway.migrate(payload)
        except MigrationError as e:
            log_error(logger, e, {"session_id": session.session_id, "user_id": user_id})
            return False

        self._purge_quietly()
        log_business_event(
            logger, "guest_session_migrated",
            session_id=session.session_id,
            user_id=user_id,
            messages=len(session.conversation_history),
        )
        return True

    # === 内部 ===

    def _is_expired(self, session: GuestSession) -> bool:
        return self._clock() - session.experience_start_time > self.session_ttl

    def _purge_quietly(self) -> None:
        try:
            self.clear_session()
        except StorageError as e:
            log_error(logger, e, {"operation": "purge_guest_session"})
