"""
移行ゲートウェイポート
ゲストセッションを正式アカウントへ移す外部エンドポイントのインターフェース
"""

from abc import ABC, abstractmethod
from typing import Any


class IMigrationGateway(ABC):
    """移行ゲートウェイインターフェース"""

    @abstractmethod
    async def migrate(self, payload: dict[str, Any]) -> None:
        """
        移行ペイロードを1回だけ送信する（リトライなし）

        Args:
            payload: userId, temporaryCompanion, conversationHistory, sessionStats

        Raises:
            MigrationError: 成功応答が得られなかった場合
        """
