"""
アカウントストアポート
移行エンドポイント側でコンパニオン・チャット履歴・移行記録を保存するインターフェース
"""

from abc import ABC, abstractmethod
from typing import Any


class IAccountStore(ABC):
    """
    アカウントストアインターフェース

    実装はファイル、PostgreSQL等で切り替え可能。
    失敗時は StorageError を送出する。
    """

    @abstractmethod
    async def create_companion(self, record: dict[str, Any]) -> dict[str, Any]:
        """
        コンパニオンを作成

        Args:
            record: コンパニオンレコード（id は未設定）

        Returns:
            dict: id を付与した保存済みレコード
        """

    @abstractmethod
    async def insert_chat_messages(self, messages: list[dict[str, Any]]) -> int:
        """
        チャットメッセージを一括保存

        Returns:
            int: 保存件数
        """

    @abstractmethod
    async def record_migration(self, record: dict[str, Any]) -> None:
        """移行統計を記録"""

    @abstractmethod
    async def list_companions(self, user_id: str) -> list[dict[str, Any]]:
        """ユーザーのコンパニオン一覧を取得"""

    @abstractmethod
    async def list_chat_messages(self, companion_id: str) -> list[dict[str, Any]]:
        """コンパニオンのチャット履歴を取得"""

    @abstractmethod
    async def list_migrations(self, user_id: str) -> list[dict[str, Any]]:
        """ユーザーの移行記録を取得"""
