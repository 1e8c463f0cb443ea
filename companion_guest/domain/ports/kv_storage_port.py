"""
キーバリューストレージポート
ゲストセッションの保存先（ブラウザの localStorage 相当）のインターフェース
"""

from abc import ABC, abstractmethod


class IKeyValueStorage(ABC):
    """
    キーバリューストレージインターフェース

    値は文字列。実装はメモリ、ファイル等で切り替え可能。
    失敗時は StorageError を送出する。
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """
        値を取得

        Args:
            key: キー

        Returns:
            Optional[str]: 値（存在しない場合None）
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        値を保存（上書き）

        Args:
            key: キー
            value: 値
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        値を削除（存在しなくてもエラーにしない）

        Args:
            key: キー
        """
