"""
カスタム例外クラス
階層的な例外処理によるエラーハンドリングの統一
"""

from typing import Any


class CompanionGuestException(Exception):
    """アプリケーションのベース例外クラス"""

    def __init__(self, message: str, error_code: str | None = None,
                 details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(CompanionGuestException):
    """設定関連のエラー"""


class ValidationError(CompanionGuestException):
    """バリデーションエラー"""

    def __init__(self, message: str, field: str | None = None,
                 value: Any | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = value


class StorageError(CompanionGuestException):
    """永続化（読み書き・削除）の失敗"""

    def __init__(self, message: str, key: str | None = None,
                 operation: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if key:
            self.details['key'] = key
        if operation:
            self.details['operation'] = operation


class MigrationError(CompanionGuestException):
    """アカウント移行（外部エンドポイント呼び出し）の失敗"""

    def __init__(self, message: str, status_code: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        if status_code:
            self.details['status_code'] = status_code
