"""
Adapters Layer
ポートインターフェースの具体的な実装

注: 依存関係を軽くするため、アダプターは直接インポートを推奨
使用例:
    from companion_guest.adapters.storage.file import FileKeyValueStorage
    from companion_guest.adapters.http.migration_client import HttpMigrationGateway
"""

__all__ = [
    "http",
    "storage",
]
