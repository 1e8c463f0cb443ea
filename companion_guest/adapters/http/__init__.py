"""
HTTP Adapters
外部HTTPエンドポイントのクライアント
"""

from .migration_client import HttpMigrationGateway

__all__ = [
    "HttpMigrationGateway",
]
