"""
Domain Ports
依存性逆転のためのインターフェース定義
"""

from .account_port import IAccountStore
from .kv_storage_port import IKeyValueStorage
from .migration_port import IMigrationGateway

__all__ = [
    "IKeyValueStorage",
    "IMigrationGateway",
    "IAccountStore",
]
