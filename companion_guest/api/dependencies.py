"""
API Dependencies
依存性注入の設定
"""

from typing import Optional

from fastapi import Depends

from ..adapters.storage.account_file import FileAccountStore
from ..core.config import get_settings
from ..domain.ports.account_port import IAccountStore
from ..domain.services.migration import AccountMigrationService

_account_store: Optional[IAccountStore] = None


def get_account_store() -> IAccountStore:
    """アカウントストアを取得"""
    global _account_store
    if _account_store is None:
        _account_store = FileAccountStore(data_dir=get_settings().data_dir)
    return _account_store


def reset_dependencies() -> None:
    """シングルトンをリセット（テスト用）"""
    global _account_store
    _account_store = None


def get_migration_service(
    account_store: IAccountStore = Depends(get_account_store),
) -> AccountMigrationService:
    """アカウント移行サービスを取得"""
    return AccountMigrationService(account_store)
