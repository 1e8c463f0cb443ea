"""
Companion Guest - AIコンパニオンのゲスト体験

登録前の匿名体験セッション:
- 3種類のプリセットコンパニオンからランダムに1人
- エンゲージメントスコアと登録誘導トリガー
- 登録時に会話ごと正式アカウントへ移行
"""

from importlib.metadata import version

__version__: str = version("companion-guest")

# ===== Domain Models =====
from .domain.models import (
    GuestMessage,
    GuestSession,
    Personality,
    Sender,
    SessionStats,
    TempCompanion,
    TriggerType,
)

# ===== Ports (Interfaces) =====
from .domain.ports import (
    IAccountStore,
    IKeyValueStorage,
    IMigrationGateway,
)

# ===== Domain Services =====
from .domain.services import (
    AccountMigrationService,
    CannedReplyGenerator,
    GuestSessionManager,
)


# ===== Adapters (lazy import) =====
def get_file_storage_adapter():
    from .adapters.storage.file import FileKeyValueStorage

    return FileKeyValueStorage


def get_http_migration_gateway():
    from .adapters.http.migration_client import HttpMigrationGateway

    return HttpMigrationGateway


# ===== API (lazy import) =====
def create_app():
    from .api import create_app as _create_app

    return _create_app()


__all__ = [
    # Version
    "__version__",
    # Domain Models
    "Personality",
    "TempCompanion",
    "Sender",
    "GuestMessage",
    "TriggerType",
    "GuestSession",
    "SessionStats",
    # Domain Services
    "GuestSessionManager",
    "AccountMigrationService",
    "CannedReplyGenerator",
    # Ports
    "IKeyValueStorage",
    "IMigrationGateway",
    "IAccountStore",
    # Adapters (lazy)
    "get_file_storage_adapter",
    "get_http_migration_gateway",
    # API (lazy)
    "create_app",
]
