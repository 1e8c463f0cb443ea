"""
Domain Services
ビジネスロジックサービス
"""

from .guest_session import GuestSessionManager
from .migration import AccountMigrationService
from .replies import CannedReplyGenerator

__all__ = [
    "GuestSessionManager",
    "AccountMigrationService",
    "CannedReplyGenerator",
]
