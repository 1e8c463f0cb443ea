"""
API Routes
エンドポイント定義
"""

from .guest import router as guest_router

__all__ = [
    "guest_router",
]
