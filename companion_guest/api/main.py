"""
Companion Guest API - メインアプリケーション
ゲスト体験の移行を受け付けるFastAPI アプリケーション
"""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .routes import guest_router
from .schemas import HealthResponse
from ..core.config import get_settings
from ..core.logging import CompanionGuestLogger, get_logger

CompanionGuestLogger.configure(get_settings().log_level)
logger = get_logger("api.main")

API_VERSION = "1.0.0"


class APIVersionMiddleware(BaseHTTPMiddleware):
    """APIバージョンをレスポンスヘッダーに追加"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-API-Version"] = API_VERSION
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションライフサイクル"""
    settings = get_settings()
    logger.info(f"Companion Guest API v{API_VERSION} starting...")
    logger.info(f"Data dir: {settings.data_dir}")
    yield
    logger.info("Companion Guest API shutting down...")


def create_app() -> FastAPI:
    """FastAPIアプリケーションを作成"""
    application = FastAPI(
        title="Companion Guest API",
        description="AIコンパニオンのゲスト体験データを正式アカウントへ移行するAPI",
        version=API_VERSION,
        lifespan=lifespan,
    )

    application.add_middleware(APIVersionMiddleware)
    application.include_router(guest_router)

    @application.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """ヘルスチェック"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(),
            version=API_VERSION,
        )

    return application


app = create_app()
