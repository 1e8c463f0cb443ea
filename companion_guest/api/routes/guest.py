"""
ゲスト移行エンドポイント
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.exceptions import StorageError
from ...core.logging import get_logger, log_error
from ...domain.services.migration import AccountMigrationService, MigrationRequest
from ..dependencies import get_migration_service
from ..schemas import ErrorResponse, MigrationRequestSchema, MigrationResponseSchema

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/guest",
    tags=["guest"],
)


@router.post(
    "/migrate",
    response_model=MigrationResponseSchema,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def migrate_guest_session(
    request: MigrationRequestSchema,
    service: AccountMigrationService = Depends(get_migration_service),
):
    """
    ゲスト体験のデータを正式アカウントへ移行

    コンパニオンの作成に失敗した場合のみ500を返す。
    チャット履歴・移行記録の保存失敗はログのみ。
    """
    if request.temporary_companion is None or request.conversation_history is None:
        return JSONResponse(status_code=400, content={"error": "缺少必要数据"})

    domain_request = MigrationRequest(
        user_id=request.user_id,
        temporary_companion=request.temporary_companion.to_domain(),
        conversation_history=[m.to_domain() for m in request.conversation_history],
        session_stats=(
            request.session_stats.model_dump(by_alias=True) if request.session_stats else {}
        ),
        session_id=request.session_id,
    )

    try:
        result = await service.migrate(domain_request)
    except StorageError as e:
        log_error(logger, e, {"user_id": request.user_id, "operation": "create_companion"})
        return JSONResponse(status_code=500, content={"error": "创建伴侣失败"})

    return MigrationResponseSchema(
        success=True,
        companion=result.companion,
        migrated_messages=result.migrated_messages,
        message=result.message,
    )
