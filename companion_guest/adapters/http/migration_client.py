"""
移行APIクライアント
ゲストセッションの移行ペイロードを外部エンドポイントへPOSTする
"""

from typing import Any

import httpx

from ...core.exceptions import MigrationError
from ...core.logging import get_logger
from ...domain.ports.migration_port import IMigrationGateway

logger = get_logger(__name__)


class HttpMigrationGateway(IMigrationGateway):
    """
    HTTP移行ゲートウェイ

    2xx 以外のステータスと通信エラーはすべて MigrationError。
    エラー本文は解釈しない。リトライしない。
    """

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.headers = headers or {}
        self._transport = transport

    async def migrate(self, payload: dict[str, Any]) -> None:
        logger.info(f"Sending migration request to {self.endpoint_url}")
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint_url,
                    json=payload,
                    headers=self.headers,
                )
        except httpx.HTTPError as e:
            raise MigrationError(f"Migration request failed: {e}") from e

        if not response.is_success:
            raise MigrationError(
                f"Migration endpoint returned {response.status_code}",
                status_code=response.status_code,
            )
