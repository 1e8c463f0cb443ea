"""
アカウントファイルストア
移行されたコンパニオン・チャット履歴・移行記録をJSONファイルに保存
"""

import asyncio
import json
import uuid
from pathlib import Path
from typing import Any

from ...core.exceptions import StorageError
from ...core.logging import get_logger
from ...domain.ports.account_port import IAccountStore

logger = get_logger(__name__)

_TABLES = ("companions", "chat_messages", "guest_migrations")


class FileAccountStore(IAccountStore):
    """
    ファイルアカウントストア

    3つのテーブル相当のリストを1つのJSONファイルで管理する。
    書き込みはロックで直列化し、アトミックに置換する。
    """

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)
        self.data_file = self.data_dir / "accounts.json"

        self._tables: dict[str, list[dict[str, Any]]] = {name: [] for name in _TABLES}
        self._loaded = False
        self._lock = asyncio.Lock()

    async def _ensure_loaded(self) -> None:
        """データが読み込まれていることを保証"""
        if self._loaded:
            return
        if self.data_file.exists():
            try:
                loop = asyncio.get_running_loop()
                data = await loop.run_in_executor(None, self._read_json_file)
            except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
                raise StorageError(f"Failed to load {self.data_file}: {e}", operation="load") from e
            for name in _TABLES:
                self._tables[name] = list(data.get(name, []))
        self._loaded = True

    def _read_json_file(self) -> dict:
        with open(self.data_file, encoding="utf-8") as f:
            return json.load(f)

    def _write_json_file(self, path: Path, data: dict) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, separators=(",", ":"))

    async def _save(self, tables: dict[str, list[dict[str, Any]]], operation: str) -> None:
        """テーブルを書き込み、成功した場合のみメモリ上のテーブルを置き換える"""
        temp_file = self.data_file.with_suffix(".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._write_json_file, temp_file, tables)
            temp_file.replace(self.data_file)
        except OSError as e:
            raise StorageError(f"Failed to write {self.data_file}: {e}", operation=operation) from e
        self._tables = tables

    def _with_rows(self, name: str, rows: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
        return {**self._tables, name: [*self._tables[name], *rows]}

    async def create_companion(self, record: dict[str, Any]) -> dict[str, Any]:
        async with self._lock:
            await self._ensure_loaded()
            companion = {"id": str(uuid.uuid4()), **record}
            await self._save(self._with_rows("companions", [companion]), "create_companion")
        logger.info(f"Companion created: {companion['id']}")
        return companion

    async def insert_chat_messages(self, messages: list[dict[str, Any]]) -> int:
        async with self._lock:
            await self._ensure_loaded()
            rows = [{"id": str(uuid.uuid4()), **m} for m in messages]
            await self._save(self._with_rows("chat_messages", rows), "insert_chat_messages")
        return len(rows)

    async def record_migration(self, record: dict[str, Any]) -> None:
        async with self._lock:
            await self._ensure_loaded()
            await self._save(self._with_rows("guest_migrations", [dict(record)]), "record_migration")

    async def list_companions(self, user_id: str) -> list[dict[str, Any]]:
        await self._ensure_loaded()
        return [c for c in self._tables["companions"] if c.get("user_id") == user_id]

    async def list_chat_messages(self, companion_id: str) -> list[dict[str, Any]]:
        """コンパニオンのチャット履歴を取得"""
        await self._ensure_loaded()
        return [m for m in self._tables["chat_messages"] if m.get("companion_id") == companion_id]

    async def list_migrations(self, user_id: str) -> list[dict[str, Any]]:
        """ユーザーの移行記録を取得"""
        await self._ensure_loaded()
        return [r for r in self._tables["guest_migrations"] if r.get("user_id") == user_id]
