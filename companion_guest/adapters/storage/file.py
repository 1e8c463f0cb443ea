"""
ファイルストレージアダプター
JSONファイル1つにキーと値をまとめて保存するキーバリューストア
"""

import json
from pathlib import Path

from ...core.exceptions import StorageError
from ...core.logging import get_logger
from ...domain.ports.kv_storage_port import IKeyValueStorage

logger = get_logger(__name__)


class FileKeyValueStorage(IKeyValueStorage):
    """
    ファイルキーバリューストア

    毎回ファイルを読み直す（複数プロセスからの利用は後勝ち）。
    書き込みは一時ファイル経由でアトミックに置換する。
    """

    def __init__(self, data_dir: str = "data", filename: str = "guest_storage.json"):
        self.data_dir = Path(data_dir)
        self.data_file = self.data_dir / filename

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data, key=key, operation="set")

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data, key=key, operation="delete")

    def _read(self) -> dict[str, str]:
        if not self.data_file.exists():
            return {}

        try:
            with open(self.data_file, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            # ファイル自体が壊れている場合は空として扱い、次の書き込みで置き換える
            logger.error(f"データ読み込みエラー: {e}")
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read {self.data_file}: {e}", operation="read") from e

        if not isinstance(data, dict):
            logger.error(f"データ形式エラー: {self.data_file}")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str], key: str, operation: str) -> None:
        temp_file = self.data_file.with_suffix(".tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, separators=(",", ":"))
            temp_file.replace(self.data_file)
        except OSError as e:
            raise StorageError(
                f"Failed to write {self.data_file}: {e}", key=key, operation=operation
            ) from e
