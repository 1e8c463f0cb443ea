"""
メモリストレージアダプター
プロセス内の dict を使うキーバリューストア（テスト・単一プロセス用）
"""

from ...domain.ports.kv_storage_port import IKeyValueStorage


class InMemoryKeyValueStorage(IKeyValueStorage):
    """メモリキーバリューストア"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data
