"""
Storage Adapters
データ永続化の実装
"""

from .account_file import FileAccountStore
from .file import FileKeyValueStorage
from .memory import InMemoryKeyValueStorage

__all__ = [
    "InMemoryKeyValueStorage",
    "FileKeyValueStorage",
    "FileAccountStore",
]
