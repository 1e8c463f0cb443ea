"""
ストレージアダプターのテスト
"""

import json
import random
from pathlib import Path

import pytest

from companion_guest.adapters.storage.account_file import FileAccountStore
from companion_guest.adapters.storage.file import FileKeyValueStorage
from companion_guest.adapters.storage.memory import InMemoryKeyValueStorage
from companion_guest.core.exceptions import StorageError
from companion_guest.domain.ports.account_port import IAccountStore
from companion_guest.domain.models.message import Sender
from companion_guest.domain.services.guest_session import GuestSessionManager


@pytest.fixture(params=["memory", "file"])
def kv_storage(request, tmp_path):
    """両方の実装で同じ振る舞いを確認する"""
    if request.param == "memory":
        return InMemoryKeyValueStorage()
    return FileKeyValueStorage(data_dir=str(tmp_path / "kv"))


class TestKeyValueStorage:

    def test_get_missing_key(self, kv_storage):
        assert kv_storage.get("missing") is None

    def test_set_and_get(self, kv_storage):
        kv_storage.set("key", "value")
        assert kv_storage.get("key") == "value"

    def test_set_overwrites(self, kv_storage):
        kv_storage.set("key", "old")
        kv_storage.set("key", "new")
        assert kv_storage.get("key") == "new"

    def test_delete_is_idempotent(self, kv_storage):
        kv_storage.set("key", "value")
        kv_storage.delete("key")
        kv_storage.delete("key")
        assert kv_storage.get("key") is None

    def test_keys_are_independent(self, kv_storage):
        kv_storage.set("a", "1")
        kv_storage.set("b", "2")
        kv_storage.delete("a")
        assert kv_storage.get("b") == "2"

    def test_unicode_values(self, kv_storage):
        kv_storage.set("key", "你好呀～💕")
        assert kv_storage.get("key") == "你好呀～💕"


class TestFileKeyValueStorage:

    def test_data_survives_new_instance(self, tmp_path):
        FileKeyValueStorage(data_dir=str(tmp_path)).set("key", "value")
        assert FileKeyValueStorage(data_dir=str(tmp_path)).get("key") == "value"

    def test_no_temp_file_left_behind(self, tmp_path):
        storage = FileKeyValueStorage(data_dir=str(tmp_path))
        storage.set("key", "value")
        assert not (tmp_path / "guest_storage.tmp").exists()
        assert json.loads((tmp_path / "guest_storage.json").read_text(encoding="utf-8")) == {
            "key": "value"
        }

    def test_corrupted_file_reads_as_empty(self, tmp_path):
        (tmp_path / "guest_storage.json").write_text("{broken", encoding="utf-8")
        storage = FileKeyValueStorage(data_dir=str(tmp_path))

        assert storage.get("key") is None
        storage.set("key", "value")
        assert storage.get("key") == "value"

    def test_invalid_utf8_file_reads_as_empty(self, tmp_path):
        (tmp_path / "guest_storage.json").write_bytes(b'{"key": "\xff\xfe"}')
        storage = FileKeyValueStorage(data_dir=str(tmp_path))

        assert storage.get("key") is None
        storage.set("key", "value")
        assert storage.get("key") == "value"

    def test_manager_treats_invalid_utf8_as_no_session(self, tmp_path):
        (tmp_path / "guest_storage.json").write_bytes(b"\xff\xfe\xfd")
        manager = GuestSessionManager(storage=FileKeyValueStorage(data_dir=str(tmp_path)))

        assert manager.get_current_session() is None
        assert manager.create_session() is not None

    def test_unwritable_location_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        storage = FileKeyValueStorage(data_dir=str(blocker / "sub"))

        with pytest.raises(StorageError):
            storage.set("key", "value")

    def test_manager_over_file_storage(self, tmp_path):
        """プロセスをまたいでセッションが引き継がれる"""
        first = GuestSessionManager(
            storage=FileKeyValueStorage(data_dir=str(tmp_path)), rng=random.Random(1)
        )
        session = first.create_session()
        first.add_message("你好", Sender.USER)

        second = GuestSessionManager(storage=FileKeyValueStorage(data_dir=str(tmp_path)))
        loaded = second.get_current_session()

        assert loaded.session_id == session.session_id
        assert loaded.message_count == 1


@pytest.fixture
def account_store(tmp_path):
    return FileAccountStore(data_dir=str(tmp_path))


class TestFileAccountStore:

    @pytest.mark.asyncio
    async def test_create_companion_assigns_id(self, account_store):
        companion = await account_store.create_companion({"user_id": "u1", "name": "小雨"})

        assert companion["id"]
        assert companion["name"] == "小雨"
        assert await account_store.list_companions("u1") == [companion]
        assert await account_store.list_companions("u2") == []

    @pytest.mark.asyncio
    async def test_insert_chat_messages(self, account_store):
        count = await account_store.insert_chat_messages([
            {"companion_id": "c1", "content": "hi"},
            {"companion_id": "c1", "content": "hello"},
            {"companion_id": "c2", "content": "other"},
        ])

        assert count == 3
        messages = await account_store.list_chat_messages("c1")
        assert [m["content"] for m in messages] == ["hi", "hello"]

    @pytest.mark.asyncio
    async def test_record_migration(self, account_store):
        await account_store.record_migration({"user_id": "u1", "messages_migrated": 3})
        assert await account_store.list_migrations("u1") == [
            {"user_id": "u1", "messages_migrated": 3}
        ]

    @pytest.mark.asyncio
    async def test_persisted_to_disk(self, account_store, tmp_path):
        companion = await account_store.create_companion({"user_id": "u1", "name": "小晴"})

        reloaded = FileAccountStore(data_dir=str(tmp_path))
        assert await reloaded.list_companions("u1") == [companion]

        raw = json.loads(Path(tmp_path / "accounts.json").read_text(encoding="utf-8"))
        assert set(raw) == {"companions", "chat_messages", "guest_migrations"}

    @pytest.mark.asyncio
    async def test_corrupted_file_raises_storage_error(self, tmp_path):
        (tmp_path / "accounts.json").write_text("not json", encoding="utf-8")
        store = FileAccountStore(data_dir=str(tmp_path))

        with pytest.raises(StorageError):
            await store.create_companion({"user_id": "u1"})

    @pytest.mark.asyncio
    async def test_failed_write_leaves_no_orphan_rows(self, account_store, tmp_path, monkeypatch):
        """書き込み失敗した行は後続の書き込みで保存されない"""
        original_write = account_store._write_json_file

        def failing_write(path, data):
            raise OSError("disk full")

        monkeypatch.setattr(account_store, "_write_json_file", failing_write)
        with pytest.raises(StorageError):
            await account_store.create_companion({"user_id": "u1", "name": "x"})
        assert await account_store.list_companions("u1") == []

        monkeypatch.setattr(account_store, "_write_json_file", original_write)
        await account_store.record_migration({"user_id": "u1", "messages_migrated": 1})

        reloaded = FileAccountStore(data_dir=str(tmp_path))
        assert await reloaded.list_companions("u1") == []
        assert len(await reloaded.list_migrations("u1")) == 1

    def test_implements_full_account_port(self, account_store):
        assert isinstance(account_store, IAccountStore)
        assert IAccountStore.__abstractmethods__ == {
            "create_companion", "insert_chat_messages", "record_migration",
            "list_companions", "list_chat_messages", "list_migrations",
        }
