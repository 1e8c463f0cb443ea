"""
設定・例外・ログのテスト
"""

import json
import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from companion_guest.core.config import SessionSettings, get_settings, reload_settings
from companion_guest.core.exceptions import MigrationError, StorageError, ValidationError
from companion_guest.core.logging import StructuredFormatter, get_logger


@pytest.fixture
def fresh_settings():
    """テスト後にキャッシュされた設定を戻す"""
    yield
    reload_settings()


class TestSettings:

    def test_defaults(self, fresh_settings):
        settings = reload_settings()
        assert settings.session.storage_key == "ai_companion_guest_session"
        assert settings.session.ttl_seconds == 24 * 3600
        assert settings.migration.endpoint_url.endswith("/api/guest/migrate")

    def test_environment_overrides(self, fresh_settings, monkeypatch):
        monkeypatch.setenv("GUEST_TTL_HOURS", "2")
        monkeypatch.setenv("MIGRATION_TIMEOUT", "3.5")
        monkeypatch.setenv("COMPANION_GUEST_DATA_DIR", "/tmp/guest-data")

        settings = reload_settings()

        assert settings.session.ttl_seconds == 7200
        assert settings.migration.timeout == 3.5
        assert settings.data_dir == "/tmp/guest-data"

    def test_settings_are_cached(self, fresh_settings):
        assert get_settings() is get_settings()

    def test_ttl_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("GUEST_TTL_HOURS", "0")
        with pytest.raises(PydanticValidationError):
            SessionSettings()


class TestExceptions:

    def test_error_code_defaults_to_class_name(self):
        error = StorageError("quota exceeded", key="k", operation="set")
        assert error.error_code == "StorageError"
        assert error.details == {"key": "k", "operation": "set"}

    def test_migration_error_status(self):
        assert MigrationError("failed", status_code=502).details == {"status_code": 502}

    def test_validation_error_field(self):
        assert ValidationError("empty", field="content").details == {"field": "content"}


class TestStructuredLogging:

    def test_extra_fields_are_included(self):
        record = logging.LogRecord("companion_guest.test", logging.INFO, __file__, 10,
                                   "Business event: %s", ("created",), None)
        record.session_id = "s1"

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["message"] == "Business event: created"
        assert entry["extra"]["session_id"] == "s1"

    def test_exception_details_are_included(self):
        error = StorageError("quota exceeded", operation="set")
        record = logging.LogRecord("companion_guest.test", logging.ERROR, __file__, 10,
                                   "failed", (), (type(error), error, None))

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["exception"]["type"] == "StorageError"
        assert entry["exception"]["error_code"] == "StorageError"
        assert entry["exception"]["details"] == {"operation": "set"}

    def test_logger_names_are_namespaced(self):
        assert get_logger("api.main").name == "companion_guest.api.main"
        assert get_logger("companion_guest.cli").name == "companion_guest.cli"
