"""
統一ログシステム
構造化ログによる一貫したログ出力
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from .exceptions import CompanionGuestException

ROOT_LOGGER_NAME = "companion_guest"

_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName',
])


class StructuredFormatter(logging.Formatter):
    """構造化ログフォーマッター"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        # extra= で渡されたカスタム属性
        extra_fields = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        if record.exc_info:
            exc_type, exc_value = record.exc_info[0], record.exc_info[1]
            log_entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
            }
            if isinstance(exc_value, CompanionGuestException):
                log_entry["exception"]["error_code"] = exc_value.error_code
                log_entry["exception"]["details"] = exc_value.details

        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


class CompanionGuestLogger:
    """統一ログシステム"""

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def configure(cls, log_level: str = "INFO"):
        """ログシステムを設定"""
        if cls._configured:
            return

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(console_handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """ログインスタンスを取得"""
        if not cls._configured:
            cls.configure()

        if name not in cls._loggers:
            prefix = f"{ROOT_LOGGER_NAME}."
            logger_name = name if name.startswith(prefix) else f"{prefix}{name}"
            cls._loggers[name] = logging.getLogger(logger_name)

        return cls._loggers[name]


def get_logger(name: str) -> logging.Logger:
    """ロガーを取得"""
    return CompanionGuestLogger.get_logger(name)


def log_error(logger: logging.Logger, error: Exception, context: Optional[Dict[str, Any]] = None):
    """エラーログ"""
    extra_info = {"event_type": "error"}
    if context:
        extra_info.update(context)

    logger.error(f"Error occurred: {str(error)}", exc_info=error, extra=extra_info)


def log_business_event(logger: logging.Logger, event: str, session_id: Optional[str] = None,
                       **kwargs):
    """ビジネスイベントログ"""
    extra_info: Dict[str, Any] = {
        "event_type": "business_event",
        "business_event": event,
    }
    if session_id:
        extra_info["session_id"] = session_id
    extra_info.update(kwargs)

    logger.info(f"Business event: {event}", extra=extra_info)
