"""
統合設定管理

pydantic-settings を使用した型安全な設定管理
- 環境変数 / .env から自動読み込み
- バリデーション付き
"""

from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionSettings(BaseSettings):
    """ゲストセッション設定"""

    model_config = SettingsConfigDict(env_prefix="GUEST_")

    storage_key: str = Field(
        default="ai_companion_guest_session", description="セッション保存キー"
    )
    ttl_hours: float = Field(default=24.0, description="セッション有効期間(時間)")

    @field_validator("ttl_hours")
    @classmethod
    def validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("ttl_hours must be positive")
        return v

    @property
    def ttl_seconds(self) -> float:
        return self.ttl_hours * 3600


class MigrationSettings(BaseSettings):
    """アカウント移行エンドポイント設定"""

    model_config = SettingsConfigDict(env_prefix="MIGRATION_")

    endpoint_url: str = Field(
        default="http://127.0.0.1:8000/api/guest/migrate",
        description="移行APIのURL",
    )
    timeout: float = Field(default=10.0, description="リクエストタイムアウト(秒)")


class CompanionGuestSettings(BaseSettings):
    """全体設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: str = Field(
        default="data", alias="COMPANION_GUEST_DATA_DIR", description="データ保存ディレクトリ"
    )
    debug: bool = Field(default=False, alias="COMPANION_GUEST_DEBUG", description="デバッグモード")
    log_level: str = Field(
        default="INFO", alias="COMPANION_GUEST_LOG_LEVEL", description="ログレベル"
    )

    # サブ設定
    session: SessionSettings = Field(default_factory=SessionSettings)
    migration: MigrationSettings = Field(default_factory=MigrationSettings)

    # API サーバー設定
    api_host: str = Field(default="127.0.0.1", alias="API_HOST", description="API サーバーホスト")
    api_port: int = Field(default=8000, alias="API_PORT", description="API サーバーポート")

    @classmethod
    def load(cls) -> "CompanionGuestSettings":
        """設定をロード（サブ設定も含む）"""
        return cls(
            session=SessionSettings(),
            migration=MigrationSettings(),
        )


@lru_cache()
def get_settings() -> CompanionGuestSettings:
    """
    設定を取得（キャッシュ付き）

    使用例:
        settings = get_settings()
        print(settings.session.ttl_hours)
        print(settings.migration.endpoint_url)
    """
    return CompanionGuestSettings.load()


def reload_settings() -> CompanionGuestSettings:
    """設定を再読み込み"""
    get_settings.cache_clear()
    return get_settings()
