from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """環境変数から設定を読み込む。"""

    api_key: str | None = Field(default=None, description="カスタムドメインへ送るBearerトークン")
    whitelisted_domains: str | None = Field(
        default=None,
        description="許可するカスタムドメイン（カンマ区切り、例: acme.com,files.example.jp）",
    )
    trusted_default_domain: str = Field(
        default="cdn.bubble.io",
        description="常に許可するプラットフォームCDN。認証ヘッダは送らない",
    )
    probe_timeout: float = Field(default=10.0, description="HEADプローブ1回あたりのタイムアウト秒")
    action_api_key: str | None = None
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=["../.env", ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
