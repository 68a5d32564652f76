from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # development | production（development 下错误响应附带 details）
    app_env: str = "production"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    # Steam Community 服务端凭据（steamLoginSecure），不是终端用户的 Cookie
    steam_community_token: str = ""
    steam_community_base_url: str = "https://steamcommunity.com"
    steam_inventory_locale: str = "english"
    steam_request_timeout: float = 15.0

    inventory_cache_ttl: int = 300
    inventory_max_page_size: int = 100

    session_cookie_name: str = "steam_session"
    # 会话最长有效期（秒），为空则只看 expires_at
    session_max_age: Optional[int] = None

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in ("dev", "development")


settings = Settings()
