# settings.py
from typing import Optional, Dict, Any, List
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict

from blog_api import __version__


class Settings(BaseSettings):
    # === App ===
    APP_NAME: str = "Blog API"
    APP_VERSION: str = __version__
    LOG_LEVEL: str = "INFO"

    # === Admin auth ===
    ADMIN_API_KEY: str = ""

    # === CORS (comma separated) ===
    CORS_ORIGINS: str = "http://localhost:3000"

    # === DB 연결 정보 ===
    # DATABASE_URL 이 있으면 우선, 없으면 MySQL 파트 조합, 그것도 없으면 sqlite
    DATABASE_URL: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: str = "database"
    DB_INTERNAL_PORT: int = 3306
    MANAGER_DB_NAME: Optional[str] = None
    SQLITE_PATH: str = "./blog.db"

    # === 커넥션 풀/엔진 옵션 ===
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE_SEC: int = 1800
    DB_POOL_PRE_PING: bool = True
    DB_POOL_TIMEOUT_SEC: int = 30
    AUTO_CREATE_TABLES: bool = True

    # === Pagination / content ===
    DEFAULT_POST_PAGE_SIZE: int = 10
    DEFAULT_COMMENT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    EXCERPT_LENGTH: int = 200

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_USER and self.MANAGER_DB_NAME:
            user = quote_plus(self.DB_USER)
            pwd = quote_plus(self.DB_PASSWORD or "")
            return (
                f"mysql+pymysql://{user}:{pwd}@{self.DB_HOST}:{self.DB_INTERNAL_PORT}/{self.MANAGER_DB_NAME}"
                f"?charset=utf8mb4"
            )
        return f"sqlite:///{self.SQLITE_PATH}"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def engine_kwargs(self) -> Dict[str, Any]:
        if self.is_sqlite:
            return {
                "echo": self.DB_ECHO,
                "connect_args": {"check_same_thread": False},
            }
        return {
            "echo": self.DB_ECHO,
            "pool_pre_ping": self.DB_POOL_PRE_PING,
            "pool_size": self.DB_POOL_SIZE,
            "max_overflow": self.DB_MAX_OVERFLOW,
            "pool_recycle": self.DB_POOL_RECYCLE_SEC,
            "pool_timeout": self.DB_POOL_TIMEOUT_SEC,
        }


settings = Settings()
