from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite+pysqlite:///./biohost.db"
    DB_POOL_SIZE: int = 5

    # Targeting
    TIMEZONE: str = "UTC"
    TRUST_CDN_HEADERS: bool = True
    EXTRA_COUNTRY_HEADERS: list[str] = []

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Environment
    ENVIRONMENT: str = "dev"


@lru_cache
def get_settings() -> Settings:
    return Settings()
