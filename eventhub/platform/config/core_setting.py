import json
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import EmailStr, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'EventHub'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'eventhub_auth'
    AUTH_COOKIE_SECURE: bool = False

    # CORS
    # Comma-separated or a JSON list; NoDecode hands the raw string to the validator
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return json.loads(v)
        if isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'eventhub'
    POSTGRES_PASSWORD: SecretStr = SecretStr('eventhub')
    POSTGRES_DB: str = 'eventhub'
    DATABASE_URL: Optional[str] = None  # Full async URL, overrides the POSTGRES_* parts

    # Connection pool (PostgreSQL only)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_ECHO: bool = False

    # SQLite (local development and tests)
    SQLITE_BUSY_TIMEOUT: float = 30.0

    AUTO_CREATE_TABLES: bool = False

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    @property
    def IS_SQLITE(self) -> bool:
        return self.DATABASE_URL_ASYNC.startswith('sqlite')

    # Booking coordinator
    BOOKING_MAX_RETRIES: int = 3
    BOOKING_RETRY_BASE_DELAY: float = 0.05  # seconds, doubled per attempt

    # Pagination
    PUBLIC_EVENTS_PAGE_SIZE: int = 10
    NOTIFICATIONS_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Bootstrap admin account, created at startup when both are set
    # Same address rules as signup, so a typo fails at startup instead of at login
    ADMIN_EMAIL: Optional[EmailStr] = None
    ADMIN_PASSWORD: Optional[SecretStr] = None
    ADMIN_NAME: str = 'Administrator'

    # HTTP server (granian)
    HTTP_HOST: str = '0.0.0.0'  # noqa: S104
    HTTP_PORT: int = 8000
    HTTP_WORKERS: int = 1

    # Observability
    SERVICE_NAME: str = 'eventhub-api'
    DEPLOY_ENV: str = 'local_dev'
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False

    # Logging
    LOG_DIR: Optional[str] = None  # defaults to <project root>/logs
    LOG_TIMEZONE: str = 'UTC'


settings = Settings()  # type: ignore
