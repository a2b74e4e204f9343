from pathlib import Path
from typing import List, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Reading Room Manager'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Logging
    SERVICE_NAME: str = 'reading-room-service'
    DEPLOY_ENV: str = 'local_dev'
    LOG_DIR: Path = _PROJECT_ROOT / 'logs'
    LOG_TIMEZONE: str = 'Asia/Kolkata'

    # Tracing, spans are exported only when an endpoint is set
    OTEL_EXPORTER_OTLP_ENDPOINT: str | None = None
    OTEL_CONSOLE_EXPORT: bool = False

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    AUTH_COOKIE_NAME: str = 'reading_room_auth'
    AUTH_COOKIE_SECURE: bool = False
    BCRYPT_ROUNDS: int = 12

    # Seeded on startup when the user table is empty
    INITIAL_ADMIN_EMAIL: str = 'admin@example.com'
    INITIAL_ADMIN_PASSWORD: SecretStr = SecretStr('admin123')
    INITIAL_ADMIN_NAME: str = 'Administrator'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'reading_room'

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_ECHO: bool = False

    # Waiting list
    # 'location': a freed seat goes to the earliest entry queued for its location
    #             (or queued without a location)
    # 'global':   a freed seat goes to the earliest entry regardless of location
    WAITING_LIST_DISPATCH_SCOPE: Literal['location', 'global'] = 'location'
    # Off: a handed-over seat gets a bare occupancy (member only, no billing record).
    # On: entries carrying a duration and an amount become a Subscription and Payment.
    WAITING_LIST_CREATES_SUBSCRIPTION: bool = False

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )


settings = Settings()  # type: ignore
