from pathlib import Path
from typing import List

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

    PROJECT_NAME: str = 'Event Ticketing Core'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_COOKIE_NAME: str = 'access_token'

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
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'event_ticketing'
    POSTGRES_PORT: str = '5432'

    # SQLAlchemy pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a free connection
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Reservations
    RESERVATION_TTL_MINUTES: int = 15
    RESERVATION_MAX_RETRIES: int = 3  # optimistic retries before surfacing contention
    STORE_TIMEOUT_SECONDS: float = 5.0  # per-transaction deadline

    # Reaper
    REAPER_ENABLED: bool = True
    REAPER_INTERVAL_SECONDS: int = 30
    REAPER_BATCH_SIZE: int = 100

    @field_validator('REAPER_INTERVAL_SECONDS')
    @classmethod
    def validate_reaper_interval(cls, v: int) -> int:
        if not 1 <= v <= 60:
            raise ValueError('REAPER_INTERVAL_SECONDS must be between 1 and 60')
        return v

    # Promo codes and bookings
    PROMO_CODE_VALIDITY_DAYS: int = 30
    PROMO_CODE_MAX_ATTEMPTS: int = 100
    BOOKING_ID_MAX_ATTEMPTS: int = 5


settings = Settings()  # type: ignore
