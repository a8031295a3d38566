from pathlib import Path
from typing import List, Literal

from pydantic import field_validator
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

    PROJECT_NAME: str = 'Restaurant Reservation System'
    VERSION: str = '1.0.0'
    DEBUG: bool = True  # Set to False in production
    SERVICE_NAME: str = 'restaurant-reservation'
    LOG_DIR: Path = _PROJECT_ROOT / 'logs'  # rotated hourly files, DEBUG only

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Database
    DATABASE_URL: str = 'sqlite+aiosqlite:///./restaurant_reservation.db'
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True

    # Restaurant business rules
    RESTAURANT_TIMEZONE: str = 'America/Sao_Paulo'
    RESERVATION_LEAD_TIME_MINUTES: int = 60
    SEED_SAMPLE_TABLES: bool = True

    # Table lock (guards availability check + write per table)
    TABLE_LOCK_BACKEND: Literal['memory', 'redis'] = 'memory'
    TABLE_LOCK_TIMEOUT_SECONDS: float = 5.0
    TABLE_LOCK_TTL_SECONDS: int = 10  # Redis lock expiry, must exceed one unit of work
    TABLE_LOCK_RETRY_INTERVAL_SECONDS: float = 0.05
    REDIS_URL: str = 'redis://localhost:6379/0'

    # Notifications
    NOTIFICATION_BACKEND: Literal['mock', 'http'] = 'mock'
    EMAIL_API_BASE_URL: str = 'https://api.emailservice.com'
    SMS_API_BASE_URL: str = 'https://api.smsservice.com'
    NOTIFICATION_TIMEOUT_SECONDS: float = 5.0


settings = Settings()  # type: ignore
