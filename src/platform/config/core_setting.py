from pathlib import Path

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

    PROJECT_NAME: str = 'Cloakroom'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Kvrocks Configuration (Redis protocol + Kvrocks storage)
    KVROCKS_HOST: str = 'localhost'
    KVROCKS_PORT: int = 6666
    KVROCKS_DB: int = 0
    KVROCKS_PASSWORD: str = ''
    REDIS_DECODE_RESPONSES: bool = True  # Lua scripts and hashes are read back as str

    # Kvrocks Connection Pool Configuration
    KVROCKS_POOL_MAX_CONNECTIONS: int = 100  # Max connections in pool
    KVROCKS_POOL_SOCKET_TIMEOUT: int = 10  # Socket read/write timeout (seconds)
    KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT: int = 10  # Connection timeout (seconds)
    KVROCKS_POOL_SOCKET_KEEPALIVE: bool = True  # Enable TCP keepalive
    KVROCKS_POOL_HEALTH_CHECK_INTERVAL: int = 30  # Health check interval (seconds)

    # Event lifetime
    EVENT_DURATION_HOURS: int = 72
    EVENT_ID_MAX_ATTEMPTS: int = 10

    # Creation quotas
    MAX_ACTIVE_EVENTS: int = 1000
    MAX_EVENTS_PER_WINDOW_GLOBAL: int = 100
    MAX_EVENTS_PER_WINDOW_PER_SOURCE: int = 10
    CREATION_WINDOW_SECONDS: int = 3600

    # Per-event ceilings
    MAX_TICKETS_PER_EVENT: int = 1000
    MAX_SLOTS_PER_EVENT: int = 10_000

    @field_validator(
        'EVENT_DURATION_HOURS',
        'EVENT_ID_MAX_ATTEMPTS',
        'CREATION_WINDOW_SECONDS',
        'MAX_SLOTS_PER_EVENT',
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError('must be a positive integer')
        return v


settings = Settings()  # type: ignore
