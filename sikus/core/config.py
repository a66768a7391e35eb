"""
config.py

Application configuration.

Environment variables (and the .env file) are loaded through
Pydantic BaseSettings into a single Settings object.

Main settings:
- database connection
- JWT signing secret and expiry policy
- CORS allowed origins
- logging level / log directory
- pagination limits

Design principles:
- every environment variable is read through this file only
- a Settings instance is built once in create_app() and handed to
  components through app.state / FastAPI dependencies, not imported
  as a module-level global
- SECRET_KEY is mandatory; there is no fallback signing key

Related files:
- sikus.main               : builds Settings and stores it on app.state
- sikus.core.deps          : get_settings dependency
- sikus.core.security      : JWT secret / expiry
- sikus.db.session         : DATABASE_URL

"""

from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# previously hard-coded fallback key; never accepted
_LEGACY_SECRET = "ptps-secret-key-2024"
_MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # CORS allowed origins (frontend addresses)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str | None = None

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 1000

    @field_validator("SECRET_KEY")
    @classmethod
    def _check_secret_key(cls, value: str) -> str:
        value = value.strip()
        if value == _LEGACY_SECRET:
            raise ValueError("SECRET_KEY must not be the legacy default key")
        if len(value) < _MIN_SECRET_LENGTH:
            raise ValueError(f"SECRET_KEY must be at least {_MIN_SECRET_LENGTH} characters")
        return value

    @field_validator("ACCESS_TOKEN_EXPIRE_HOURS", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def _check_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be a positive integer")
        return value
