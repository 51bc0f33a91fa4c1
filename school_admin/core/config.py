import json
from pydantic_settings import BaseSettings, SettingsConfigDict, NoDecode
from pydantic import Field, field_validator
from typing import Annotated, Optional, List
from datetime import timedelta

class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "School Administration Service"
    VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False)

    # Authentication Settings
    SECRET_KEY: str = Field(...)
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60)
    TOKEN_ISSUER: str = Field(default="school_admin")
    SECURE_PATH_PREFIX: str = Field(default="/secure/")

    # Password Settings
    PASSWORD_HASH_ROUNDS: int = Field(default=12, ge=4, le=31)
    MIN_PASSWORD_LENGTH: int = Field(default=6)

    # CORS Settings
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ]
    )

    # Storage Settings
    STORAGE_BACKEND: str = Field(default="memory")
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./school_admin.db")
    DATABASE_ECHO: bool = Field(default=False)
    SEED_DEMO_DATA: bool = Field(default=True)

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: Optional[str] = Field(default=None)

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('STORAGE_BACKEND')
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "database"):
            raise ValueError("STORAGE_BACKEND must be 'memory' or 'database'")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return v

    @field_validator('SECURE_PATH_PREFIX')
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        if not v.startswith("/"):
            v = f"/{v}"
        if not v.endswith("/"):
            v = f"{v}/"
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

# Initialize settings
settings = Settings()

# Helper Functions
def get_token_expires_delta(minutes: Optional[int] = None) -> timedelta:
    if minutes is None:
        minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return timedelta(minutes=minutes)
