# config.py
from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, field_validator, model_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required
    SECRET_KEY: SecretStr
    DATABASE_URL: SecretStr

    # Environment and CORS
    ENV: Literal["development", "production", "test"] = "development"
    ALLOWED_ORIGINS: list[str] = []

    ALGORITHM: str = "HS256"
    LOG_LEVEL: str = "INFO"

    # Daily challenge
    DEFAULT_LANGUAGE: str = "en"
    STATS_MAX_RETRIES: int = 5
    ATTEMPTS_RATE_LIMIT: str = "30/minute"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def normalize_db_url(cls, v):
        if isinstance(v, SecretStr):
            v = v.get_secret_value()
        if isinstance(v, str) and v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql+psycopg2://", 1)
        return v

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v):
        # Accepts "a,b,c" as well as JSON
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v or []

    @field_validator("STATS_MAX_RETRIES")
    @classmethod
    def positive_retries(cls, v: int) -> int:
        if v < 1:
            raise ValueError("STATS_MAX_RETRIES must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_cors(self):
        if self.ENV == "production":
            if not self.ALLOWED_ORIGINS:
                raise ValueError("ALLOWED_ORIGINS must not be empty in production.")
            if "*" in self.ALLOWED_ORIGINS:
                raise ValueError("CORS wildcard (*) is not allowed in production.")
        return self

@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
