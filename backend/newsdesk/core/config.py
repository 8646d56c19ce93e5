import os
from typing import List, Optional
from pydantic import field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "NewsDesk"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "News Management API"
    DEBUG: bool = False

    # Database settings
    DATABASE_URL: str

    # Security settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480  # 8 hours
    JWT_ISSUER: str = "newsdesk"
    JWT_AUDIENCE: str = "newsdesk-clients"
    PASSWORD_HASH_ROUNDS: int = 80000

    # Seed account used by `newsdesk create-admin`
    DEFAULT_ADMIN_EMAIL: Optional[str] = None
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None

    # CORS settings
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    ALLOW_ALL_ORIGINS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL")
    def validate_database_url(cls, v: Optional[str]) -> str:
        if not v:
            raise ValueError("DATABASE_URL must be set")
        return v

    @field_validator("SECRET_KEY")
    def validate_secret_key(cls, v: Optional[str]) -> str:
        if not v or v == "your-secret-key-here":
            if os.environ.get("DEBUG", "false").lower() == "true":
                return "debug-secret-key-not-secure"
            raise ValueError("SECRET_KEY must be set in production")
        return v

    @field_validator("PASSWORD_HASH_ROUNDS")
    def validate_hash_rounds(cls, v: int) -> int:
        # sha256_crypt accepts 1000..999999999 rounds
        if v < 1000:
            raise ValueError("PASSWORD_HASH_ROUNDS must be at least 1000")
        return v

    @property
    def cors_origins(self) -> List[str]:
        """CORS origins actually applied to the app"""
        if self.ALLOW_ALL_ORIGINS or os.environ.get("ALLOW_ALL_ORIGINS", "").lower() == "true":
            return ["*"]
        return self.CORS_ORIGINS

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True
    )


settings = Settings()
