"""
Configuration management using Pydantic Settings
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str

    # Redis (empty string disables caching)
    REDIS_URL: str = "redis://redis:6379/0"

    # Authentication
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 24 * 7  # 7 days
    BCRYPT_ROUNDS: int = 10

    # Application
    APP_NAME: str = "Quiz Administration Platform"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_PER_HOUR: int = 1000
    # Per client and per credential endpoint (login, register)
    CREDENTIAL_RATE_LIMIT_PER_MINUTE: int = 10

    # Leaderboard
    LEADERBOARD_CACHE_TTL: int = 300  # 5 minutes
    DEFAULT_LEADERBOARD_LIMIT: int = 10
    MAX_LEADERBOARD_LIMIT: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
