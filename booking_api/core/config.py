from functools import lru_cache
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Appointment Booking API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database
    DATABASE_URL: str = Field(
        default="sqlite:///./appointments.db",
        validation_alias=AliasChoices("DATABASE_URL", "DB_URL"),
    )
    TEST_DATABASE_URL: str = "sqlite:///./test.db"

    # Security
    SECRET_KEY: str = Field(
        default="your-secret-key-change-this-in-production",
        validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"),
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    TOKEN_HEADER: str = "token"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    @property
    def get_database_url(self):
        """Return the appropriate database URL based on if we're testing"""
        if self.TESTING:
            return self.TEST_DATABASE_URL
        return self.DATABASE_URL

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    """Settings read from the environment, built once per process."""
    return Settings()
