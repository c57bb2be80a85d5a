"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Row store
    USE_GOOGLE_SHEETS: bool = os.getenv("USE_GOOGLE_SHEETS", "false").lower() in ("1", "true", "yes")
    GOOGLE_SHEET_ID: str | None = os.getenv("GOOGLE_SHEET_ID")
    GOOGLE_CREDENTIALS_JSON: str | None = os.getenv("GOOGLE_CREDENTIALS_JSON")
    GOOGLE_CREDENTIALS_FILE: str | None = os.getenv("GOOGLE_CREDENTIALS_FILE")
    GOOGLE_CREDENTIALS_B64: str | None = os.getenv("GOOGLE_CREDENTIALS_B64")
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str | None = os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL")
    GOOGLE_PRIVATE_KEY: str | None = os.getenv("GOOGLE_PRIVATE_KEY")
    COMPANIES_SHEET: str = os.getenv("COMPANIES_SHEET", "companies")

    # Image hosting
    GITHUB_TOKEN: str | None = os.getenv("GITHUB_TOKEN")
    GITHUB_REPO_OWNER: str | None = os.getenv("GITHUB_REPO_OWNER")
    GITHUB_REPO_NAME: str | None = os.getenv("GITHUB_REPO_NAME")
    GITHUB_BRANCH: str = os.getenv("GITHUB_BRANCH", "main")
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com")

    # Security
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin_password_123")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-in-production")
    TOKEN_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_MINUTES: int = int(os.getenv("TOKEN_EXPIRE_MINUTES", "720"))

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # File limits
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
