"""
Application settings

Environment-backed settings for the LIQUIDO backend.
"""
import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Settings read from the environment and backend/.env"""

    model_config = SettingsConfigDict(
        env_file=str(PACKAGE_DIR.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API Settings
    API_TITLE: str = "LIQUIDO API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Backend for the LIQUIDO vape shop storefront and back-office"
    API_HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # CORS - Can be string (comma-separated) or JSON array
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000,http://127.0.0.1:3000"

    # SumUp
    SUMUP_BASE_URL: str = "https://api.sumup.com"
    SUMUP_BEARER_TOKEN: str = ""
    SUMUP_MERCHANT_CODE: str = ""

    # Firebase
    FIREBASE_API_KEY: str = ""
    FIREBASE_PROJECT_ID: str = ""
    FIREBASE_DATABASE_URL: str = ""
    FIREBASE_DATABASE_SECRET: str = ""

    # Cloudinary (unsigned uploads)
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_UPLOAD_PRESET: str = ""

    # Storefront
    WHATSAPP_NUMBER: str = "393444414036"
    ADMIN_EMAILS: str = ""
    SITE_BASE_URL: str = "https://liquido.vapeshop"
    CATALOG_FALLBACK_PATH: str = str(PACKAGE_DIR / "data" / "catalog.json")
    COMPONENTS_DIR: str = str(PACKAGE_DIR / "components")

    HTTP_TIMEOUT_SECONDS: float = 30.0

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    def get_admin_emails(self) -> List[str]:
        """Admin accounts, compared case-insensitively"""
        return [e.strip().lower() for e in self.ADMIN_EMAILS.split(",") if e.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
