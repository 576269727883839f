"""
Configuración centralizada de la aplicación
"""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_COUPON_DATA_DIR = str(Path(__file__).resolve().parents[2] / "data")


class Settings(BaseSettings):
    """Configuración de la aplicación"""

    # API Settings
    API_TITLE: str = "Food Ordering API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Products, orders and coupon validation"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite:///./food_ordering.db"
    DB_CONNECT_RETRIES: int = 3
    DB_RETRY_DELAY: float = 1.0

    # Seeding
    SEED_ON_STARTUP: bool = True
    COUPON_DATA_DIR: str = DEFAULT_COUPON_DATA_DIR

    # Minimum number of distinct source files a coupon must appear in to be
    # redeemable. Pending product-owner confirmation (1 vs 2).
    COUPON_MIN_SOURCES: int = 2

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()
