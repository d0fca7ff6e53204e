"""
Catalog Admin configuration using shared patterns
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the catalog admin directory path
CATALOG_ADMIN_DIR = Path(__file__).parent.parent.parent
ENV_FILE = CATALOG_ADMIN_DIR / ".env"


class CatalogAdminSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Catalog Admin"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Service specific
    SERVICE_NAME: str = "catalog-admin"

    # Remote catalog service
    CATALOG_API_BASE_URL: str = "http://localhost:3000/api"
    CATALOG_API_TOKEN: Optional[str] = None
    REQUEST_TIMEOUT: int = 30
    CATEGORY_PAGE_SIZE: int = 100
    PRODUCT_PAGE_SIZE: int = 100

    # Product relocation
    FALLBACK_CATEGORY_NAME: str = "Uncategorized"
    FALLBACK_CATEGORY_DESCRIPTION: str = "Default category for relocated products"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_HEADERS: List[str] = ["*"]

    # Logging
    ENABLE_FILE_LOGGING: bool = False
    ENABLE_ACCESS_LOGS: bool = True


# Create a singleton instance
_settings_instance = None


def get_settings() -> CatalogAdminSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = CatalogAdminSettings()
    return _settings_instance
