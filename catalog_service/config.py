"""
Configuration Management
Environment-based configuration for the catalog service
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class CatalogConfig(BaseSettings):
    """Catalog service configuration"""

    service_name: str = "catalog-service"
    service_version: str = "1.0.0"
    port: int = 8003

    # LibreTranslate-compatible endpoint
    translation_api_url: str = "https://libretranslate.com"
    translation_api_key: Optional[str] = None
    translation_timeout: float = 15.0

    # Solutions translated concurrently per batch
    translation_batch_size: int = 5

    # Session caches kept before the least recently used one is dropped
    translation_max_sessions: int = 1000

    solutions_page_size: int = 50

    cors_allowed_origins: str = "*"

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    @field_validator('translation_batch_size', 'translation_max_sessions', 'solutions_page_size')
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError('Value must be at least 1')
        return v


_config: Optional[CatalogConfig] = None


def get_config() -> CatalogConfig:
    """Get catalog configuration instance"""
    global _config
    if _config is None:
        _config = CatalogConfig()
    return _config
