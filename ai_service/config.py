"""
Configuration Management
Environment-based configuration for the content generation proxy
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class AIConfig(BaseSettings):
    """AI service configuration"""

    service_name: str = "ai-service"
    service_version: str = "1.0.0"
    port: int = 8004

    # Read from the environment only; requests fail until it is set
    openai_api_key: Optional[str] = None
    openai_api_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4-turbo-preview"
    openai_timeout: float = 60.0

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    @field_validator('openai_timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('OpenAI timeout must be positive')
        return v


_config: Optional[AIConfig] = None


def get_config() -> AIConfig:
    """Get AI service configuration instance"""
    global _config
    if _config is None:
        _config = AIConfig()
    return _config
