"""
Configuration Management
Environment-based configuration for the user service
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class UserServiceConfig(BaseSettings):
    """User service configuration"""

    service_name: str = "user-service"
    service_version: str = "1.0.0"
    port: int = 8001

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_key: str = ""

    # Notification dispatcher
    notification_service_url: str = "http://notification-service:3000"
    notification_timeout: float = 10.0

    # Base URL of the web app; email links point at it
    app_url: str = "http://localhost:5173"

    # Token lifetimes; an unset confirmation ttl means confirmation links never expire
    reset_token_ttl_hours: float = 24
    confirmation_token_ttl_hours: Optional[float] = None

    # Upper bound for the identity lookup behind /auth/me
    current_user_timeout: float = 10.0

    cors_allowed_origins: str = "*"

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    @field_validator('reset_token_ttl_hours', 'current_user_timeout')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError('Value must be positive')
        return v

    @field_validator('confirmation_token_ttl_hours', mode='before')
    @classmethod
    def empty_ttl_is_unset(cls, v):
        if v == "":
            return None
        return v

    def get_cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]
        return origins or ["*"]


_config: Optional[UserServiceConfig] = None


def get_config() -> UserServiceConfig:
    """Get user service configuration instance"""
    global _config
    if _config is None:
        _config = UserServiceConfig()
    return _config
