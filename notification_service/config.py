"""
Configuration Management
Environment-based configuration for SMTP and application settings
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import logging

logger = logging.getLogger(__name__)


class SMTPConfig(BaseSettings):
    """SMTP Configuration"""

    # Connection options {host, port, user, pass}
    smtp_host: str = "smtp.office365.com"
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None

    smtp_use_tls: bool = False
    smtp_start_tls: bool = True
    smtp_timeout: int = 30

    # Email defaults
    email_from: str = "noreply@goaihub.ai"

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    @field_validator('smtp_port')
    @classmethod
    def validate_smtp_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError('SMTP port must be between 1 and 65535')
        return v

    @field_validator('smtp_timeout')
    @classmethod
    def validate_smtp_timeout(cls, v):
        if v < 1:
            raise ValueError('SMTP timeout must be at least 1 second')
        return v

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"SMTP Host: {self.smtp_host}:{self.smtp_port}")
        logger.info(f"TLS: {self.smtp_use_tls}, STARTTLS: {self.smtp_start_tls}")
        logger.info(f"Authentication: {'Yes' if self.smtp_user else 'No'}")
        logger.info(f"From: {self.email_from}")


class AppConfig(BaseSettings):
    """Application Configuration"""

    service_name: str = "notification-service"
    service_version: str = "1.0.0"
    port: int = 3000

    # Base URL used in email links when the request does not carry one
    app_url: str = "http://localhost:5173"

    # Comma separated; "*" allows any origin
    allowed_origins: str = "*"

    templates_dir: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    def get_allowed_origins(self) -> List[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        return origins or ["*"]


# Global configuration instances
_smtp_config: Optional[SMTPConfig] = None
_app_config: Optional[AppConfig] = None


def get_smtp_config() -> SMTPConfig:
    """Get SMTP configuration instance"""
    global _smtp_config
    if _smtp_config is None:
        _smtp_config = SMTPConfig()
    return _smtp_config


def get_app_config() -> AppConfig:
    """Get application configuration instance"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
