"""
Shared utilities for GO AI Hub

This package contains common utilities used across all microservices.
"""

from .logger import setup_logging, init_logging, get_logger, mask_token
from .security import SecurityUtils, generate_token, validate_token
from .supabase_client import SupabaseClient, SupabaseError

__all__ = [
    "setup_logging",
    "init_logging",
    "get_logger",
    "mask_token",
    "SecurityUtils",
    "generate_token",
    "validate_token",
    "SupabaseClient",
    "SupabaseError",
]

__version__ = "1.0.0"
