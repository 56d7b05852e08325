"""
Security utilities for GO AI Hub

Provides verification token generation and format validation.
"""

import re
import random
import secrets
import string
import logging
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
TOKEN_PATTERN = re.compile(r'^[A-Za-z0-9]{16,128}$')
DEFAULT_TOKEN_LENGTH = 32


class SecurityUtils:
    """Security utilities class"""

    def __init__(self, rng: Optional[random.Random] = None):
        # An explicit rng is only used when no system randomness source exists
        self._rng = rng
        self._system_random = self._init_system_random()

    def _init_system_random(self) -> Optional[random.SystemRandom]:
        """Initialize the OS-backed random source"""
        try:
            system_random = secrets.SystemRandom()
            system_random.random()
            return system_random
        except NotImplementedError as e:
            logger.warning(f"System randomness unavailable, using pseudo-random tokens: {e}")
            return None

    def generate_token(self, length: int = DEFAULT_TOKEN_LENGTH) -> str:
        """
        Generate an opaque alphanumeric token

        Args:
            length: Number of characters to generate

        Returns:
            Token drawn uniformly from [A-Za-z0-9]
        """
        if length < 0:
            raise ValueError("Token length must not be negative")

        if self._system_random is not None:
            return ''.join(self._system_random.choice(TOKEN_ALPHABET) for _ in range(length))

        rng = self._rng or random.Random()
        return ''.join(rng.choice(TOKEN_ALPHABET) for _ in range(length))

    def validate_token(self, token: Optional[str]) -> bool:
        """
        Check that a token has the expected surface format

        Only the format is checked. Existence, ownership and expiry must be
        checked against storage by the caller.
        """
        if not token or not isinstance(token, str):
            return False
        return TOKEN_PATTERN.fullmatch(token) is not None


# Global security utils instance
_security_utils: Optional[SecurityUtils] = None


def get_security_utils() -> SecurityUtils:
    """Get security utils instance"""
    global _security_utils
    if _security_utils is None:
        _security_utils = SecurityUtils()
    return _security_utils


# Convenience functions
def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    """Generate verification token"""
    return get_security_utils().generate_token(length)


def validate_token(token: Optional[str]) -> bool:
    """Validate verification token format"""
    return get_security_utils().validate_token(token)
