"""
Verification Service
Email confirmation and password reset token lifecycle

Every account has a single pending token slot. Issuing a confirmation or a
reset token replaces whatever was pending; a token is only accepted by the
flow matching its kind.
"""

from datetime import datetime, timezone
from typing import Callable, Optional
import logging

from shared.schemas.account import Account, PendingToken, TokenKind
from shared.utils.logger import mask_token
from shared.utils.security import SecurityUtils, get_security_utils
from shared.utils.supabase_client import SupabaseClient, SupabaseError, get_supabase_client
from user_service.config import UserServiceConfig, get_config
from user_service.services.errors import (
    AccountValidationError, ExternalServiceError, InvalidTokenError, TokenExpiredError
)
from user_service.utils.database import AccountDatabase, get_account_database
from user_service.utils.notification_client import (
    NotificationClient, NotificationError, get_notification_client
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_new_password(password: Optional[str]) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise AccountValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


class VerificationService:
    """Issues, validates and consumes verification tokens"""

    def __init__(
        self,
        database: Optional[AccountDatabase] = None,
        supabase: Optional[SupabaseClient] = None,
        notifier: Optional[NotificationClient] = None,
        security: Optional[SecurityUtils] = None,
        config: Optional[UserServiceConfig] = None,
        clock: Callable[[], datetime] = _utcnow
    ):
        self.database = database or get_account_database()
        self.supabase = supabase or get_supabase_client()
        self.notifier = notifier or get_notification_client()
        self.security = security or get_security_utils()
        self.config = config or get_config()
        self.clock = clock

    def _ttl_hours(self, kind: TokenKind) -> Optional[float]:
        if kind == TokenKind.RESET:
            return self.config.reset_token_ttl_hours
        return self.config.confirmation_token_ttl_hours

    def new_token(self, kind: TokenKind) -> PendingToken:
        return PendingToken(kind=kind, token=self.security.generate_token(), issued_at=self.clock())

    async def issue_confirmation_token(self, account: Account) -> Optional[PendingToken]:
        """
        Store a fresh confirmation token and email the link

        Failures are logged; the caller's operation (signup, resend) still succeeds.

        Returns:
            The stored token, or None if it could not be stored
        """
        pending = self.new_token(TokenKind.CONFIRMATION)

        try:
            stored = await self.database.set_pending_token(account.user_id, pending)
        except SupabaseError as e:
            logger.error(f"Failed to store confirmation token for {account.email}: {e}")
            return None

        if not stored:
            logger.error(f"No profile row to hold confirmation token for {account.email}")
            return None

        try:
            await self.notifier.send_confirmation_email(account.email, account.contact_name, pending.token)
        except NotificationError as e:
            logger.error(f"Failed to send confirmation email to {account.email}: {e}")

        return pending

    async def verify_email_confirmation(self, token: str) -> bool:
        """Confirm the account holding this confirmation token"""
        if not token or not self.security.validate_token(token):
            logger.warning("Rejected malformed confirmation token")
            return False

        try:
            account = await self.database.get_account_by_token(token, TokenKind.CONFIRMATION)
            if account is None:
                logger.info(f"No account holds confirmation token {mask_token(token)}")
                return False

            if account.pending_token.is_expired(self._ttl_hours(TokenKind.CONFIRMATION), self.clock()):
                logger.info(f"Confirmation token {mask_token(token)} has expired")
                return False

            confirmed = await self.database.mark_email_confirmed(account.user_id, token)
        except SupabaseError as e:
            logger.error(f"Error verifying email confirmation: {e}")
            return False

        if confirmed:
            logger.info(f"Email confirmed for {account.email}")
        return confirmed

    async def request_password_reset(self, email: str) -> bool:
        """
        Email a password reset link

        Unknown addresses report success without sending anything, so the
        response does not reveal which emails are registered.
        """
        if not email or not email.strip():
            raise AccountValidationError("Email is required")

        email = email.strip().lower()

        try:
            account = await self.database.get_account_by_email(email)
        except SupabaseError as e:
            logger.error(f"Account lookup for password reset failed: {e}")
            raise ExternalServiceError("Failed to process password reset request") from e

        if account is None:
            logger.info(f"Password reset requested for unknown email: {email}")
            return True

        pending = self.new_token(TokenKind.RESET)
        try:
            await self.database.set_pending_token(account.user_id, pending)
        except SupabaseError as e:
            logger.error(f"Failed to store reset token for {email}: {e}")
            raise ExternalServiceError("Failed to process password reset request") from e

        try:
            await self.notifier.send_password_reset_email(account.email, account.contact_name, pending.token)
        except NotificationError as e:
            logger.error(f"Failed to send password reset email to {email}: {e}")

        return True

    async def reset_password(self, token: str, new_password: str) -> bool:
        """
        Consume a reset token and set the new password

        Raises:
            InvalidTokenError: malformed token, or no account holds it as a reset token
            TokenExpiredError: the token is older than the reset ttl; nothing is changed
            ExternalServiceError: the auth backend rejected the password update
        """
        if not token or not self.security.validate_token(token):
            raise InvalidTokenError("Invalid reset token")

        validate_new_password(new_password)

        try:
            account = await self.database.get_account_by_token(token, TokenKind.RESET)
        except SupabaseError as e:
            logger.error(f"Reset token lookup failed: {e}")
            raise ExternalServiceError("Failed to reset password") from e

        if account is None:
            raise InvalidTokenError("Invalid or expired reset token")

        if account.pending_token.is_expired(self._ttl_hours(TokenKind.RESET), self.clock()):
            logger.info(f"Reset token {mask_token(token)} for {account.email} has expired")
            raise TokenExpiredError("Reset token has expired. Please request a new password reset link.")

        result = await self.supabase.update_user_password(account.user_id, new_password)
        if not result.get("success"):
            logger.error(f"Password update failed for {account.email}: {result.get('error')}")
            raise ExternalServiceError("Failed to reset password")

        # The new password stays in effect even if the token cannot be cleared
        try:
            cleared = await self.database.clear_pending_token(account.user_id, token)
            if not cleared:
                logger.warning(f"Reset token {mask_token(token)} was superseded before it could be cleared")
        except SupabaseError as e:
            logger.error(f"Password reset for {account.email} succeeded but clearing the token failed: {e}")

        logger.info(f"Password reset completed for {account.email}")
        return True

    async def resend_confirmation(self, email: str) -> bool:
        """Re-issue a confirmation link; reports success whether or not one was sent"""
        if not email or not email.strip():
            raise AccountValidationError("Email is required")

        email = email.strip().lower()

        try:
            account = await self.database.get_account_by_email(email)
        except SupabaseError as e:
            logger.error(f"Account lookup for confirmation resend failed: {e}")
            return True

        if account is None:
            logger.info(f"Confirmation resend requested for unknown email: {email}")
        elif account.email_confirmed:
            logger.info(f"Confirmation resend requested for confirmed email: {email}")
        else:
            await self.issue_confirmation_token(account)

        return True


_verification_service: Optional[VerificationService] = None


def get_verification_service() -> VerificationService:
    """Get verification service instance"""
    global _verification_service
    if _verification_service is None:
        _verification_service = VerificationService()
    return _verification_service
