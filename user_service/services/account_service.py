"""
Account Service
Signup, sign-in and session management on top of Supabase auth
"""

import asyncio
import re
from typing import Any, Dict, Optional
import logging

from shared.schemas.account import Account, AccountRole
from shared.utils.supabase_client import SupabaseClient, SupabaseError, get_supabase_client
from user_service.config import UserServiceConfig, get_config
from user_service.services.errors import (
    AccountValidationError, AuthenticationError, EmailNotConfirmedError, ExternalServiceError
)
from user_service.services.verification_service import (
    MIN_PASSWORD_LENGTH, VerificationService, get_verification_service, validate_new_password
)
from user_service.utils.database import AccountDatabase, get_account_database

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

EMAIL_NOT_CONFIRMED_MESSAGE = (
    "Please confirm your email address before signing in. "
    "Check your inbox for the confirmation link."
)

# Profile values used when an identity carries no signup metadata
PROFILE_FALLBACKS = {
    "contact_name": "User",
    "company_name": "Company",
    "country": "Unknown",
}


class AccountService:
    """Account lifecycle against the managed auth backend"""

    def __init__(
        self,
        supabase: Optional[SupabaseClient] = None,
        database: Optional[AccountDatabase] = None,
        verification: Optional[VerificationService] = None,
        config: Optional[UserServiceConfig] = None
    ):
        self.supabase = supabase or get_supabase_client()
        self.database = database or get_account_database()
        self.verification = verification or get_verification_service()
        self.config = config or get_config()

    async def sign_up(
        self,
        email: str,
        password: str,
        contact_name: str,
        company_name: str,
        country: str
    ) -> Account:
        """
        Register a vendor account

        Creates the auth identity, then upserts the profile row keyed on the
        identity id, then issues a confirmation token. A failed confirmation
        email does not fail the signup.
        """
        if not all([email, password, contact_name, company_name, country]):
            raise AccountValidationError("All fields are required")

        if not EMAIL_PATTERN.match(email):
            raise AccountValidationError("Invalid email format")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise AccountValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        email = email.lower().strip()
        profile = {
            "contact_name": contact_name.strip(),
            "company_name": company_name.strip(),
            "country": country.strip(),
        }

        try:
            identity = await self.supabase.sign_up(email, password, profile)
        except SupabaseError as e:
            raise ExternalServiceError(str(e)) from e

        if not identity.get("success"):
            error = identity.get("error") or "Failed to create user"
            logger.error(f"Auth identity creation failed for {email}: {error}")
            if "already registered" in error:
                raise AccountValidationError("User with this email already exists")
            raise ExternalServiceError(error)

        account = Account(
            user_id=identity["user_id"],
            email=email,
            role=AccountRole.USER,
            email_confirmed=False,
            **profile
        )

        try:
            stored = await self.database.upsert_account(account.to_row())
        except SupabaseError as e:
            logger.error(f"Failed to create profile for {email}: {e}")
            raise ExternalServiceError("Failed to create user profile") from e

        if stored is not None:
            account = stored
        else:
            logger.warning(f"Profile upsert for {email} returned no row, using constructed profile")

        await self.verification.issue_confirmation_token(account)

        logger.info(f"Account registered: {email}")
        return account

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Authenticate and load the profile

        Returns:
            dict with the account and its session tokens

        Raises:
            EmailNotConfirmedError: credentials are valid but the email is unconfirmed
        """
        if not email or not password:
            raise AccountValidationError("Email and password are required")

        email = email.lower().strip()

        try:
            session = await self.supabase.sign_in(email, password)
        except SupabaseError as e:
            raise ExternalServiceError(str(e)) from e

        if not session.get("success"):
            logger.warning(f"Sign in failed for {email}: {session.get('error')}")
            raise AuthenticationError("Invalid credentials")

        try:
            account = await self._load_or_create_profile(session, email)
        except SupabaseError as e:
            logger.error(f"Profile lookup after sign in failed for {email}: {e}")
            raise ExternalServiceError("Failed to load user profile") from e

        if not account.email_confirmed:
            logger.warning(f"Email not confirmed for user: {account.email}")
            signed_out = await self.supabase.sign_out(session.get("access_token"))
            if not signed_out.get("success"):
                logger.warning(f"Could not revoke session for unconfirmed {account.email}")
            raise EmailNotConfirmedError(EMAIL_NOT_CONFIRMED_MESSAGE)

        logger.info(f"Sign in successful: {account.email}")
        return {
            "account": account,
            "access_token": session.get("access_token"),
            "refresh_token": session.get("refresh_token"),
            "expires_at": session.get("expires_at"),
        }

    async def sign_out(self, access_token: Optional[str] = None) -> None:
        try:
            result = await self.supabase.sign_out(access_token)
        except SupabaseError as e:
            raise ExternalServiceError(str(e)) from e

        if not result.get("success"):
            raise ExternalServiceError(result.get("error") or "Failed to sign out")

    async def update_password(self, user_id: str, new_password: str) -> None:
        """Change the password of a signed-in account"""
        validate_new_password(new_password)

        result = await self.supabase.update_user_password(user_id, new_password)
        if not result.get("success"):
            logger.error(f"Password update failed for {user_id}: {result.get('error')}")
            raise ExternalServiceError(result.get("error") or "Failed to update password")

    async def get_current_user(self, access_token: Optional[str]) -> Optional[Account]:
        """
        Resolve the account behind an access token

        The identity lookup is bounded by CURRENT_USER_TIMEOUT. Any failure
        yields None.
        """
        if not access_token:
            return None

        try:
            identity = await asyncio.wait_for(
                self.supabase.get_user(access_token),
                timeout=self.config.current_user_timeout
            )
        except asyncio.TimeoutError:
            logger.error("Auth request timeout while resolving current user")
            return None
        except SupabaseError as e:
            logger.error(f"Error getting auth user: {e}")
            return None

        if not identity.get("success"):
            logger.warning(f"No auth user for token: {identity.get('error')}")
            return None

        try:
            return await self._load_or_create_profile(identity, identity.get("email") or "")
        except SupabaseError as e:
            logger.error(f"Failed to load current user profile: {e}")
            return None

    async def _load_or_create_profile(self, identity: Dict[str, Any], email: str) -> Account:
        """Profile of an identity, created from its metadata when missing"""
        account = await self.database.get_account_by_user_id(identity["user_id"])
        if account is not None:
            return account

        logger.warning(f"User profile not found for {identity['user_id']}, creating it")
        metadata = identity.get("user_metadata") or {}
        account = Account(
            user_id=identity["user_id"],
            email=(identity.get("email") or email).lower(),
            role=AccountRole.USER,
            email_confirmed=False,
            **{field: metadata.get(field) or fallback for field, fallback in PROFILE_FALLBACKS.items()}
        )

        stored = await self.database.upsert_account(account.to_row())
        return stored or account


_account_service: Optional[AccountService] = None


def get_account_service() -> AccountService:
    """Get account service instance"""
    global _account_service
    if _account_service is None:
        _account_service = AccountService()
    return _account_service
