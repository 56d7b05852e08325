"""
Unit tests for AccountService
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from shared.utils.supabase_client import SupabaseError
from user_service.services.account_service import AccountService, EMAIL_NOT_CONFIRMED_MESSAGE
from user_service.services.errors import (
    AccountValidationError, AuthenticationError, EmailNotConfirmedError, ExternalServiceError
)


@pytest.fixture
def account_service(supabase, database, verification, config):
    return AccountService(supabase=supabase, database=database, verification=verification, config=config)


def _session(user_id="user-1", email="vendor@example.com", metadata=None):
    return {
        "success": True,
        "user_id": user_id,
        "email": email,
        "user_metadata": metadata or {},
        "access_token": "access-token",
        "refresh_token": "refresh-token",
        "expires_at": 1735689600,
    }


class TestSignUp:
    """Test vendor registration"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["email", "password", "contact_name", "company_name", "country"])
    async def test_all_fields_required(self, account_service, supabase, field):
        data = {
            "email": "vendor@example.com",
            "password": "secret1",
            "contact_name": "Sara",
            "company_name": "Acme AI",
            "country": "KSA",
        }
        data[field] = ""

        with pytest.raises(AccountValidationError) as exc_info:
            await account_service.sign_up(**data)

        assert exc_info.value.message == "All fields are required"
        supabase.sign_up.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_email(self, account_service):
        with pytest.raises(AccountValidationError) as exc_info:
            await account_service.sign_up("not-an-email", "secret1", "Sara", "Acme AI", "KSA")
        assert exc_info.value.message == "Invalid email format"

    @pytest.mark.asyncio
    async def test_short_password(self, account_service):
        with pytest.raises(AccountValidationError) as exc_info:
            await account_service.sign_up("vendor@example.com", "12345", "Sara", "Acme AI", "KSA")
        assert exc_info.value.message == "Password must be at least 6 characters long"

    @pytest.mark.asyncio
    async def test_sign_up_creates_profile_and_sends_confirmation(self, account_service, supabase, notifier):
        supabase.sign_up.return_value = {"success": True, "user_id": "user-1", "email": "vendor@example.com"}

        account = await account_service.sign_up("Vendor@Example.com", "secret1", " Sara ", "Acme AI", "KSA")

        assert account.email == "vendor@example.com"
        assert account.contact_name == "Sara"
        assert account.email_confirmed is False

        row = supabase.user("user-1")
        assert row["token_kind"] == "confirmation"
        notifier.send_confirmation_email.assert_awaited_once_with(
            "vendor@example.com", "Sara", row["email_confirmation_token"]
        )

    @pytest.mark.asyncio
    async def test_already_registered(self, account_service, supabase):
        supabase.sign_up.return_value = {"success": False, "error": "User already registered"}

        with pytest.raises(AccountValidationError) as exc_info:
            await account_service.sign_up("vendor@example.com", "secret1", "Sara", "Acme AI", "KSA")
        assert exc_info.value.message == "User with this email already exists"

    @pytest.mark.asyncio
    async def test_profile_failure(self, account_service, supabase):
        supabase.sign_up.return_value = {"success": True, "user_id": "user-1"}

        async def broken(*args, **kwargs):
            raise SupabaseError("insert failed")

        supabase.upsert = broken

        with pytest.raises(ExternalServiceError) as exc_info:
            await account_service.sign_up("vendor@example.com", "secret1", "Sara", "Acme AI", "KSA")
        assert exc_info.value.message == "Failed to create user profile"

    @pytest.mark.asyncio
    async def test_sign_up_survives_email_failure(self, account_service, supabase, notifier):
        from user_service.utils.notification_client import NotificationError

        supabase.sign_up.return_value = {"success": True, "user_id": "user-1"}
        notifier.send_confirmation_email.side_effect = NotificationError("smtp down")

        account = await account_service.sign_up("vendor@example.com", "secret1", "Sara", "Acme AI", "KSA")

        assert account.user_id == "user-1"


class TestSignIn:
    """Test sign-in and the confirmation gate"""

    @pytest.mark.asyncio
    async def test_missing_fields(self, account_service):
        with pytest.raises(AccountValidationError):
            await account_service.sign_in("", "secret1")

    @pytest.mark.asyncio
    async def test_bad_credentials(self, account_service, supabase):
        supabase.sign_in.return_value = {"success": False, "error": "Invalid login credentials"}

        with pytest.raises(AuthenticationError) as exc_info:
            await account_service.sign_in("vendor@example.com", "wrong-password")
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_confirmed_account_signs_in(self, account_service, supabase, vendor_row):
        vendor_row["email_confirmed"] = True
        supabase.tables["users"].append(vendor_row)
        supabase.sign_in.return_value = _session()

        result = await account_service.sign_in("vendor@example.com", "secret1")

        assert result["account"].user_id == "user-1"
        assert result["access_token"] == "access-token"
        supabase.sign_out.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unconfirmed_account_is_signed_out(self, account_service, supabase, vendor_row):
        supabase.tables["users"].append(vendor_row)
        supabase.sign_in.return_value = _session()

        with pytest.raises(EmailNotConfirmedError) as exc_info:
            await account_service.sign_in("vendor@example.com", "secret1")

        assert exc_info.value.message == EMAIL_NOT_CONFIRMED_MESSAGE
        supabase.sign_out.assert_awaited_once_with("access-token")

    @pytest.mark.asyncio
    async def test_missing_profile_created_from_metadata(self, account_service, supabase):
        supabase.sign_in.return_value = _session(metadata={"contact_name": "Sara", "company_name": "Acme AI"})

        with pytest.raises(EmailNotConfirmedError):
            await account_service.sign_in("vendor@example.com", "secret1")

        row = supabase.user("user-1")
        assert row["contact_name"] == "Sara"
        assert row["company_name"] == "Acme AI"
        assert row["country"] == "Unknown"
        assert row["email_confirmed"] is False


class TestCurrentUser:
    """Test resolving the signed-in account"""

    @pytest.mark.asyncio
    async def test_no_token(self, account_service):
        assert await account_service.get_current_user(None) is None

    @pytest.mark.asyncio
    async def test_resolves_profile(self, account_service, supabase, vendor_row):
        supabase.tables["users"].append(vendor_row)
        supabase.get_user.return_value = _session()

        account = await account_service.get_current_user("access-token")

        assert account.email == "vendor@example.com"

    @pytest.mark.asyncio
    async def test_invalid_token(self, account_service, supabase):
        supabase.get_user.return_value = {"success": False, "error": "Invalid token"}

        assert await account_service.get_current_user("access-token") is None

    @pytest.mark.asyncio
    async def test_timeout_yields_none(self, account_service, supabase):
        async def hang(token):
            await asyncio.sleep(5)

        supabase.get_user = hang

        assert await account_service.get_current_user("access-token") is None

    @pytest.mark.asyncio
    async def test_backend_error_yields_none(self, account_service, supabase):
        supabase.get_user.side_effect = SupabaseError("client not available")

        assert await account_service.get_current_user("access-token") is None


class TestPasswordUpdate:

    @pytest.mark.asyncio
    async def test_update_password(self, account_service, supabase):
        await account_service.update_password("user-1", "newsecret")
        assert supabase.password_updates == [("user-1", "newsecret")]

    @pytest.mark.asyncio
    async def test_update_password_too_short(self, account_service, supabase):
        with pytest.raises(AccountValidationError):
            await account_service.update_password("user-1", "123")
        assert supabase.password_updates == []

    @pytest.mark.asyncio
    async def test_sign_out_failure(self, account_service, supabase):
        supabase.sign_out = AsyncMock(return_value={"success": False, "error": "session missing"})

        with pytest.raises(ExternalServiceError):
            await account_service.sign_out("access-token")
