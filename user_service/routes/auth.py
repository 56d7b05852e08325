"""
Authentication Routes
Vendor registration, sign-in, email confirmation and password reset
"""

from fastapi import APIRouter, HTTPException, status
import logging

from shared.schemas.account import (
    SignUpSchema, SignInSchema, PasswordResetRequestSchema,
    PasswordResetCompleteSchema, PasswordUpdateSchema,
    EmailConfirmationSchema, ResendConfirmationSchema
)
from user_service.services.errors import AccountError
from user_service.utils.dependencies import (
    AccountServiceDep, VerificationServiceDep, AccessToken, CurrentAccount
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(error: AccountError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.message)


@router.post("/signup", response_model=dict, status_code=status.HTTP_201_CREATED)
async def signup(data: SignUpSchema, account_service: AccountServiceDep):
    """
    Register a vendor account

    A confirmation link is emailed; sign-in is refused until it is used.
    """
    try:
        account = await account_service.sign_up(
            data.email, data.password, data.contact_name, data.company_name, data.country
        )
    except AccountError as e:
        raise _http_error(e)

    return {
        "success": True,
        "message": "Account created. Please check your email to confirm your address.",
        "user": account.to_public_dict(),
        "requires_confirmation": not account.email_confirmed
    }


@router.post("/signin", response_model=dict)
async def signin(data: SignInSchema, account_service: AccountServiceDep):
    try:
        result = await account_service.sign_in(data.email, data.password)
    except AccountError as e:
        raise _http_error(e)

    return {
        "success": True,
        "user": result["account"].to_public_dict(),
        "access_token": result["access_token"],
        "refresh_token": result["refresh_token"],
        "expires_at": result["expires_at"],
        "token_type": "bearer"
    }


@router.post("/signout", response_model=dict)
async def signout(access_token: AccessToken, account_service: AccountServiceDep):
    try:
        await account_service.sign_out(access_token)
    except AccountError as e:
        raise _http_error(e)

    return {"success": True, "message": "Signed out"}


@router.get("/me", response_model=dict)
async def current_user(account: CurrentAccount):
    """Profile of the signed-in account"""
    return {"success": True, "user": account.to_public_dict()}


@router.post("/confirm-email", response_model=dict)
async def confirm_email(data: EmailConfirmationSchema, verification: VerificationServiceDep):
    """Consume a confirmation token from an emailed link"""
    confirmed = await verification.verify_email_confirmation(data.token)
    if not confirmed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired confirmation token"
        )

    return {"success": True, "message": "Email confirmed. You can now sign in."}


@router.post("/resend-confirmation", response_model=dict)
async def resend_confirmation(data: ResendConfirmationSchema, verification: VerificationServiceDep):
    try:
        await verification.resend_confirmation(data.email)
    except AccountError as e:
        raise _http_error(e)

    return {
        "success": True,
        "message": "If the account exists and is unconfirmed, a new confirmation email has been sent."
    }


@router.post("/password-reset", response_model=dict)
async def request_password_reset(data: PasswordResetRequestSchema, verification: VerificationServiceDep):
    """Email a reset link; the response is the same whether or not the email is registered"""
    try:
        await verification.request_password_reset(data.email)
    except AccountError as e:
        raise _http_error(e)

    return {
        "success": True,
        "message": "If an account exists for this email, a password reset link has been sent."
    }


@router.post("/password-reset/complete", response_model=dict)
async def complete_password_reset(data: PasswordResetCompleteSchema, verification: VerificationServiceDep):
    try:
        await verification.reset_password(data.token, data.new_password)
    except AccountError as e:
        raise _http_error(e)

    return {"success": True, "message": "Password has been reset. You can now sign in."}


@router.post("/password", response_model=dict)
async def update_password(
    data: PasswordUpdateSchema,
    account: CurrentAccount,
    account_service: AccountServiceDep
):
    try:
        await account_service.update_password(account.user_id, data.new_password)
    except AccountError as e:
        raise _http_error(e)

    return {"success": True, "message": "Password updated"}
