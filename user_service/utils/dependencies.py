"""
FastAPI Dependencies
Service instances and authentication dependencies
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Annotated, Optional
import logging

from shared.schemas.account import Account
from user_service.services.account_service import AccountService, get_account_service
from user_service.services.verification_service import VerificationService, get_verification_service

logger = logging.getLogger(__name__)

# Security scheme for Supabase access tokens
security = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """Bearer token from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


async def get_current_account(
    access_token: str = Depends(get_access_token),
    account_service: AccountService = Depends(get_account_service)
) -> Account:
    """
    Get the account behind the bearer token

    Raises:
        HTTPException: If the token is invalid or the lookup failed
    """
    account = await account_service.get_current_user(access_token)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account


# Type annotations for dependency injection
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
VerificationServiceDep = Annotated[VerificationService, Depends(get_verification_service)]
AccessToken = Annotated[str, Depends(get_access_token)]
CurrentAccount = Annotated[Account, Depends(get_current_account)]
