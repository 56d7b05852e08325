"""
Account data schemas for GO AI Hub

Pydantic models for account records, pending verification tokens and
authentication requests.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class AccountRole(str, Enum):
    """Account role enumeration"""
    USER = "User"
    ADMIN = "Admin"
    EVALUATOR = "Evaluator"


class TokenKind(str, Enum):
    """Purpose of a pending verification token"""
    CONFIRMATION = "confirmation"
    RESET = "reset"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PendingToken(BaseModel):
    """A verification token stored inline on an account"""
    kind: TokenKind
    token: str
    issued_at: Optional[datetime] = None

    def age_hours(self, now: datetime) -> float:
        """Hours elapsed since the token was issued; unbounded when the issue time is unknown"""
        if self.issued_at is None:
            return float("inf")
        return (_as_utc(now) - _as_utc(self.issued_at)).total_seconds() / 3600

    def is_expired(self, ttl_hours: Optional[float], now: datetime) -> bool:
        """A token with no ttl never expires; otherwise it expires strictly after ttl_hours"""
        if ttl_hours is None:
            return False
        return self.age_hours(now) > ttl_hours


class Account(BaseModel):
    """Account profile record"""
    id: Optional[str] = None
    user_id: str
    email: str
    contact_name: str
    company_name: str
    country: str
    role: AccountRole = AccountRole.USER
    email_confirmed: bool = False
    pending_token: Optional[PendingToken] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Account":
        """Build an account from a `users` table row"""
        pending_token = None
        token = row.get('email_confirmation_token')
        if token:
            issued_at = row.get('confirmation_sent_at')
            # Rows written before token kinds existed only ever held confirmation tokens
            kind = row.get('token_kind') or TokenKind.CONFIRMATION.value
            pending_token = PendingToken(kind=kind, token=token, issued_at=issued_at)

        return cls(
            id=str(row['id']) if row.get('id') is not None else None,
            user_id=str(row['user_id']),
            email=row.get('email') or '',
            contact_name=row.get('contact_name') or '',
            company_name=row.get('company_name') or '',
            country=row.get('country') or '',
            role=row.get('role') or AccountRole.USER.value,
            email_confirmed=bool(row.get('email_confirmed')),
            pending_token=pending_token,
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )

    def to_row(self) -> Dict[str, Any]:
        """Convert to a `users` table row"""
        row = {
            'user_id': self.user_id,
            'email': self.email,
            'contact_name': self.contact_name,
            'company_name': self.company_name,
            'country': self.country,
            'role': self.role.value,
            'email_confirmed': self.email_confirmed,
        }
        row.update(token_columns(self.pending_token))
        return row

    def to_public_dict(self) -> Dict[str, Any]:
        """Account fields safe to return to clients"""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'email': self.email,
            'contact_name': self.contact_name,
            'company_name': self.company_name,
            'country': self.country,
            'role': self.role.value,
            'email_confirmed': self.email_confirmed,
        }


def token_columns(pending_token: Optional[PendingToken]) -> Dict[str, Any]:
    """Column values for the single token slot of an account row"""
    if pending_token is None:
        return {
            'email_confirmation_token': None,
            'confirmation_sent_at': None,
            'token_kind': None,
        }
    return {
        'email_confirmation_token': pending_token.token,
        'confirmation_sent_at': _as_utc(pending_token.issued_at).isoformat() if pending_token.issued_at else None,
        'token_kind': pending_token.kind.value,
    }


class SignUpSchema(BaseModel):
    """Schema for account signup"""
    email: str = ""
    password: str = ""
    contact_name: str = ""
    company_name: str = ""
    country: str = ""


class SignInSchema(BaseModel):
    """Schema for account signin"""
    email: str = ""
    password: str = ""


class PasswordResetRequestSchema(BaseModel):
    """Schema for requesting a password reset link"""
    email: str = ""


class PasswordResetCompleteSchema(BaseModel):
    """Schema for consuming a password reset token"""
    token: str = ""
    new_password: str = Field("", alias="newPassword")

    model_config = {"populate_by_name": True}


class PasswordUpdateSchema(BaseModel):
    """Schema for changing the signed-in account's password"""
    new_password: str = Field("", alias="newPassword")

    model_config = {"populate_by_name": True}


class EmailConfirmationSchema(BaseModel):
    """Schema for confirming an email address"""
    token: str = ""


class ResendConfirmationSchema(BaseModel):
    """Schema for resending the confirmation email"""
    email: str = ""
