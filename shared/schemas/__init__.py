"""
Shared data schemas for GO AI Hub

This package contains common data schemas used across all microservices.
"""

from .account import (
    Account, AccountRole, TokenKind, PendingToken, token_columns,
    SignUpSchema, SignInSchema, PasswordResetRequestSchema,
    PasswordResetCompleteSchema, PasswordUpdateSchema,
    EmailConfirmationSchema, ResendConfirmationSchema,
)
from .solution import Solution, SolutionStatus, TRANSLATABLE_FIELDS, ensure_string_list

__all__ = [
    "Account",
    "AccountRole",
    "TokenKind",
    "PendingToken",
    "token_columns",
    "SignUpSchema",
    "SignInSchema",
    "PasswordResetRequestSchema",
    "PasswordResetCompleteSchema",
    "PasswordUpdateSchema",
    "EmailConfirmationSchema",
    "ResendConfirmationSchema",
    "Solution",
    "SolutionStatus",
    "TRANSLATABLE_FIELDS",
    "ensure_string_list",
]

__version__ = "1.0.0"
