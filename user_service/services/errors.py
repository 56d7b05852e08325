"""
Account errors

Each error carries the HTTP status the routes respond with.
"""


class AccountError(Exception):
    """Base class for account and verification failures"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AccountValidationError(AccountError):
    """Missing or malformed input, rejected before any external call"""
    status_code = 400


class AuthenticationError(AccountError):
    status_code = 401


class EmailNotConfirmedError(AccountError):
    status_code = 403


class InvalidTokenError(AccountError):
    status_code = 400


class TokenExpiredError(AccountError):
    """The token exists but is older than its kind allows"""
    status_code = 410


class ExternalServiceError(AccountError):
    """The auth backend or database failed"""
    status_code = 502
