"""
Auth Service Errors
Exception taxonomy mapped onto HTTP responses by the app's exception handlers
"""

from typing import Optional


class AuthServiceError(Exception):
    """Base error carrying the HTTP status and the client-facing message"""

    status_code: int = 500
    response_status: str = "error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(AuthServiceError):
    """Client supplied unusable input"""
    status_code = 400
    response_status = "failed"


class AuthenticationError(AuthServiceError):
    """Missing, invalid or expired credentials"""
    status_code = 401


class ProviderError(AuthServiceError):
    """
    The hosted auth provider failed or rejected the call

    `rejected` is set when the provider answered and refused the request
    (bad credentials, invalid token, existing account). Otherwise the provider
    was unreachable or misconfigured.
    """
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None, rejected: bool = False):
        super().__init__(message, details=details)
        self.rejected = rejected


class TokenGenerationError(AuthServiceError):
    """Provider reported success but did not hand back both session tokens"""
    status_code = 500


class ProfilePersistenceError(AuthServiceError):
    """The profile repository failed"""
    status_code = 500


class DuplicateProfileError(ProfilePersistenceError):
    """A profile row for this user or email already exists"""
