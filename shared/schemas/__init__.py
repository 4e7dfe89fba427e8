"""
Shared data schemas for the iLocal auth service
"""

from .user import (
    UserRole,
    LoginSchema,
    RegistrationSchema,
    RefreshTokenSchema,
    EmailVerificationSchema,
    ResetPasswordSchema,
    ForgotPasswordSchema,
)

__all__ = [
    "UserRole",
    "LoginSchema",
    "RegistrationSchema",
    "RefreshTokenSchema",
    "EmailVerificationSchema",
    "ResetPasswordSchema",
    "ForgotPasswordSchema",
]

__version__ = "1.0.0"
