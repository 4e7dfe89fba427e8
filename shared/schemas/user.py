"""
User data schemas for the iLocal auth service

Pydantic models for authentication request validation.
"""

from typing import Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserRole(str, Enum):
    """User role enumeration"""
    USER = "USER"


class LoginSchema(BaseModel):
    """Schema for user login"""
    email: EmailStr
    password: str = Field(..., min_length=1)
    remember: bool = False

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Normalize email"""
        return v.lower()


class RegistrationSchema(BaseModel):
    """Schema for creating a new user"""
    email: EmailStr
    fullname: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Normalize email"""
        return v.lower()

    @field_validator('fullname')
    @classmethod
    def validate_fullname(cls, v):
        """Strip surrounding whitespace from the display name"""
        v = v.strip()
        if not v:
            raise ValueError('Full name must not be blank')
        return v


class RefreshTokenSchema(BaseModel):
    """Schema for session refresh"""
    remember: bool = False


class EmailVerificationSchema(BaseModel):
    """Schema for email verification"""
    token_hash: str = Field(..., min_length=1)
    type: str = Field("email", pattern=r'^(email|signup|invite|magiclink|recovery|email_change)$')


class ResetPasswordSchema(BaseModel):
    """Schema for setting a new password"""
    model_config = ConfigDict(populate_by_name=True)

    new_password: Optional[str] = Field(None, alias="newPassword", max_length=128)


class ForgotPasswordSchema(BaseModel):
    """Schema for password recovery request"""
    email: Optional[EmailStr] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Normalize email"""
        return v.lower() if v else v
