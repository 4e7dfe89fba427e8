"""
Authentication Routes
Login, logout, registration, profile, session refresh, email verification
and password recovery
"""

from typing import Optional

from fastapi import APIRouter, Response, status
import logging

from shared.schemas.user import (
    LoginSchema, RegistrationSchema, RefreshTokenSchema,
    EmailVerificationSchema, ResetPasswordSchema, ForgotPasswordSchema
)

from auth_service.services.auth_service import AuthService
from auth_service.utils.dependencies import (
    AuthProvider, ProfileRepository, SessionCookies,
    AccessTokenCookie, RefreshTokenCookie
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=dict)
async def login_user(
    login_data: LoginSchema,
    response: Response,
    provider: AuthProvider,
    repository: ProfileRepository,
    cookies: SessionCookies
):
    """
    User login

    Authenticates against the auth provider, sets the session cookies and
    returns the user's profile
    """
    view, session = await AuthService.login(login_data, provider, repository)

    cookies.apply(response, session.access_token, session.refresh_token, login_data.remember)

    logger.info(f"User logged in successfully: {login_data.email}")

    return {
        "status": "success",
        "message": "Login successful",
        "data": view.to_dict()
    }


@router.get("/profile", response_model=dict)
async def get_current_user_profile(
    provider: AuthProvider,
    repository: ProfileRepository,
    access_token: AccessTokenCookie = None
):
    """
    Get current user profile

    Resolves the user from the access token cookie
    """
    view = await AuthService.get_profile(access_token, provider, repository)

    return {
        "status": "success",
        "message": "User profile fetched successfully",
        "data": view.to_dict()
    }


@router.post("/refresh", response_model=dict)
async def refresh_session(
    response: Response,
    provider: AuthProvider,
    cookies: SessionCookies,
    refresh_token: RefreshTokenCookie = None,
    refresh_data: Optional[RefreshTokenSchema] = None
):
    """
    Refresh session

    Exchanges the refresh token cookie for a new pair of session cookies
    """
    session = await AuthService.refresh(refresh_token, provider)

    remember = refresh_data.remember if refresh_data else False
    cookies.apply(response, session.access_token, session.refresh_token, remember)

    return {"status": "success", "message": "Session refreshed"}


@router.post("/logout", response_model=dict)
async def logout_user(
    response: Response,
    provider: AuthProvider,
    cookies: SessionCookies,
    access_token: AccessTokenCookie = None
):
    """
    User logout

    Revokes the session with the auth provider and clears the session cookies
    """
    result = await AuthService.logout(access_token, provider)

    cookies.clear(response)

    return {
        "status": "success",
        "message": "Logout successful",
        "data": result
    }


@router.post("/register", response_model=dict, status_code=status.HTTP_201_CREATED)
async def register_user(
    registration_data: RegistrationSchema,
    provider: AuthProvider,
    repository: ProfileRepository
):
    """
    Register new user

    Creates the identity with the auth provider and stores the profile row
    """
    new_user = await AuthService.register(registration_data, provider, repository)

    logger.info(f"User registered successfully: {registration_data.email}")

    return {
        "status": "success",
        "message": "Registration successful",
        "data": new_user
    }


@router.post("/verify-email", response_model=dict)
async def verify_email(
    verification_data: EmailVerificationSchema,
    provider: AuthProvider
):
    """Verify user email address"""
    result = await AuthService.verify_email(
        verification_data.token_hash,
        verification_data.type,
        provider
    )

    return {
        "status": "success",
        "message": "Email verification successful",
        "data": result
    }


@router.post("/reset-password", response_model=dict)
async def reset_password(
    reset_data: ResetPasswordSchema,
    provider: AuthProvider,
    access_token: AccessTokenCookie = None
):
    """
    Reset password

    Sets a new password for the signed-in user (e.g. after following the
    recovery link)
    """
    result = await AuthService.reset_password(access_token, reset_data.new_password, provider)

    return {
        "status": "success",
        "message": "Password reset successful",
        "data": result
    }


@router.post("/forgot-password", response_model=dict)
async def forgot_password(
    forgot_data: ForgotPasswordSchema,
    provider: AuthProvider
):
    """Send password recovery email"""
    result = await AuthService.forgot_password(forgot_data.email, provider)

    return {
        "status": "success",
        "message": "Password recovery email sent",
        "data": result
    }
