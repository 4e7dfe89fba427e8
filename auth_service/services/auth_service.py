"""
Authentication Service
Orchestrates the auth provider and the profile repository for each endpoint
"""

from typing import Dict, Optional, Tuple
import logging

from shared.schemas.user import LoginSchema, RegistrationSchema, UserRole
from shared.utils.logger import get_audit_logger

from auth_service.models.user import ProfileRecord, ProfileView, ProviderSession, ProviderUser
from auth_service.utils.database import ProfileDatabase
from auth_service.utils.errors import (
    AuthenticationError, BadRequestError, DuplicateProfileError, ProviderError,
    ProfilePersistenceError, TokenGenerationError
)
from auth_service.utils.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)
audit = get_audit_logger()


class AuthService:
    """User authentication service"""

    @staticmethod
    async def load_profile_view(
        email: str,
        user: ProviderUser,
        repository: ProfileDatabase
    ) -> ProfileView:
        """
        Read the profile row and merge it with the provider identity

        The read is best-effort: a missing row, or a failed read, yields the
        default role, an empty name and no avatar.
        """
        record: Optional[ProfileRecord] = None
        try:
            record = await repository.get_profile_by_email(email)
        except Exception as e:
            logger.warning(f"Profile lookup failed for {email}, using defaults: {e}")

        if record is None:
            logger.info(f"No profile row for {email}")
        return ProfileView.assemble(email, user, record)

    @staticmethod
    async def login(
        credentials: LoginSchema,
        provider: SupabaseClient,
        repository: ProfileDatabase
    ) -> Tuple[ProfileView, ProviderSession]:
        """
        Authenticate a user

        Args:
            credentials: Validated login body
            provider: Auth provider adapter
            repository: Profile repository

        Returns:
            tuple: Profile view and the complete session token pair
        """
        try:
            user, session = await provider.sign_in(credentials.email, credentials.password)
        except ProviderError as e:
            audit.log_user_action(credentials.email, "login", success=False)
            if not e.rejected:
                raise
            raise AuthenticationError("Invalid email or password", details=e.message) from e

        if session is None or not session.is_complete():
            logger.error(f"Auth provider returned no usable session for {credentials.email}")
            raise TokenGenerationError("Token generation failed")

        view = await AuthService.load_profile_view(credentials.email, user, repository)
        audit.log_user_action(credentials.email, "login")
        return view, session

    @staticmethod
    async def get_profile(
        access_token: Optional[str],
        provider: SupabaseClient,
        repository: ProfileDatabase
    ) -> ProfileView:
        """Resolve the current user from the access token cookie"""
        if not access_token:
            raise AuthenticationError("Unauthorized")

        try:
            user = await provider.get_user(access_token)
        except ProviderError as e:
            if not e.rejected:
                raise
            raise AuthenticationError("Invalid token", details=e.message) from e

        if user is None:
            raise AuthenticationError("Invalid token")
        if not user.email:
            raise AuthenticationError("Invalid user email")

        return await AuthService.load_profile_view(user.email, user, repository)

    @staticmethod
    async def refresh(refresh_token: Optional[str], provider: SupabaseClient) -> ProviderSession:
        """Exchange the refresh token cookie for a new token pair"""
        if not refresh_token:
            raise AuthenticationError("Unauthorized: No refresh token")

        try:
            session = await provider.refresh_session(refresh_token)
        except ProviderError as e:
            raise AuthenticationError("Invalid or expired refresh token", details=e.message) from e

        if session is None or not session.is_complete():
            raise AuthenticationError("Invalid or expired refresh token")
        return session

    @staticmethod
    async def logout(access_token: Optional[str], provider: SupabaseClient):
        """Revoke the session on the provider side"""
        result = await provider.sign_out(access_token)
        logger.info("User logged out")
        return result

    @staticmethod
    async def register(
        registration: RegistrationSchema,
        provider: SupabaseClient,
        repository: ProfileDatabase
    ) -> Dict:
        """
        Register a new user

        Creates the provider identity, then the profile row. If the row cannot
        be written the provider identity is deleted again, unless the row
        already exists: sign-up hands back the existing identity for an
        unconfirmed email, and that account must survive.

        Returns:
            dict: The inserted profile row
        """
        try:
            user = await provider.sign_up(
                registration.email,
                registration.password,
                metadata={'fullname': registration.fullname, 'isUserVerified': False}
            )
        except ProviderError as e:
            audit.log_user_action(registration.email, "register", success=False)
            if not e.rejected:
                raise
            raise BadRequestError(e.message, details=e.details) from e

        record = ProfileRecord(
            user_id=user.id,
            email=registration.email,
            fullname=registration.fullname,
            role=UserRole.USER.value,
            created_at=user.created_at,
            updated_at=user.updated_at
        )

        try:
            await repository.create_profile(record)
        except DuplicateProfileError as e:
            audit.log_user_action(registration.email, "register", success=False)
            raise ProfilePersistenceError("Registration failed", details=e.details) from e
        except ProfilePersistenceError as e:
            await AuthService._discard_identity(user.id, provider, registration.email, repository)
            audit.log_user_action(registration.email, "register", success=False)
            raise ProfilePersistenceError("Registration failed", details=e.details) from e

        audit.log_user_action(registration.email, "register")
        return record.to_insert_dict()

    @staticmethod
    async def _discard_identity(
        user_id: str,
        provider: SupabaseClient,
        email: str,
        repository: ProfileDatabase
    ):
        """Best-effort removal of an identity whose profile row was not written"""
        try:
            existing = await repository.get_profile_by_email(email)
        except Exception as e:
            logger.error(f"Cannot confirm {email} has no profile, keeping provider identity {user_id}: {e}")
            return
        if existing is not None:
            logger.warning(f"Profile row exists for {email}, keeping provider identity {user_id}")
            return

        try:
            logger.info(f"Attempting to clean up provider identity {user_id} after profile insert failure")
            await provider.delete_user(user_id)
        except ProviderError as cleanup_error:
            logger.error(f"Failed to clean up provider identity {user_id}: {cleanup_error.message}")

    @staticmethod
    async def verify_email(token_hash: str, otp_type: str, provider: SupabaseClient) -> Dict:
        """Confirm an email address"""
        result = await provider.verify_email(token_hash, otp_type)
        logger.info(f"Email verified for: {result.get('email')}")
        return result

    @staticmethod
    async def reset_password(
        access_token: Optional[str],
        new_password: Optional[str],
        provider: SupabaseClient
    ) -> Dict:
        """Set a new password for the user behind the access token cookie"""
        if not new_password:
            raise BadRequestError("New password is required")
        if not access_token:
            raise AuthenticationError("Unauthorized")

        try:
            user = await provider.get_user(access_token)
        except ProviderError as e:
            if not e.rejected:
                raise
            raise AuthenticationError("Invalid token", details=e.message) from e
        if user is None:
            raise AuthenticationError("Invalid token")

        result = await provider.update_password(user.id, new_password)
        audit.log_user_action(user.email or user.id, "reset_password")
        return result

    @staticmethod
    async def forgot_password(email: Optional[str], provider: SupabaseClient):
        """Send a password recovery email"""
        if not email:
            raise BadRequestError("Email is required")

        result = await provider.send_password_reset(email)
        audit.log_user_action(email, "forgot_password")
        return result
