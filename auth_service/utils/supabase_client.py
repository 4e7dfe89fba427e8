"""
Supabase Client Configuration
Adapter over Supabase Auth for sign-in, sign-up and session management
"""

import asyncio
from typing import Any, Dict, Optional, Tuple
import logging

from supabase import create_client, Client, AuthError
from supabase.client import ClientOptions

from auth_service.config import get_settings
from auth_service.models.user import ProviderUser, ProviderSession
from auth_service.utils.errors import ProviderError

logger = logging.getLogger(__name__)


def _provider_error(action: str, e: Exception) -> ProviderError:
    """Translate a client exception into a ProviderError"""
    if isinstance(e, AuthError):
        status = getattr(e, 'status', None)
        return ProviderError(
            e.message,
            details=f"{action} rejected by auth provider (status {status})",
            rejected=True
        )
    return ProviderError(f"Auth provider {action} failed", details=str(e))


class SupabaseClient:
    """Supabase client wrapper for authentication services"""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        service_key: Optional[str] = None,
        reset_redirect_url: Optional[str] = None
    ):
        settings = get_settings()
        self.url: str = url if url is not None else settings.supabase_url
        self.key: str = key if key is not None else settings.supabase_anon_key
        self.service_key: str = service_key if service_key is not None else settings.supabase_service_key
        self.reset_redirect_url = reset_redirect_url or settings.password_reset_redirect_url
        self.client: Optional[Client] = None
        self.admin_client: Optional[Client] = None

        # The client is shared by all requests, so it must not hold a user session
        options = ClientOptions(auto_refresh_token=False, persist_session=False)

        if self.url and self.key:
            try:
                self.client = create_client(self.url, self.key, options=options)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize Supabase client: {e}")
                self.client = None
        else:
            logger.warning("Supabase credentials not found in environment")

        if self.url and self.service_key:
            try:
                self.admin_client = create_client(self.url, self.service_key, options=options)
            except Exception as e:
                logger.error(f"Failed to initialize Supabase admin client: {e}")
                self.admin_client = None

    def is_available(self) -> bool:
        """Check if Supabase is available and configured"""
        return self.client is not None

    def _require_client(self) -> Client:
        if not self.client:
            raise ProviderError("Supabase client not available")
        return self.client

    def _require_admin(self) -> Client:
        if not self.admin_client:
            raise ProviderError("Supabase service key not configured")
        return self.admin_client

    async def sign_in(self, email: str, password: str) -> Tuple[ProviderUser, Optional[ProviderSession]]:
        """
        Exchange credentials for a user and session

        Args:
            email: User email
            password: User password

        Returns:
            tuple: Provider user and session (session may be None)
        """
        client = self._require_client()

        try:
            response = await asyncio.to_thread(
                client.auth.sign_in_with_password,
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.warning(f"Supabase sign in error for {email}: {e}")
            raise _provider_error("sign in", e) from e

        if not response.user:
            raise ProviderError("Invalid credentials", rejected=True)

        session = ProviderSession.from_supabase(response.session) if response.session else None
        return ProviderUser.from_supabase(response.user), session

    async def sign_up(self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None) -> ProviderUser:
        """
        Create a new identity

        Args:
            email: User email
            password: User password
            metadata: Stored as the user's user_metadata

        Returns:
            ProviderUser: The created identity
        """
        client = self._require_client()

        try:
            response = await asyncio.to_thread(
                client.auth.sign_up,
                {
                    "email": email,
                    "password": password,
                    "options": {"data": metadata or {}}
                }
            )
        except Exception as e:
            logger.error(f"Supabase sign up error for {email}: {e}")
            raise _provider_error("sign up", e) from e

        if not response.user:
            raise ProviderError("Failed to create account", rejected=True)

        logger.info(f"User signed up with auth provider: {email}")
        return ProviderUser.from_supabase(response.user)

    async def get_user(self, access_token: str) -> Optional[ProviderUser]:
        """Resolve the identity behind an access token"""
        client = self._require_client()

        try:
            response = await asyncio.to_thread(client.auth.get_user, access_token)
        except Exception as e:
            logger.warning(f"Token verification error: {e}")
            raise _provider_error("token verification", e) from e

        if not response or not response.user:
            return None
        return ProviderUser.from_supabase(response.user)

    async def refresh_session(self, refresh_token: str) -> Optional[ProviderSession]:
        """Exchange a refresh token for a new session"""
        client = self._require_client()

        try:
            response = await asyncio.to_thread(client.auth.refresh_session, refresh_token)
        except Exception as e:
            logger.warning(f"Session refresh error: {e}")
            raise _provider_error("session refresh", e) from e

        if not response.session:
            return None
        return ProviderSession.from_supabase(response.session)

    async def sign_out(self, access_token: Optional[str] = None) -> None:
        """
        Revoke the session behind an access token

        Without a token, or without a service key, there is no server-side
        session to revoke.
        """
        if not access_token or not self.admin_client:
            return None

        try:
            await asyncio.to_thread(self.admin_client.auth.admin.sign_out, access_token)
        except Exception as e:
            logger.error(f"Supabase sign out error: {e}")
            raise _provider_error("sign out", e) from e
        return None

    async def delete_user(self, user_id: str) -> None:
        """Delete an identity (requires the service key)"""
        admin = self._require_admin()

        try:
            await asyncio.to_thread(admin.auth.admin.delete_user, user_id)
        except Exception as e:
            logger.error(f"Supabase delete user error for {user_id}: {e}")
            raise _provider_error("delete user", e) from e
        logger.info(f"Deleted auth provider identity: {user_id}")

    async def verify_email(self, token_hash: str, otp_type: str = "email") -> Dict[str, Any]:
        """Confirm an email address with the token from the verification link"""
        client = self._require_client()

        try:
            response = await asyncio.to_thread(
                client.auth.verify_otp,
                {"token_hash": token_hash, "type": otp_type}
            )
        except Exception as e:
            logger.warning(f"Email verification error: {e}")
            raise _provider_error("email verification", e) from e

        user = ProviderUser.from_supabase(response.user) if response.user else None
        return {
            "user_id": user.id if user else None,
            "email": user.email if user else None
        }

    async def update_password(self, user_id: str, new_password: str) -> Dict[str, Any]:
        """Set a new password for an identity (requires the service key)"""
        admin = self._require_admin()

        try:
            response = await asyncio.to_thread(
                admin.auth.admin.update_user_by_id,
                user_id,
                {"password": new_password}
            )
        except Exception as e:
            logger.warning(f"Password update error for {user_id}: {e}")
            raise _provider_error("password update", e) from e

        user = response.user if response else None
        return {
            "user_id": str(user.id) if user else user_id,
            "email": user.email if user else None
        }

    async def send_password_reset(self, email: str) -> None:
        """Send a password recovery email"""
        client = self._require_client()
        options = {"redirect_to": self.reset_redirect_url} if self.reset_redirect_url else {}

        try:
            await asyncio.to_thread(client.auth.reset_password_for_email, email, options)
        except Exception as e:
            logger.error(f"Password reset error: {e}")
            raise _provider_error("password reset", e) from e

        logger.info(f"Password reset email requested for: {email}")
        return None


# Global Supabase client instance
_supabase_client: Optional[SupabaseClient] = None


def get_supabase_client() -> SupabaseClient:
    """Get Supabase client instance"""
    global _supabase_client
    if _supabase_client is None:
        _supabase_client = SupabaseClient()
    return _supabase_client
