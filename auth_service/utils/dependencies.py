"""
FastAPI Dependencies
Provider, repository, cookie policy and session cookie dependencies
"""

from fastapi import Cookie, Depends
from typing import Optional, Annotated
import logging

from auth_service.config import get_settings
from auth_service.utils.cookies import CookiePolicy, ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from auth_service.utils.database import ProfileDatabase, get_database_connection
from auth_service.utils.supabase_client import SupabaseClient, get_supabase_client

logger = logging.getLogger(__name__)

_cookie_policy: Optional[CookiePolicy] = None
_profile_database: Optional[ProfileDatabase] = None


async def get_database():
    """Database connection dependency"""
    async with get_database_connection() as db:
        yield db


def get_auth_provider() -> SupabaseClient:
    """Hosted auth provider dependency"""
    return get_supabase_client()


def get_profile_repository() -> ProfileDatabase:
    """Profile repository dependency"""
    global _profile_database
    if _profile_database is None:
        _profile_database = ProfileDatabase()
    return _profile_database


def get_cookie_policy() -> CookiePolicy:
    """Session cookie policy, derived once from settings"""
    global _cookie_policy
    if _cookie_policy is None:
        _cookie_policy = CookiePolicy.for_settings(get_settings())
    return _cookie_policy


# Type aliases for cleaner dependency injection
AuthProvider = Annotated[SupabaseClient, Depends(get_auth_provider)]
ProfileRepository = Annotated[ProfileDatabase, Depends(get_profile_repository)]
SessionCookies = Annotated[CookiePolicy, Depends(get_cookie_policy)]
AccessTokenCookie = Annotated[Optional[str], Cookie(alias=ACCESS_TOKEN_COOKIE)]
RefreshTokenCookie = Annotated[Optional[str], Cookie(alias=REFRESH_TOKEN_COOKIE)]
