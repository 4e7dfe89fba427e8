"""
Session Cookie Policy
Names, lifetimes and attributes of the access/refresh token cookies
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fastapi import Response

from auth_service.config import Settings

ACCESS_TOKEN_COOKIE = "accesstoken"
REFRESH_TOKEN_COOKIE = "refreshtoken"

# Lifetimes in milliseconds
ACCESS_TOKEN_MAX_AGE_MS = 900_000
ACCESS_TOKEN_REMEMBER_MAX_AGE_MS = 86_400_000
REFRESH_TOKEN_MAX_AGE_MS = 604_800_000
REFRESH_TOKEN_REMEMBER_MAX_AGE_MS = 2_592_000_000


@dataclass(frozen=True)
class SessionCookie:
    """A single Set-Cookie instruction"""
    name: str
    value: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def max_age_ms(self) -> int:
        return self.attributes["max_age"] * 1000


@dataclass(frozen=True)
class CookiePolicy:
    """Attributes shared by both session cookies"""
    domain: Optional[str] = None
    httponly: bool = True
    secure: bool = True
    samesite: str = "none"
    path: str = "/"

    @classmethod
    def for_settings(cls, settings: Settings) -> "CookiePolicy":
        return cls(domain=settings.cookie_domain)

    @staticmethod
    def max_age_ms(remember: bool) -> Dict[str, int]:
        """Cookie lifetimes in milliseconds keyed by cookie name"""
        if remember:
            return {
                ACCESS_TOKEN_COOKIE: ACCESS_TOKEN_REMEMBER_MAX_AGE_MS,
                REFRESH_TOKEN_COOKIE: REFRESH_TOKEN_REMEMBER_MAX_AGE_MS,
            }
        return {
            ACCESS_TOKEN_COOKIE: ACCESS_TOKEN_MAX_AGE_MS,
            REFRESH_TOKEN_COOKIE: REFRESH_TOKEN_MAX_AGE_MS,
        }

    def base_attributes(self) -> Dict[str, Any]:
        return {
            "httponly": self.httponly,
            "secure": self.secure,
            "samesite": self.samesite,
            "path": self.path,
            "domain": self.domain,
        }

    def session_cookies(self, access_token: str, refresh_token: str, remember: bool = False) -> List[SessionCookie]:
        """Build the access/refresh cookie pair for a session"""
        lifetimes = self.max_age_ms(remember)
        cookies = []
        for name, value in ((ACCESS_TOKEN_COOKIE, access_token), (REFRESH_TOKEN_COOKIE, refresh_token)):
            attributes = self.base_attributes()
            # Set-Cookie Max-Age is expressed in seconds
            attributes["max_age"] = lifetimes[name] // 1000
            cookies.append(SessionCookie(name=name, value=value, attributes=attributes))
        return cookies

    def apply(self, response: Response, access_token: str, refresh_token: str, remember: bool = False) -> None:
        """Write both session cookies onto the response"""
        for cookie in self.session_cookies(access_token, refresh_token, remember):
            response.set_cookie(key=cookie.name, value=cookie.value, **cookie.attributes)

    def clear(self, response: Response) -> None:
        """Expire both session cookies"""
        for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
            response.delete_cookie(name, **self.base_attributes())
