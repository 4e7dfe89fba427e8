"""
Session Cookie Policy Tests
"""

from dataclasses import FrozenInstanceError

import pytest
from fastapi import Response

from auth_service.config import Settings
from auth_service.utils.cookies import (
    CookiePolicy, ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
)


class TestCookiePolicy:
    def test_remembered_lifetimes(self):
        lifetimes = CookiePolicy.max_age_ms(True)
        assert lifetimes[ACCESS_TOKEN_COOKIE] == 86_400_000
        assert lifetimes[REFRESH_TOKEN_COOKIE] == 2_592_000_000

    def test_default_lifetimes(self):
        lifetimes = CookiePolicy.max_age_ms(False)
        assert lifetimes[ACCESS_TOKEN_COOKIE] == 900_000
        assert lifetimes[REFRESH_TOKEN_COOKIE] == 604_800_000

    def test_session_cookies_share_attributes(self):
        access, refresh = CookiePolicy(domain="api.ilocal.app").session_cookies("AT1", "RT1", remember=True)

        assert (access.name, access.value) == ("accesstoken", "AT1")
        assert (refresh.name, refresh.value) == ("refreshtoken", "RT1")
        assert access.max_age_ms == 86_400_000
        assert refresh.max_age_ms == 2_592_000_000
        for cookie in (access, refresh):
            assert cookie.attributes["httponly"] is True
            assert cookie.attributes["secure"] is True
            assert cookie.attributes["samesite"] == "none"
            assert cookie.attributes["path"] == "/"
            assert cookie.attributes["domain"] == "api.ilocal.app"

    def test_policy_is_immutable(self):
        policy = CookiePolicy()
        with pytest.raises(FrozenInstanceError):
            policy.domain = "evil.example"

    def test_apply_writes_set_cookie_headers(self):
        response = Response()
        CookiePolicy().apply(response, "AT1", "RT1")

        headers = [value.decode().lower() for name, value in response.raw_headers if name == b"set-cookie"]
        assert len(headers) == 2
        assert headers[0].startswith("accesstoken=at1")
        assert "max-age=900" in headers[0]
        assert headers[1].startswith("refreshtoken=rt1")
        assert "max-age=604800" in headers[1]

    def test_clear_expires_both_cookies(self):
        response = Response()
        CookiePolicy().clear(response)

        headers = [value.decode().lower() for name, value in response.raw_headers if name == b"set-cookie"]
        assert len(headers) == 2
        for header in headers:
            assert "max-age=0" in header
            assert "samesite=none" in header

    def test_for_settings_uses_production_domain(self):
        settings = Settings(node_env="production", app_backend="https://api.ilocal.app:8443")
        assert CookiePolicy.for_settings(settings).domain == "api.ilocal.app"

    def test_for_settings_leaves_domain_unset_in_development(self):
        settings = Settings(node_env="development", app_backend="http://localhost:8000")
        policy = CookiePolicy.for_settings(settings)
        assert policy.domain is None
        assert policy.secure is True
        assert policy.samesite == "none"
