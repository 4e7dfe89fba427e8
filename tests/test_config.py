"""
Configuration Tests
"""

import pytest
from pydantic import ValidationError

from auth_service.config import Settings


class TestSettings:
    @pytest.mark.parametrize("backend,expected", [
        ("https://api.ilocal.app", "api.ilocal.app"),
        ("http://api.ilocal.app:8080", "api.ilocal.app"),
        ("https://api.ilocal.app/v1", "api.ilocal.app"),
        ("api.ilocal.app:443", "api.ilocal.app"),
    ])
    def test_cookie_domain_in_production(self, backend, expected):
        settings = Settings(node_env="production", app_backend=backend)
        assert settings.is_production
        assert settings.cookie_domain == expected

    def test_cookie_domain_unset_outside_production(self):
        settings = Settings(node_env="staging", app_backend="https://api.ilocal.app")
        assert not settings.is_production
        assert settings.cookie_domain is None

    def test_database_url_from_parts(self):
        settings = Settings(
            db_service_user="svc",
            db_service_password="pw",
            postgres_host="db",
            postgres_port=5433,
            db_name="ilocal"
        )
        assert settings.database_url == "postgresql://svc:pw@db:5433/ilocal"

    def test_database_url_override(self):
        settings = Settings(auth_database_url="postgresql://u:p@h/d")
        assert settings.database_url == "postgresql://u:p@h/d"

    def test_profile_table_must_be_identifier(self):
        with pytest.raises(ValidationError):
            Settings(profile_table='users"; DROP TABLE x; --')

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.node_env = "production"
