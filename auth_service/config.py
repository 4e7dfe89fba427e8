"""
Configuration Management
Environment-based settings for the auth service
"""

import re
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # App config
    app_name: str = "iLocal Auth Service"
    app_version: str = "1.0.0"
    node_env: str = "development"
    debug: bool = False
    api_prefix: str = "/api/v01/auth"

    # Logging
    log_level: str = "INFO"
    log_format: str = "default"
    logging_config_path: Optional[str] = None

    # Public base URL of this backend, used for the cookie domain
    app_backend: str = "http://localhost:8000"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_key: str = ""
    password_reset_redirect_url: Optional[str] = None

    # Database - service-specific user pattern
    auth_database_url: Optional[str] = None
    db_service_user: str = "auth_service"
    db_service_password: str = ""
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    db_name: str = "ilocal"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_command_timeout: int = 60
    profile_table: str = "iLocalUsers"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True
    )

    @field_validator('profile_table')
    @classmethod
    def validate_profile_table(cls, v):
        # Interpolated into SQL as a quoted identifier
        if not re.fullmatch(r'[A-Za-z_][A-Za-z0-9_]*', v):
            raise ValueError('profile_table must be a plain SQL identifier')
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.node_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.node_env.lower() == "development"

    @property
    def cookie_domain(self) -> Optional[str]:
        """
        Bare hostname of the backend for session cookies

        Scheme and port are stripped. Local development leaves the domain
        unset since cookies are not shared cross-site there anyway.
        """
        if not self.is_production:
            return None
        host = re.sub(r'^https?://', '', self.app_backend)
        host = host.split('/')[0].split(':')[0]
        return host or None

    @property
    def database_url(self) -> str:
        """Build PostgreSQL connection string"""
        if self.auth_database_url:
            return self.auth_database_url
        return (
            f"postgresql://{self.db_service_user}:{self.db_service_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.db_name}"
        )

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"Environment: {self.node_env}")
        logger.info(f"Cookie domain: {self.cookie_domain or '(unset)'}")
        logger.info(f"Database Host: {self.postgres_host}:{self.postgres_port}/{self.db_name}")
        logger.info(f"Profile table: {self.profile_table}")
        logger.info(f"Supabase: {'configured' if self.supabase_url else 'not configured'}")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
