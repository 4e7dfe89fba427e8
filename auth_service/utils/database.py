"""
Database Connection Utilities
Connects to the profile database for user profile rows
"""

import asyncpg
from typing import Optional
import logging
from contextlib import asynccontextmanager

from auth_service.config import get_settings
from auth_service.models.user import ProfileRecord
from auth_service.utils.errors import DuplicateProfileError, ProfilePersistenceError

logger = logging.getLogger(__name__)

# Database connection pool
_pool: Optional[asyncpg.Pool] = None

async def init_database():
    """Initialize database connection pool"""
    global _pool

    settings = get_settings()

    try:
        _pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout
        )
        logger.info("Database connection pool initialized successfully")

        # Test connection
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
            logger.info("Database connection test successful")

    except Exception as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise

async def get_database_pool() -> asyncpg.Pool:
    """Get database connection pool"""
    global _pool
    if _pool is None:
        await init_database()
    return _pool

@asynccontextmanager
async def get_database_connection():
    """Get database connection from pool"""
    pool = await get_database_pool()
    async with pool.acquire() as connection:
        yield connection

async def close_database():
    """Close database connection pool"""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None
        logger.info("Database connection pool closed")


class ProfileDatabase:
    """Database operations on the user profile table"""

    def __init__(self, table: Optional[str] = None, pool: Optional[asyncpg.Pool] = None):
        self.table = table or get_settings().profile_table
        self._pool = pool

    @asynccontextmanager
    async def _connection(self):
        if self._pool is not None:
            async with self._pool.acquire() as conn:
                yield conn
        else:
            async with get_database_connection() as conn:
                yield conn

    async def get_profile_by_email(self, email: str) -> Optional[ProfileRecord]:
        """
        Get profile row by email address

        Args:
            email: User email

        Returns:
            ProfileRecord or None
        """
        query = f"""
        SELECT id, user_id, email, fullname, role, avatar, created_at, updated_at
        FROM "{self.table}"
        WHERE email = $1
        LIMIT 1
        """

        async with self._connection() as conn:
            result = await conn.fetchrow(query, email)

        if result:
            return ProfileRecord.from_row(dict(result))
        return None

    async def create_profile(self, record: ProfileRecord) -> ProfileRecord:
        """
        Insert a new profile row

        Args:
            record: Profile data; id is assigned by the database

        Returns:
            ProfileRecord: The record with its database id

        Raises:
            ProfilePersistenceError: If the insert fails
            DuplicateProfileError: If a row for the user or email already exists
        """
        query = f"""
        INSERT INTO "{self.table}" (user_id, email, fullname, role, created_at, updated_at)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING id
        """

        try:
            async with self._connection() as conn:
                profile_id = await conn.fetchval(
                    query,
                    record.user_id,
                    record.email,
                    record.fullname,
                    record.role,
                    record.created_at,
                    record.updated_at
                )
        except asyncpg.exceptions.UniqueViolationError as e:
            logger.warning(f"Profile already exists for {record.email}: {e}")
            raise DuplicateProfileError("User profile already exists", details=str(e)) from e
        except Exception as e:
            logger.error(f"Profile insert failed for {record.email}: {e}")
            raise ProfilePersistenceError("Failed to create user profile", details=str(e)) from e

        record.id = profile_id
        logger.info(f"Profile created with ID: {profile_id}")
        return record
