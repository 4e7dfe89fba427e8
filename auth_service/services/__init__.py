"""
Business logic services for auth service
"""

from .auth_service import AuthService

__all__ = ["AuthService"]
