"""
API routes for auth service
"""

from . import auth

__all__ = ["auth"]
