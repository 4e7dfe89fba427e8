"""
Data models for auth service
"""

from .user import ProviderUser, ProviderSession, ProfileRecord, ProfileView

__all__ = [
    "ProviderUser",
    "ProviderSession",
    "ProfileRecord",
    "ProfileView",
]
