"""
User Models
Provider identity, profile row and the assembled profile view
"""

from typing import Optional, Dict, Any
from datetime import datetime
from dataclasses import dataclass, field

DEFAULT_ROLE = "USER"


@dataclass
class ProviderUser:
    """Identity held by the hosted auth provider"""
    id: str
    email: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user_metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_verified(self) -> bool:
        return bool(self.user_metadata.get('isUserVerified', False))

    @classmethod
    def from_supabase(cls, user) -> "ProviderUser":
        return cls(
            id=str(user.id),
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
            user_metadata=dict(user.user_metadata or {})
        )


@dataclass
class ProviderSession:
    """Token pair issued by the provider"""
    access_token: Optional[str]
    refresh_token: Optional[str]
    expires_at: Optional[int] = None

    def is_complete(self) -> bool:
        """Both tokens present and non-empty"""
        return bool(self.access_token) and bool(self.refresh_token)

    @classmethod
    def from_supabase(cls, session) -> "ProviderSession":
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at
        )


@dataclass
class ProfileRecord:
    """Profile table row"""
    user_id: str
    email: str
    fullname: str
    role: str = DEFAULT_ROLE
    avatar: Optional[str] = None
    id: Optional[Any] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ProfileRecord":
        return cls(
            id=row.get('id'),
            user_id=row.get('user_id'),
            email=row.get('email'),
            fullname=row.get('fullname') or "",
            role=row.get('role') or DEFAULT_ROLE,
            avatar=row.get('avatar'),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    def to_insert_dict(self) -> Dict[str, Any]:
        """Shape written at registration and echoed back to the client"""
        return {
            'user_id': self.user_id,
            'email': self.email,
            'fullname': self.fullname,
            'role': self.role,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }


@dataclass
class ProfileView:
    """Per-request merge of provider identity and profile row"""
    id: Optional[Any]
    email: str
    role: str
    fullname: str
    avatar: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    is_user_verified: bool

    @classmethod
    def assemble(cls, email: str, user: ProviderUser, record: Optional[ProfileRecord]) -> "ProfileView":
        """
        Combine provider and repository fields

        A missing profile row degrades to default role, empty name and no avatar.
        """
        return cls(
            id=record.id if record else None,
            email=email,
            role=record.role if record else DEFAULT_ROLE,
            fullname=record.fullname if record else "",
            avatar=record.avatar if record else None,
            created_at=user.created_at,
            updated_at=user.updated_at,
            is_user_verified=user.is_verified
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'id': self.id,
            'email': self.email,
            'role': self.role,
            'fullname': self.fullname,
            'avatar': self.avatar,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'isUserVerified': self.is_user_verified
        }
