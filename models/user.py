"""User data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass
class User:
    """
    A registered user.

    Identity fields (username, email) never change after signup; only
    plan, display name and the linked identity-provider uid do.
    """

    username: str
    email: str
    password_hash: str = ""
    """Empty for users created through the identity provider."""

    name: Optional[str] = None
    external_uid: Optional[str] = None
    plan: str = "free"

    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Public representation (no password hash)."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "plan": self.plan,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
