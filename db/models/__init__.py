"""
Database models initialization.
"""

from .base import Base
from .general import BlogPost, User
from .superadmin import RoleAccess

__all__ = [
    "Base",
    "BlogPost",
    "RoleAccess",
    "User",
]
