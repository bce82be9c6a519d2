"""
Database models for Notebox.

Models included:
    - User: account with email/password authentication
    - Note: note content owned by a single user
"""

from .base import BaseModel
from .note import Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
]
