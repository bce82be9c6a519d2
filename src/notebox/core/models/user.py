"""
User model for authentication.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .note import Note


class User(BaseModel):
    """User account with email/password auth."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    # stored trimmed and lower-cased, see normalize_email
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    notes: Mapped[List["Note"]] = relationship(
        "Note",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
        CheckConstraint("length(email) <= 320", name="ck_users_email_len"),
        Index("idx_users_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()
