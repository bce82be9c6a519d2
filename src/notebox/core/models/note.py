# Note model for user content
import uuid
from typing import TYPE_CHECKING, Iterable, List

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID, TagListType

if TYPE_CHECKING:
    from .user import User


class Note(BaseModel):
    """Note owned by exactly one user."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[List[str]] = mapped_column(TagListType, nullable=False, default=list)
    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # owner reference, never changed after insert
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="notes", lazy="raise")

    __table_args__ = (
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
        Index("idx_notes_owner_id", "owner_id"),
        # listing order: pinned first, then most recently modified
        Index("idx_notes_owner_pinned_updated", "owner_id", "is_pinned", "updated_at"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note is owned by the specified user."""
        return self.owner_id == user_id

    @staticmethod
    def normalize_tags(tags: Iterable[str]) -> List[str]:
        """Trim tags, drop blanks and duplicates, keep first-seen order."""
        seen = set()
        result = []
        for tag in tags or []:
            clean = str(tag).strip()
            if clean and clean not in seen:
                seen.add(clean)
                result.append(clean)
        return result
