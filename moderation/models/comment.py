"""
Comment model, moderated through renamed status columns.
"""
from sqlalchemy import Column, Integer, SmallInteger, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..behavior import ModerationMixin, ModerationOptions
from ..database import Base
from ..status import Status


class Comment(ModerationMixin, Base):
    __tablename__ = "comments"
    __moderation__ = ModerationOptions(
        status_attribute="state",
        moderated_by_attribute="moderator_id",
    )

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    body = Column(Text, nullable=False)
    state = Column(SmallInteger, nullable=False, default=int(Status.PENDING), index=True)
    moderator_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    post = relationship("Post", back_populates="comments")
    user = relationship("User", back_populates="comments", foreign_keys=[user_id])

    def before_moderation(self) -> bool:
        """Comments under a rejected post are frozen."""
        return self.post is None or not self.post.is_rejected()
