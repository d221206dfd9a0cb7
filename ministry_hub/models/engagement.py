from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, UniqueConstraint
from datetime import datetime

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, generate_uuid


class TeachingProgress(Base):
    """Playback progress of a member on a teaching"""
    __tablename__ = "teaching_progress"
    __table_args__ = (
        UniqueConstraint("member_id", "teaching_id", name="uq_progress_member_teaching"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    teaching_id = Column(GUID, ForeignKey("teachings.id", ondelete="CASCADE"), nullable=False, index=True)

    progress_seconds = Column(Integer, default=0, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    last_watched_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<TeachingProgress {self.member_id}:{self.teaching_id} {self.progress_seconds}s>"


class TeachingBookmark(Base):
    __tablename__ = "teaching_bookmarks"
    __table_args__ = (
        UniqueConstraint("member_id", "teaching_id", name="uq_bookmark_member_teaching"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    teaching_id = Column(GUID, ForeignKey("teachings.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class WatchlistItem(Base):
    """Saved library item. content_id points at a teaching, sermon or resource."""
    __tablename__ = "watchlist_items"
    __table_args__ = (
        UniqueConstraint("member_id", "content_id", "content_type", name="uq_watchlist_member_content"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    content_id = Column(GUID, nullable=False)
    content_type = Column(String(20), nullable=False)  # teaching, sermon, resource
    added_at = Column(DateTime, default=datetime.utcnow, nullable=False)
