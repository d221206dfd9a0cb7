from sqlalchemy import Column, String, Boolean, DateTime, Integer, Text
from datetime import datetime

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, JSONType, generate_uuid


class Teaching(Base):
    """Tier-gated teaching (video, audio or article)"""
    __tablename__ = "teachings"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=True)
    description = Column(Text, nullable=True)
    speaker = Column(String(255), nullable=True)

    video_url = Column(Text, nullable=True)
    audio_url = Column(Text, nullable=True)
    body = Column(Text, nullable=True)  # Article text when there is no media
    thumbnail_url = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=True)

    tier_required = Column(String(20), default="free", nullable=False)
    tags = Column(JSONType, default=list)
    series_name = Column(String(255), nullable=True)

    is_featured = Column(Boolean, default=False, nullable=False)
    is_published = Column(Boolean, default=False, nullable=False, index=True)
    view_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Teaching {self.title}>"


class Sermon(Base):
    """Sermon archive entry, free for everyone"""
    __tablename__ = "sermons"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    speaker = Column(String(255), nullable=True)
    sermon_date = Column(DateTime, nullable=True)
    series_name = Column(String(255), nullable=True)

    video_url = Column(Text, nullable=True)
    audio_url = Column(Text, nullable=True)
    thumbnail_url = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=True)

    tags = Column(JSONType, default=list)
    is_featured = Column(Boolean, default=False, nullable=False)
    is_published = Column(Boolean, default=False, nullable=False, index=True)
    view_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Sermon {self.title}>"


class Resource(Base):
    """Downloadable resource (e-book)"""
    __tablename__ = "resources"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    author = Column(String(255), nullable=True)
    file_url = Column(Text, nullable=True)
    thumbnail_url = Column(Text, nullable=True)

    tier_required = Column(String(20), default="free", nullable=False)
    tags = Column(JSONType, default=list)
    is_featured = Column(Boolean, default=False, nullable=False)
    published = Column(Boolean, default=False, nullable=False, index=True)
    download_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Resource {self.title}>"
