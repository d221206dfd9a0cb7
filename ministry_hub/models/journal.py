from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, JSONType, generate_uuid


class JournalEntryType(str, enum.Enum):
    PRAYER = "prayer"
    REFLECTION = "reflection"
    GRATITUDE = "gratitude"
    VOICE = "voice"


class JournalEntry(Base):
    """Private prayer journal entry"""
    __tablename__ = "journal_entries"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)

    entry_type = Column(String(20), default=JournalEntryType.REFLECTION.value, nullable=False)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)

    # Voice entries
    transcription = Column(Text, nullable=True)
    audio_url = Column(Text, nullable=True)

    # AI reflection
    ai_summary = Column(Text, nullable=True)
    ai_insights = Column(JSONType, nullable=True)

    scripture_references = Column(JSONType, default=list)
    mood = Column(String(50), nullable=True)
    tags = Column(JSONType, default=list)
    is_private = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<JournalEntry {self.entry_type} {self.id}>"
