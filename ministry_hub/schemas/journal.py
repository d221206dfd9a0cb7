from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import datetime

from ministry_hub.models.journal import JournalEntryType


class JournalEntryCreate(BaseModel):
    entry_type: JournalEntryType = JournalEntryType.REFLECTION
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    transcription: Optional[str] = None
    audio_url: Optional[str] = None
    scripture_references: Optional[List[str]] = None
    mood: Optional[str] = Field(None, max_length=50)
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None


class JournalEntryUpdate(BaseModel):
    entry_type: Optional[JournalEntryType] = None
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    transcription: Optional[str] = None
    audio_url: Optional[str] = None
    scripture_references: Optional[List[str]] = None
    mood: Optional[str] = Field(None, max_length=50)
    tags: Optional[List[str]] = None
    is_private: Optional[bool] = None


class JournalEntryResponse(BaseModel):
    id: str
    entry_type: str
    title: Optional[str] = None
    content: Optional[str] = None
    transcription: Optional[str] = None
    audio_url: Optional[str] = None
    ai_summary: Optional[str] = None
    ai_insights: Optional[Any] = None
    scripture_references: Optional[List[str]] = None
    mood: Optional[str] = None
    tags: Optional[List[str]] = None
    is_private: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JournalListResponse(BaseModel):
    entries: List[JournalEntryResponse]
    total: int
    has_more: bool
