from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from ministry_hub.models.member import MemberTier


# ============================================
# Teachings
# ============================================

class TeachingBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    speaker: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    body: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    tier_required: MemberTier = MemberTier.FREE
    tags: List[str] = []
    series_name: Optional[str] = None
    is_featured: bool = False
    is_published: bool = False


class TeachingCreate(TeachingBase):
    pass


class TeachingUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = None
    description: Optional[str] = None
    speaker: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    body: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    tier_required: Optional[MemberTier] = None
    tags: Optional[List[str]] = None
    series_name: Optional[str] = None
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None


class TeachingResponse(BaseModel):
    id: str
    title: str
    slug: Optional[str] = None
    description: Optional[str] = None
    speaker: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    body: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_minutes: Optional[int] = None
    tier_required: str
    tags: Optional[List[str]] = None
    series_name: Optional[str] = None
    is_featured: bool
    is_published: bool
    view_count: int
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================
# Sermons
# ============================================

class SermonCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    speaker: Optional[str] = None
    sermon_date: Optional[datetime] = None
    series_name: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    tags: List[str] = []
    is_featured: bool = False
    is_published: bool = False


class SermonUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    speaker: Optional[str] = None
    sermon_date: Optional[datetime] = None
    series_name: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None


class SermonResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    speaker: Optional[str] = None
    sermon_date: Optional[datetime] = None
    series_name: Optional[str] = None
    video_url: Optional[str] = None
    audio_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_minutes: Optional[int] = None
    tags: Optional[List[str]] = None
    is_featured: bool
    is_published: bool
    view_count: int
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================
# Resources (e-books)
# ============================================

class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    author: Optional[str] = None
    file_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tier_required: MemberTier = MemberTier.FREE
    tags: List[str] = []
    is_featured: bool = False
    published: bool = False


class ResourceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    author: Optional[str] = None
    file_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tier_required: Optional[MemberTier] = None
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    published: Optional[bool] = None


class ResourceResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    author: Optional[str] = None
    file_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tier_required: str
    tags: Optional[List[str]] = None
    is_featured: bool
    published: bool
    download_count: int
    created_at: datetime

    class Config:
        from_attributes = True


# ============================================
# Progress & bookmarks
# ============================================

class ProgressUpdate(BaseModel):
    teaching_id: str
    progress_seconds: int = Field(0, ge=0)
    completed: bool = False


class ProgressResponse(BaseModel):
    id: str
    teaching_id: str
    progress_seconds: int
    completed: bool
    last_watched_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BookmarkCreate(BaseModel):
    teaching_id: str


class BookmarkResponse(BaseModel):
    id: str
    teaching_id: str
    created_at: datetime

    class Config:
        from_attributes = True
