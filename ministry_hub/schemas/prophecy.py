from pydantic import BaseModel
from typing import Optional, List, Union
from datetime import datetime

from ministry_hub.models.prophecy import PrayerRequestStatus


class ProphecyTrackingUpdate(BaseModel):
    prophecy_id: Optional[str] = None
    member_journal: Optional[str] = None
    fulfillment_status: Optional[str] = None
    manifested_date: Optional[datetime] = None
    manifested_testimony: Optional[str] = None
    # List or comma-separated string
    member_tags: Optional[Union[List[str], str]] = None


class PersonalProphecyResponse(BaseModel):
    id: str
    member_id: str
    given_by: Optional[str] = None
    date: datetime
    delivery_method: Optional[str] = None
    title: str
    themes: Optional[List[str]] = None
    transcript: str
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[str] = None
    member_journal: Optional[str] = None
    fulfillment_status: str
    manifested_date: Optional[datetime] = None
    manifested_testimony: Optional[str] = None
    member_tags: Optional[List[str]] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PublicProphecyResponse(BaseModel):
    id: str
    title: str
    theme: str
    date: datetime
    duration: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    transcript: str
    excerpt: Optional[str] = None
    scriptures: Optional[List[str]] = None
    is_featured: bool
    tier_required: str
    status: str

    class Config:
        from_attributes = True


class PublicProphecyListItem(BaseModel):
    """Public listing card, without the transcript"""
    id: str
    title: str
    theme: str
    date: datetime
    duration: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    excerpt: Optional[str] = None
    is_featured: bool
    tier_required: str
    created_at: datetime

    class Config:
        from_attributes = True


class PublicProphecyListResponse(BaseModel):
    prophecies: List[PublicProphecyListItem]
    total: int
    limit: int
    offset: int


class PersonalProphecyListResponse(BaseModel):
    prophecies: List[PersonalProphecyResponse]


class ProphecyAssign(BaseModel):
    member_id: Optional[str] = None
    transcript: Optional[str] = None
    themes: Optional[Union[List[str], str]] = None
    title: Optional[str] = None
    delivery_method: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    duration: Optional[str] = None
    admin_notes: Optional[str] = None


class ProphecyUpload(BaseModel):
    title: Optional[str] = None
    transcript: Optional[str] = None
    theme: Optional[str] = None
    date: Optional[datetime] = None
    excerpt: Optional[str] = None
    duration: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    scriptures: Optional[List[str]] = None
    is_featured: bool = False
    tier_required: Optional[str] = None


class PrayerRequestCreate(BaseModel):
    category: Optional[str] = None
    request_text: Optional[str] = None


class PrayerRequestUpdate(BaseModel):
    status: Optional[PrayerRequestStatus] = None
    admin_response: Optional[str] = None


class PrayerRequestResponse(BaseModel):
    id: str
    member_id: str
    category: str
    request_text: str
    status: str
    admin_response: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AdminPrayerRequestResponse(PrayerRequestResponse):
    member_name: str = "Unknown"
    member_email: str = "Unknown"
