from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from ministry_hub.models.live_service import LiveServiceStatus


class LiveServiceAction(BaseModel):
    service_id: Optional[str] = None
    action: Optional[str] = None
    device_type: Optional[str] = None


class LiveServiceCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    stream_url: Optional[str] = None
    scheduled_start: datetime
    poll_enabled: bool = False


class LiveServiceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    stream_url: Optional[str] = None
    scheduled_start: Optional[datetime] = None
    poll_enabled: Optional[bool] = None
    status: Optional[LiveServiceStatus] = None


class LiveServiceResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    stream_url: Optional[str] = None
    status: str
    scheduled_start: datetime
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None
    poll_enabled: bool
    attendee_count: int

    class Config:
        from_attributes = True


class AttendanceResponse(BaseModel):
    id: str
    service_id: str
    member_id: str
    joined_at: datetime
    left_at: Optional[datetime] = None
    device_type: Optional[str] = None

    class Config:
        from_attributes = True


class PollCreate(BaseModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)


class PollResponse(BaseModel):
    id: str
    service_id: str
    question: str
    options: List[str] = []
    is_active: bool
    created_at: datetime
    closed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
