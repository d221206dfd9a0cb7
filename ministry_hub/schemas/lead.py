from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime

from ministry_hub.models.lead import LeadStatus


class LeadCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    source: str = Field("website", max_length=50)
    interest_level: Optional[str] = Field(None, pattern="^(hot|warm|cold)$")
    interests: List[str] = []
    notes: Optional[str] = None


class PublicLeadCreate(BaseModel):
    """Connect / contact form submission"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    interests: List[str] = []
    message: Optional[str] = Field(None, max_length=5000)


class LeadUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    source: Optional[str] = Field(None, max_length=50)
    interest_level: Optional[str] = Field(None, pattern="^(hot|warm|cold)$")
    interests: Optional[List[str]] = None
    notes: Optional[str] = None
    status: Optional[LeadStatus] = None


class LeadContact(BaseModel):
    notes: Optional[str] = None


class LeadActivityCreate(BaseModel):
    activity_type: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None


class LeadActivityResponse(BaseModel):
    id: str
    lead_id: str
    activity_type: str
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class LeadResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    source: str
    interest_level: Optional[str] = None
    interests: Optional[List[str]] = None
    notes: Optional[str] = None
    status: str
    last_contacted_at: Optional[datetime] = None
    ai_score: Optional[int] = None
    ai_priority: Optional[str] = None
    ai_summary: Optional[str] = None
    ai_scored_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class LeadDetailResponse(LeadResponse):
    activities: List[LeadActivityResponse] = []


class LeadScoreRequest(BaseModel):
    lead_id: Optional[str] = None
    score_all: bool = False
