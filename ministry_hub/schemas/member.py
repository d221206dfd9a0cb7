from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import date
from enum import Enum

from ministry_hub.models.member import MemberTier, MemberRole


class MemberUpdate(BaseModel):
    """Self-service profile update. Unknown keys (tier, role) are ignored."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    birth_date: Optional[date] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=2000)
    email_notifications: Optional[bool] = None
    sms_notifications: Optional[bool] = None


class TierResponse(BaseModel):
    tier: str
    name: str
    rank: int
    benefits: List[str]
    accessible_tiers: List[str]
    all_benefits: Dict[str, List[str]]


class DeleteAccountRequest(BaseModel):
    confirm: Optional[str] = None


class AdminMemberUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    tier: Optional[MemberTier] = None
    role: Optional[MemberRole] = None
    is_active: Optional[bool] = None


class BulkMemberActionType(str, Enum):
    ACTIVATE = "activate"
    SUSPEND = "suspend"
    CHANGE_TIER = "change_tier"


class BulkMemberAction(BaseModel):
    member_ids: List[str] = Field(..., min_length=1, max_length=500)
    action: BulkMemberActionType
    tier: Optional[MemberTier] = None
