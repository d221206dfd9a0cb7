from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime, date


class MemberRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator('first_name', 'last_name')
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class MemberLogin(BaseModel):
    email: EmailStr
    password: str


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class MemberResponse(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: str
    last_name: str
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    tier: str
    role: str
    is_active: bool
    is_child_account: bool = False
    email_notifications: bool = True
    sms_notifications: bool = False
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    member: MemberResponse
