from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import date, datetime


class FamilyCreate(BaseModel):
    family_name: str = Field(..., min_length=1, max_length=255)
    anniversary_date: Optional[date] = None
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip: Optional[str] = Field(None, max_length=20)


class FamilyResponse(BaseModel):
    id: str
    family_name: str
    anniversary_date: Optional[date] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class FamilyInviteCreate(BaseModel):
    email: EmailStr
    relationship: str = Field(..., min_length=1, max_length=50)


class FamilyInviteResponse(BaseModel):
    id: str
    family_id: str
    email: str
    relationship: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class ChildCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    birth_date: Optional[date] = None
