from pydantic import BaseModel, Field
from typing import Optional


class MemberMessageCreate(BaseModel):
    subject: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1, max_length=10000)
    conversation_id: Optional[str] = None


class AdminReply(BaseModel):
    message: str = Field(..., max_length=10000)
