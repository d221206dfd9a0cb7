from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class WatchlistRequest(BaseModel):
    # Optional so missing fields answer 400 from the endpoint
    content_id: Optional[str] = None
    content_type: Optional[str] = None
    action: Optional[str] = None


class WatchlistItemResponse(BaseModel):
    id: str
    content_id: str
    content_type: str
    added_at: datetime

    class Config:
        from_attributes = True
