from sqlalchemy import Column, String, Boolean, DateTime, Text
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, generate_uuid


class ParticipantType(str, enum.Enum):
    MEMBER = "member"
    ADMIN = "admin"


class Message(Base):
    """One message in a member/staff conversation"""
    __tablename__ = "messages"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    conversation_id = Column(GUID, nullable=False, index=True)

    sender_id = Column(GUID, nullable=True)
    sender_type = Column(String(20), nullable=False)
    recipient_id = Column(GUID, nullable=True)
    recipient_type = Column(String(20), nullable=False)

    subject = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
