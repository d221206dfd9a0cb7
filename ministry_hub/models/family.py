from sqlalchemy import Column, String, Boolean, DateTime, Date, ForeignKey, Text
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, generate_uuid


class InviteStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


class Family(Base):
    __tablename__ = "families"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    family_name = Column(String(255), nullable=False)
    anniversary_date = Column(Date, nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip = Column(String(20), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class FamilyMember(Base):
    """Household membership; a member belongs to at most one family"""
    __tablename__ = "family_members"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    family_id = Column(GUID, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, unique=True)
    relationship = Column(String(50), nullable=False, default="self")
    is_primary = Column(Boolean, default=False, nullable=False)
    is_child = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class FamilyInvite(Base):
    __tablename__ = "family_invites"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    family_id = Column(GUID, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    relationship = Column(String(50), nullable=False)
    invited_by = Column(GUID, ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    status = Column(String(20), default=InviteStatus.PENDING.value, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    responded_at = Column(DateTime, nullable=True)
