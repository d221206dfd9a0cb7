from sqlalchemy import Column, String, Boolean, DateTime, Date, Text
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, generate_uuid


class MemberTier(str, enum.Enum):
    """Membership tiers, lowest to highest"""
    FREE = "free"
    MEMBER = "member"
    PARTNER = "partner"
    COVENANT = "covenant"


class MemberRole(str, enum.Enum):
    """Member roles"""
    MEMBER = "member"
    STAFF = "staff"
    ADMIN = "admin"


class Member(Base):
    """Member model"""
    __tablename__ = "members"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    # Child accounts are created by a parent and have no email or password
    email = Column(String(255), unique=True, index=True, nullable=True)
    hashed_password = Column(String(255), nullable=True)

    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    phone = Column(String(30), nullable=True)
    birth_date = Column(Date, nullable=True)
    avatar_url = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)

    tier = Column(String(20), default=MemberTier.FREE.value, nullable=False, index=True)
    role = Column(String(20), default=MemberRole.MEMBER.value, nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_child_account = Column(Boolean, default=False, nullable=False)

    # Notification preferences
    email_notifications = Column(Boolean, default=True, nullable=False)
    sms_notifications = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN.value

    @property
    def is_staff(self) -> bool:
        return self.role in (MemberRole.ADMIN.value, MemberRole.STAFF.value)

    def __repr__(self):
        return f"<Member {self.email or self.full_name}>"
