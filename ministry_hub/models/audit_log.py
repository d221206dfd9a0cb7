from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from datetime import datetime

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, JSONType, generate_uuid


class AuditLog(Base):
    """Audit log for tracking admin and staff actions"""
    __tablename__ = "audit_logs"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    admin_id = Column(GUID, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True)

    # Action details
    action = Column(String(100), nullable=False)  # e.g. 'lead_deleted', 'prophecy_assigned'
    entity_type = Column(String(50), nullable=False)  # e.g. 'lead', 'teaching', 'member'
    entity_id = Column(String(64), nullable=True)

    details = Column(JSONType, nullable=True)

    # Request metadata
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog {self.action} by {self.admin_id}>"
