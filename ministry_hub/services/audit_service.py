from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from ministry_hub.core.logging_config import logger
from ministry_hub.models import AuditLog


async def log_admin_action(
    db: AsyncSession,
    admin_id: str,
    action: str,
    entity_type: str,
    entity_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> AuditLog:
    """Record an admin/staff action in the audit log and the application log"""
    entry = AuditLog(
        admin_id=str(admin_id),
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id) if entity_id else None,
        details=details,
        ip_address=request.client.host if request and request.client else None,
        user_agent=request.headers.get("user-agent") if request else None,
    )
    db.add(entry)
    await db.commit()
    logger.log_admin_action(str(admin_id), action, entity_type, str(entity_id) if entity_id else None)
    return entry
