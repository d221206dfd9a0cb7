"""
Admin Audit Logs endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.models import Member, AuditLog
from ministry_hub.modules.auth.dependencies import get_current_admin
from ministry_hub.schemas.admin import AuditLogResponse
from ministry_hub.utils.pagination import paginate

router = APIRouter()


@router.get("")
async def list_audit_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    admin_id: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_admin: Member = Depends(get_current_admin)
):
    """List audit logs with filtering and pagination"""
    query = select(AuditLog)

    conditions = []
    if action:
        conditions.append(AuditLog.action == action)
    if entity_type:
        conditions.append(AuditLog.entity_type == entity_type)
    if admin_id:
        conditions.append(AuditLog.admin_id == admin_id)
    if conditions:
        query = query.where(and_(*conditions))

    query = query.order_by(AuditLog.created_at.desc())
    return await paginate(db, query, page, page_size, serializer=AuditLogResponse.model_validate)
