"""
Admin API endpoints for the Ministry Hub staff console.
Staff can manage content, leads, messages, prophecy and live services;
destructive actions and member administration need the admin role.
"""
from fastapi import APIRouter

from ministry_hub.api.v1.endpoints.admin import (
    dashboard,
    members,
    content,
    leads,
    messages,
    prophecy,
    giving,
    live,
    audit_logs,
)

admin_router = APIRouter(prefix="/admin", tags=["Admin"])

admin_router.include_router(dashboard.router, prefix="/dashboard", tags=["Admin Dashboard"])
admin_router.include_router(members.router, prefix="/members", tags=["Admin Members"])
admin_router.include_router(content.router, prefix="/content", tags=["Admin Content"])
admin_router.include_router(leads.router, prefix="/leads", tags=["Admin Leads"])
admin_router.include_router(messages.router, prefix="/messages", tags=["Admin Messages"])
admin_router.include_router(prophecy.router, prefix="/prophecy", tags=["Admin Prophecy"])
admin_router.include_router(giving.router, prefix="/giving", tags=["Admin Giving"])
admin_router.include_router(live.router, prefix="/live", tags=["Admin Live"])
admin_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["Admin Audit Logs"])
