"""
Admin member management.
"""
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, and_
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import MemberNotFoundError, ValidationError
from ministry_hub.models import Member
from ministry_hub.modules.auth.dependencies import get_current_staff, get_current_admin
from ministry_hub.schemas.auth import MemberResponse
from ministry_hub.schemas.member import AdminMemberUpdate, BulkMemberAction, BulkMemberActionType
from ministry_hub.services.audit_service import log_admin_action
from ministry_hub.utils.pagination import paginate

router = APIRouter()


@router.get("")
async def list_members(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    tier: Optional[str] = None,
    role: Optional[str] = None,
    is_active: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """List members with filtering and pagination"""
    query = select(Member)
    conditions = []
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(
            Member.email.ilike(pattern),
            Member.first_name.ilike(pattern),
            Member.last_name.ilike(pattern),
        ))
    if tier:
        conditions.append(Member.tier == tier)
    if role:
        conditions.append(Member.role == role)
    if is_active is not None:
        conditions.append(Member.is_active.is_(is_active))
    if conditions:
        query = query.where(and_(*conditions))

    query = query.order_by(Member.created_at.desc())
    return await paginate(db, query, page, page_size, serializer=MemberResponse.model_validate)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: str,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    member = await db.get(Member, member_id)
    if not member:
        raise MemberNotFoundError(member_id)
    return member


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    body: AdminMemberUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: Member = Depends(get_current_admin)
):
    """Change tier, role, status or names"""
    member = await db.get(Member, member_id)
    if not member:
        raise MemberNotFoundError(member_id)

    changes = {}
    for field, value in body.model_dump(exclude_unset=True).items():
        if hasattr(value, "value"):
            value = value.value
        old_value = getattr(member, field)
        if old_value != value:
            changes[field] = {"old": old_value, "new": value}
            setattr(member, field, value)

    await db.commit()
    await db.refresh(member)

    if changes:
        await log_admin_action(db, current_admin.id, "member_updated", "member", member.id, changes, request)
    return member


@router.post("/bulk")
async def bulk_member_action(
    body: BulkMemberAction,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: Member = Depends(get_current_admin)
):
    """Activate, suspend or change the tier of several members at once"""
    if body.action == BulkMemberActionType.CHANGE_TIER and body.tier is None:
        raise ValidationError("tier is required for change_tier", field="tier")

    members = (await db.execute(select(Member).where(Member.id.in_(body.member_ids)))).scalars().all()

    affected = 0
    for member in members:
        if body.action == BulkMemberActionType.ACTIVATE:
            member.is_active = True
        elif body.action == BulkMemberActionType.SUSPEND:
            # An admin cannot lock themselves out
            if str(member.id) == str(current_admin.id):
                continue
            member.is_active = False
        else:
            member.tier = body.tier.value
        affected += 1
    await db.commit()

    await log_admin_action(
        db, current_admin.id, f"bulk_{body.action.value}", "member", None,
        {"member_ids": body.member_ids, "affected": affected, "tier": body.tier.value if body.tier else None},
        request
    )
    return {"success": True, "affected": affected}
