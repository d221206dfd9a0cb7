"""Household management: family, invites and child accounts."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import FamilyNotFoundError, ConflictError, ResourceNotFoundError
from ministry_hub.models import (
    Member,
    MemberTier,
    Family,
    FamilyMember,
    FamilyInvite,
    InviteStatus,
)
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.schemas.family import (
    FamilyCreate,
    FamilyResponse,
    FamilyInviteCreate,
    FamilyInviteResponse,
    ChildCreate,
)

router = APIRouter()


async def _membership_for(db: AsyncSession, member_id: str) -> Optional[FamilyMember]:
    result = await db.execute(select(FamilyMember).where(FamilyMember.member_id == member_id))
    return result.scalar_one_or_none()


async def _require_membership(db: AsyncSession, member: Member) -> FamilyMember:
    membership = await _membership_for(db, member.id)
    if not membership:
        raise FamilyNotFoundError(f"member:{member.id}")
    return membership


@router.get("")
async def get_family(
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """The caller's household, its members (primary first) and pending invites"""
    membership = await _membership_for(db, current_member.id)
    if not membership:
        return {"family": None, "members": [], "invites": [], "is_head": False}

    family = await db.get(Family, membership.family_id)
    rows = (await db.execute(
        select(FamilyMember, Member)
        .join(Member, Member.id == FamilyMember.member_id)
        .where(FamilyMember.family_id == membership.family_id)
        .order_by(FamilyMember.is_primary.desc(), FamilyMember.created_at)
    )).all()
    invites = (await db.execute(
        select(FamilyInvite).where(
            FamilyInvite.family_id == membership.family_id,
            FamilyInvite.status == InviteStatus.PENDING.value,
        ).order_by(FamilyInvite.created_at.desc())
    )).scalars().all()

    return {
        "family": FamilyResponse.model_validate(family),
        "members": [
            {
                "id": fm.id,
                "member_id": m.id,
                "first_name": m.first_name,
                "last_name": m.last_name,
                "email": m.email,
                "birth_date": m.birth_date,
                "relationship": fm.relationship,
                "is_primary": fm.is_primary,
                "is_child": fm.is_child,
            }
            for fm, m in rows
        ],
        "invites": [FamilyInviteResponse.model_validate(i) for i in invites],
        "is_head": membership.is_primary,
    }


@router.post("", response_model=FamilyResponse, status_code=status.HTTP_201_CREATED)
async def create_family(
    body: FamilyCreate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    if await _membership_for(db, current_member.id):
        raise ConflictError("You already belong to a family")

    family = Family(**body.model_dump())
    db.add(family)
    await db.flush()
    db.add(FamilyMember(
        family_id=family.id,
        member_id=current_member.id,
        relationship="self",
        is_primary=True,
    ))
    await db.commit()
    await db.refresh(family)
    return family


@router.post("/invites", response_model=FamilyInviteResponse, status_code=status.HTTP_201_CREATED)
async def create_invite(
    body: FamilyInviteCreate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    membership = await _require_membership(db, current_member)
    email = body.email.lower()

    existing = await db.execute(
        select(FamilyInvite).where(
            FamilyInvite.family_id == membership.family_id,
            FamilyInvite.email == email,
            FamilyInvite.status == InviteStatus.PENDING.value,
        )
    )
    if existing.scalar_one_or_none():
        raise ConflictError(f"An invite is already pending for {email}")

    invite = FamilyInvite(
        family_id=membership.family_id,
        email=email,
        relationship=body.relationship,
        invited_by=current_member.id,
    )
    db.add(invite)
    await db.commit()
    await db.refresh(invite)
    return invite


@router.delete("/invites/{invite_id}")
async def cancel_invite(
    invite_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    membership = await _require_membership(db, current_member)
    invite = await db.get(FamilyInvite, invite_id)
    if not invite or str(invite.family_id) != str(membership.family_id):
        raise ResourceNotFoundError("Invite", invite_id)

    invite.status = InviteStatus.CANCELLED.value
    invite.responded_at = datetime.utcnow()
    await db.commit()
    return {"success": True}


@router.post("/invites/{invite_id}/accept")
async def accept_invite(
    invite_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    invite = await db.get(FamilyInvite, invite_id)
    if not invite or invite.status != InviteStatus.PENDING.value:
        raise ResourceNotFoundError("Invite", invite_id)
    if (current_member.email or "").lower() != invite.email.lower():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This invite is for another email")
    if await _membership_for(db, current_member.id):
        raise ConflictError("You already belong to a family")

    db.add(FamilyMember(
        family_id=invite.family_id,
        member_id=current_member.id,
        relationship=invite.relationship,
        is_primary=False,
    ))
    invite.status = InviteStatus.ACCEPTED.value
    invite.responded_at = datetime.utcnow()
    await db.commit()
    return {"success": True, "family_id": invite.family_id}


@router.post("/children", status_code=status.HTTP_201_CREATED)
async def add_child(
    body: ChildCreate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Create a login-less child account inside the caller's family"""
    membership = await _require_membership(db, current_member)

    child = Member(
        email=None,
        hashed_password=None,
        first_name=body.first_name,
        last_name=body.last_name,
        birth_date=body.birth_date,
        tier=MemberTier.FREE.value,
        is_child_account=True,
    )
    db.add(child)
    await db.flush()
    link = FamilyMember(
        family_id=membership.family_id,
        member_id=child.id,
        relationship="child",
        is_child=True,
    )
    db.add(link)
    await db.commit()
    return {"success": True, "member_id": child.id, "membership_id": link.id}


@router.delete("/members/{membership_id}")
async def remove_family_member(
    membership_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Head of household removes someone from the family"""
    membership = await _require_membership(db, current_member)
    if not membership.is_primary:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the head of household can remove members")

    target = await db.get(FamilyMember, membership_id)
    if not target or str(target.family_id) != str(membership.family_id):
        raise ResourceNotFoundError("Family Member", membership_id)
    if str(target.id) == str(membership.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot remove yourself")

    await db.delete(target)
    await db.commit()
    return {"success": True}
