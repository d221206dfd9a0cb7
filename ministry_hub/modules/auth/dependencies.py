from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
import uuid

from ministry_hub.core.database import get_db
from ministry_hub.core.logging_config import set_member_id
from ministry_hub.core.security import decode_token
from ministry_hub.models.member import Member

security = HTTPBearer(auto_error=False)


async def _member_from_token(token: str, db: AsyncSession) -> Member:
    payload = decode_token(token)

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    member_id = payload.get("sub")
    if not member_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload"
        )

    try:
        uuid.UUID(member_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid member ID format"
        )

    result = await db.execute(select(Member).where(Member.id == member_id))
    member = result.scalar_one_or_none()

    if not member:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Member not found"
        )

    if not member.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Member account is inactive"
        )

    return member


def _bind_member(request: Request, member: Member) -> None:
    # Read by the rate limiter key function and the log formatters
    request.state.member_id = str(member.id)
    set_member_id(str(member.id))


async def get_current_member(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Member:
    """Get current authenticated member"""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    member = await _member_from_token(credentials.credentials, db)
    _bind_member(request, member)
    return member


async def get_optional_member(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Optional[Member]:
    """Current member when a valid token is sent, else None"""
    if not credentials:
        return None
    try:
        member = await _member_from_token(credentials.credentials, db)
    except HTTPException:
        return None
    _bind_member(request, member)
    return member


async def get_current_staff(
    current_member: Member = Depends(get_current_member)
) -> Member:
    """Admin or staff member"""
    if not current_member.is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff access required"
        )
    return current_member


async def get_current_admin(
    current_member: Member = Depends(get_current_member)
) -> Member:
    """Admin member"""
    if not current_member.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_member
