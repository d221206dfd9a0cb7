from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime
import uuid

from ministry_hub.core.database import get_db
from ministry_hub.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_refresh_token,
    decode_token,
    token_payload_for,
)
from ministry_hub.core.logging_config import logger, set_member_id
from ministry_hub.core.rate_limiter import strict_rate_limit, auth_rate_limit
from ministry_hub.models.member import Member, MemberTier, MemberRole
from ministry_hub.schemas.auth import (
    MemberRegister,
    MemberLogin,
    RefreshTokenRequest,
    Token,
    LoginResponse,
    MemberResponse,
)
from ministry_hub.modules.auth.dependencies import get_current_member

router = APIRouter()


@router.post("/register", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
@strict_rate_limit()
async def register(
    request: Request,
    member_data: MemberRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register a new free-tier member (rate limited: 3/min)"""
    client_ip = request.client.host if request.client else "unknown"
    email = member_data.email.lower()

    result = await db.execute(select(Member).where(Member.email == email))
    if result.scalar_one_or_none():
        logger.log_auth_event(
            event="register",
            success=False,
            member_email=email,
            reason="Email already registered",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    member = Member(
        email=email,
        hashed_password=get_password_hash(member_data.password),
        first_name=member_data.first_name,
        last_name=member_data.last_name,
        phone=member_data.phone,
        tier=MemberTier.FREE.value,
        role=MemberRole.MEMBER.value,
        is_active=True,
    )
    db.add(member)
    await db.commit()
    await db.refresh(member)

    logger.log_auth_event(event="register", success=True, member_email=email, client_ip=client_ip)
    return member


@router.post("/login", response_model=LoginResponse)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: MemberLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login member (rate limited: 5/min)"""
    client_ip = request.client.host if request.client else "unknown"
    email = credentials.email.lower()

    result = await db.execute(select(Member).where(Member.email == email))
    member = result.scalar_one_or_none()

    if not member or not member.hashed_password or not verify_password(credentials.password, member.hashed_password):
        logger.log_auth_event(
            event="login",
            success=False,
            member_email=email,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    if not member.is_active:
        logger.log_auth_event(
            event="login",
            success=False,
            member_email=email,
            reason="Account inactive",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    member.last_login = datetime.utcnow()
    await db.commit()
    await db.refresh(member)

    set_member_id(str(member.id))

    token_data = token_payload_for(member)
    logger.log_auth_event(
        event="login",
        success=True,
        member_email=member.email,
        client_ip=client_ip,
        member_role=member.role
    )

    return {
        "access_token": create_access_token(token_data),
        "refresh_token": create_refresh_token(token_data),
        "token_type": "bearer",
        "member": MemberResponse.model_validate(member),
    }


@router.get("/me", response_model=MemberResponse)
async def get_current_member_info(
    current_member: Member = Depends(get_current_member)
):
    """Get current member info"""
    return current_member


@router.post("/refresh", response_model=Token)
async def refresh_token(
    token_request: RefreshTokenRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """Exchange a refresh token for a new token pair"""
    client_ip = request.client.host if request.client else "unknown"

    payload = decode_token(token_request.refresh_token)

    if payload.get("type") != "refresh":
        logger.log_auth_event(
            event="token_refresh",
            success=False,
            reason="Invalid token type",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type - expected refresh token"
        )

    member_id = payload.get("sub")
    try:
        uuid.UUID(str(member_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid member ID format"
        )

    result = await db.execute(select(Member).where(Member.id == member_id))
    member = result.scalar_one_or_none()

    if not member:
        logger.log_auth_event(
            event="token_refresh",
            success=False,
            reason="Member not found",
            client_ip=client_ip
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Member not found"
        )

    if not member.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    token_data = token_payload_for(member)
    logger.log_auth_event(event="token_refresh", success=True, member_email=member.email, client_ip=client_ip)

    return {
        "access_token": create_access_token(token_data),
        "refresh_token": create_refresh_token(token_data),
        "token_type": "bearer"
    }
