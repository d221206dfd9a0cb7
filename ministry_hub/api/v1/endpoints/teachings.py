from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from datetime import datetime
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import TeachingNotFoundError, TierAccessError
from ministry_hub.models import Member, Teaching, TeachingProgress, TeachingBookmark
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.schemas.content import (
    TeachingResponse,
    ProgressUpdate,
    ProgressResponse,
    BookmarkCreate,
    BookmarkResponse,
)
from ministry_hub.services.tiers import has_tier_access, normalize_tier
from ministry_hub.utils.pagination import paginate, create_paginated_response

router = APIRouter()


async def _get_published_teaching(db: AsyncSession, teaching_id: str) -> Teaching:
    teaching = await db.get(Teaching, teaching_id)
    if not teaching or not teaching.is_published:
        raise TeachingNotFoundError(teaching_id)
    return teaching


@router.get("")
async def list_teachings(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    tag: Optional[str] = None,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Published teachings, newest first"""
    query = select(Teaching).where(Teaching.is_published.is_(True))
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            Teaching.title.ilike(pattern),
            Teaching.description.ilike(pattern),
            Teaching.speaker.ilike(pattern),
        ))
    query = query.order_by(Teaching.created_at.desc())

    if tag:
        # tags is a JSON list, matched in Python
        rows = (await db.execute(query)).scalars().all()
        wanted = tag.lower()
        matched = [t for t in rows if wanted in [str(x).lower() for x in (t.tags or [])]]
        start = (page - 1) * page_size
        items = [TeachingResponse.model_validate(t) for t in matched[start:start + page_size]]
        return create_paginated_response(items, len(matched), page, page_size)

    return await paginate(db, query, page, page_size, serializer=TeachingResponse.model_validate)


@router.get("/progress")
async def get_progress(
    teaching_id: Optional[str] = None,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """One progress row (or null) for teaching_id, else all rows"""
    query = select(TeachingProgress).where(TeachingProgress.member_id == current_member.id)
    if teaching_id:
        row = (await db.execute(query.where(TeachingProgress.teaching_id == teaching_id))).scalar_one_or_none()
        return {"progress": ProgressResponse.model_validate(row) if row else None}

    rows = (await db.execute(query.order_by(TeachingProgress.last_watched_at.desc()))).scalars().all()
    return {"progress": [ProgressResponse.model_validate(r) for r in rows]}


@router.post("/progress", response_model=ProgressResponse)
async def save_progress(
    body: ProgressUpdate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Upsert playback progress. 201 on first save, 200 afterwards."""
    teaching = await db.get(Teaching, body.teaching_id)
    if not teaching:
        raise TeachingNotFoundError(body.teaching_id)

    now = datetime.utcnow()
    result = await db.execute(
        select(TeachingProgress).where(
            TeachingProgress.member_id == current_member.id,
            TeachingProgress.teaching_id == body.teaching_id,
        )
    )
    progress = result.scalar_one_or_none()
    created = progress is None
    if created:
        progress = TeachingProgress(member_id=current_member.id, teaching_id=body.teaching_id)
        db.add(progress)

    progress.progress_seconds = body.progress_seconds
    progress.completed = body.completed
    progress.last_watched_at = now
    progress.completed_at = now if body.completed else None

    await db.commit()
    await db.refresh(progress)

    payload = jsonable_encoder(ProgressResponse.model_validate(progress))
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        content=payload,
    )


@router.get("/bookmarks")
async def get_bookmarks(
    teaching_id: Optional[str] = None,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    query = select(TeachingBookmark).where(TeachingBookmark.member_id == current_member.id)
    if teaching_id:
        row = (await db.execute(query.where(TeachingBookmark.teaching_id == teaching_id))).scalar_one_or_none()
        return {"is_bookmarked": row is not None}

    rows = (await db.execute(query.order_by(TeachingBookmark.created_at.desc()))).scalars().all()
    return {"bookmarks": [BookmarkResponse.model_validate(r) for r in rows]}


@router.post("/bookmarks", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def add_bookmark(
    body: BookmarkCreate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    await _get_published_teaching(db, body.teaching_id)

    result = await db.execute(
        select(TeachingBookmark).where(
            TeachingBookmark.member_id == current_member.id,
            TeachingBookmark.teaching_id == body.teaching_id,
        )
    )
    if result.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Already bookmarked")

    bookmark = TeachingBookmark(member_id=current_member.id, teaching_id=body.teaching_id)
    db.add(bookmark)
    await db.commit()
    await db.refresh(bookmark)
    return bookmark


@router.delete("/bookmarks/{teaching_id}")
async def remove_bookmark(
    teaching_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(TeachingBookmark).where(
            TeachingBookmark.member_id == current_member.id,
            TeachingBookmark.teaching_id == teaching_id,
        )
    )
    bookmark = result.scalar_one_or_none()
    if bookmark:
        await db.delete(bookmark)
        await db.commit()
    return {"success": True}


@router.get("/{teaching_id}", response_model=TeachingResponse)
async def get_teaching(
    teaching_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Single teaching; counts a view"""
    teaching = await _get_published_teaching(db, teaching_id)

    if not has_tier_access(current_member.tier, teaching.tier_required, current_member.is_staff):
        raise TierAccessError(normalize_tier(teaching.tier_required), normalize_tier(current_member.tier))

    teaching.view_count = (teaching.view_count or 0) + 1
    await db.commit()
    await db.refresh(teaching)
    return teaching
