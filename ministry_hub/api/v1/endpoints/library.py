"""
Unified library: teachings, sermons and e-books in one searchable view with
progress, watchlist and curated shelves.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import List, Optional

from ministry_hub.core.config import settings
from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import ContentNotFoundError
from ministry_hub.models import (
    Member,
    Teaching,
    Sermon,
    Resource,
    TeachingProgress,
    WatchlistItem,
)
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.schemas.library import WatchlistRequest, WatchlistItemResponse
from ministry_hub.services.library_service import (
    LIBRARY_TABS,
    LIBRARY_SORTS,
    build_items,
    aggregate_library,
)
from ministry_hub.services.tiers import normalize_tier

router = APIRouter()

WATCHLIST_MODELS = {"teaching": Teaching, "sermon": Sermon, "resource": Resource}
WATCHLIST_CONTENT_TYPES = tuple(WATCHLIST_MODELS)
CONTENT_ID_MAX_LENGTH = 36


def _search_clause(term: str, *columns):
    pattern = f"%{term}%"
    return or_(*[column.ilike(pattern) for column in columns])


@router.get("")
async def get_library(
    tab: str = Query("all"),
    search: Optional[str] = None,
    tag: Optional[str] = None,
    sort: str = Query("newest"),
    include_shelves: bool = True,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Aggregated library for the current member"""
    if tab not in LIBRARY_TABS:
        tab = "all"
    if sort not in LIBRARY_SORTS:
        sort = "newest"

    teachings_q = select(Teaching).where(Teaching.is_published.is_(True))
    resources_q = select(Resource).where(Resource.published.is_(True))
    sermons_q = select(Sermon).where(Sermon.is_published.is_(True))

    search = (search or "").strip()
    if search:
        teachings_q = teachings_q.where(
            _search_clause(search, Teaching.title, Teaching.description, Teaching.speaker)
        )
        resources_q = resources_q.where(
            _search_clause(search, Resource.title, Resource.description, Resource.author)
        )
        sermons_q = sermons_q.where(
            _search_clause(search, Sermon.title, Sermon.speaker, Sermon.series_name)
        )

    teachings = (await db.execute(teachings_q)).scalars().all()
    resources = (await db.execute(resources_q)).scalars().all()
    sermons = (await db.execute(sermons_q)).scalars().all()
    progress_rows = (await db.execute(
        select(TeachingProgress).where(TeachingProgress.member_id == current_member.id)
    )).scalars().all()
    watchlist_rows = (await db.execute(
        select(WatchlistItem).where(WatchlistItem.member_id == current_member.id)
    )).scalars().all()

    items = build_items(
        teachings, resources, sermons, progress_rows, watchlist_rows,
        member_tier=current_member.tier,
        is_admin=current_member.is_staff,
    )
    result = aggregate_library(
        items,
        tab=tab,
        tag=tag,
        sort=sort,
        include_shelves=include_shelves,
        shelf_size=settings.LIBRARY_SHELF_SIZE,
        recent_days=settings.LIBRARY_RECENT_DAYS,
    )
    result["member_tier"] = normalize_tier(current_member.tier)
    return result


@router.get("/watchlist", response_model=List[WatchlistItemResponse])
async def list_watchlist(
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(WatchlistItem)
        .where(WatchlistItem.member_id == current_member.id)
        .order_by(WatchlistItem.added_at.desc())
    )
    return result.scalars().all()


@router.post("/watchlist")
async def update_watchlist(
    body: WatchlistRequest,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Add or remove a library item from the member's watchlist"""
    if not body.content_id or not body.content_type or not body.action:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="content_id, content_type and action are required"
        )
    if body.content_type not in WATCHLIST_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"content_type must be one of: {', '.join(WATCHLIST_CONTENT_TYPES)}"
        )
    if body.action not in ("add", "remove"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="action must be 'add' or 'remove'"
        )
    if len(body.content_id) > CONTENT_ID_MAX_LENGTH:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="content_id is not a valid id")

    # The token may outlive the member row
    member = await db.get(Member, current_member.id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")

    result = await db.execute(
        select(WatchlistItem).where(
            WatchlistItem.member_id == member.id,
            WatchlistItem.content_id == body.content_id,
            WatchlistItem.content_type == body.content_type,
        )
    )
    existing = result.scalar_one_or_none()

    if body.action == "add":
        if not existing:
            if not await db.get(WATCHLIST_MODELS[body.content_type], body.content_id):
                raise ContentNotFoundError(body.content_type, body.content_id)
            db.add(WatchlistItem(
                member_id=member.id,
                content_id=body.content_id,
                content_type=body.content_type,
            ))
            await db.commit()
        return {"success": True, "action": "added"}

    if existing:
        await db.delete(existing)
        await db.commit()
    return {"success": True, "action": "removed"}
