"""
Admin lead pipeline: CRUD, contact logging, activities and AI scoring.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_, and_, delete
from datetime import datetime, timedelta
from typing import Optional

from ministry_hub.core.config import settings
from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import LeadNotFoundError, AIUnavailableError
from ministry_hub.core.logging_config import logger
from ministry_hub.core.rate_limiter import ai_operation_rate_limit
from ministry_hub.models import Member, Lead, LeadActivity, LeadStatus
from ministry_hub.modules.auth.dependencies import get_current_staff, get_current_admin
from ministry_hub.schemas.lead import (
    LeadCreate,
    LeadUpdate,
    LeadContact,
    LeadActivityCreate,
    LeadActivityResponse,
    LeadResponse,
    LeadDetailResponse,
    LeadScoreRequest,
)
from ministry_hub.services.audit_service import log_admin_action
from ministry_hub.services.lead_scoring import score_lead, apply_score
from ministry_hub.utils.ai_client import get_ai_client
from ministry_hub.utils.pagination import paginate

router = APIRouter()

SORT_COLUMNS = {
    "created_at": Lead.created_at,
    "name": Lead.name,
    "ai_score": Lead.ai_score,
    "last_contacted_at": Lead.last_contacted_at,
}


async def _get_lead(db: AsyncSession, lead_id: str) -> Lead:
    lead = await db.get(Lead, lead_id)
    if not lead:
        raise LeadNotFoundError(lead_id)
    return lead


async def _activities_for(db: AsyncSession, lead_id: str):
    result = await db.execute(
        select(LeadActivity)
        .where(LeadActivity.lead_id == lead_id)
        .order_by(LeadActivity.created_at.desc())
    )
    return result.scalars().all()


def _optional_ai_client():
    """AI client when configured, else None (heuristic scoring)"""
    try:
        return get_ai_client()
    except AIUnavailableError:
        return None


@router.get("")
async def list_leads(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    source: Optional[str] = None,
    interest_level: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = Query("created_at", pattern="^(created_at|name|ai_score|last_contacted_at)$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    query = select(Lead)
    conditions = []
    if status_filter:
        conditions.append(Lead.status == status_filter)
    if source:
        conditions.append(Lead.source == source)
    if interest_level:
        conditions.append(Lead.interest_level == interest_level)
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(
            Lead.name.ilike(pattern),
            Lead.email.ilike(pattern),
            Lead.phone.ilike(pattern),
        ))
    if conditions:
        query = query.where(and_(*conditions))

    column = SORT_COLUMNS[sort_by]
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc())
    return await paginate(db, query, page, page_size, serializer=LeadResponse.model_validate)


@router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
async def create_lead(
    body: LeadCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    lead = Lead(**body.model_dump(), status=LeadStatus.NEW.value)
    if lead.email:
        lead.email = lead.email.lower()
    db.add(lead)
    await db.commit()
    await db.refresh(lead)

    await log_admin_action(db, current_staff.id, "lead_created", "lead", lead.id, {"name": lead.name}, request)
    return lead


@router.get("/scores")
async def lead_scores(
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Scored leads by score, plus priority counts over new leads"""
    scored = (await db.execute(
        select(Lead)
        .where(Lead.ai_score.is_not(None))
        .order_by(Lead.ai_score.desc())
        .limit(100)
    )).scalars().all()

    new_leads = (await db.execute(
        select(Lead.ai_priority, Lead.ai_score).where(Lead.status == LeadStatus.NEW.value)
    )).all()
    counts = {"hot": 0, "warm": 0, "cold": 0, "unscored": 0}
    for priority, score in new_leads:
        if score is None or priority not in counts:
            counts["unscored"] += 1
        else:
            counts[priority] += 1

    return {"leads": [LeadResponse.model_validate(l) for l in scored], "counts": counts}


@router.post("/score")
@ai_operation_rate_limit()
async def score_leads(
    request: Request,
    body: LeadScoreRequest,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Score one lead, or every stale new lead with score_all"""
    if body.lead_id:
        leads = [await _get_lead(db, body.lead_id)]
    elif body.score_all:
        stale_before = datetime.utcnow() - timedelta(days=settings.LEAD_RESCORE_DAYS)
        leads = (await db.execute(
            select(Lead)
            .where(
                Lead.status == LeadStatus.NEW.value,
                or_(Lead.ai_scored_at.is_(None), Lead.ai_scored_at < stale_before),
            )
            .order_by(Lead.created_at.desc())
            .limit(settings.LEAD_SCORE_BATCH_LIMIT)
        )).scalars().all()
    else:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Provide lead_id or score_all")

    if not leads:
        return {"message": "No leads need scoring", "scored": 0}

    ai_client = _optional_ai_client()
    results = []
    for lead in leads:
        activities = await _activities_for(db, lead.id)
        result = await score_lead(lead, activities, ai_client)
        apply_score(lead, result)
        results.append({"lead_id": lead.id, "name": lead.name, **result})
    await db.commit()

    logger.info(f"Scored {len(results)} leads", extra={"event_type": "lead_scoring", "count": len(results)})
    await log_admin_action(
        db, current_staff.id, "leads_scored", "lead", body.lead_id,
        {"count": len(results), "score_all": body.score_all}, request
    )
    return {"success": True, "scored": len(results), "results": results}


@router.get("/{lead_id}", response_model=LeadDetailResponse)
async def get_lead(
    lead_id: str,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    lead = await _get_lead(db, lead_id)
    detail = LeadDetailResponse.model_validate(lead, from_attributes=True)
    detail.activities = [LeadActivityResponse.model_validate(a) for a in await _activities_for(db, lead_id)]
    return detail


@router.patch("/{lead_id}", response_model=LeadResponse)
async def update_lead(
    lead_id: str,
    body: LeadUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    lead = await _get_lead(db, lead_id)
    updates = body.model_dump(exclude_unset=True)

    new_status = updates.pop("status", None)
    if new_status is not None:
        new_status = new_status.value
        if new_status != lead.status:
            db.add(LeadActivity(
                lead_id=lead.id,
                activity_type="status_change",
                description=f"Status changed from {lead.status} to {new_status}",
                created_by=current_staff.id,
            ))
            lead.status = new_status

    for field, value in updates.items():
        setattr(lead, field, value)
    await db.commit()
    await db.refresh(lead)

    await log_admin_action(db, current_staff.id, "lead_updated", "lead", lead.id, {"fields": sorted(body.model_dump(exclude_unset=True))}, request)
    return lead


@router.post("/{lead_id}/contact", response_model=LeadResponse)
async def mark_contacted(
    lead_id: str,
    body: LeadContact,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    lead = await _get_lead(db, lead_id)
    lead.last_contacted_at = datetime.utcnow()
    if lead.status == LeadStatus.NEW.value:
        lead.status = LeadStatus.CONTACTED.value

    db.add(LeadActivity(
        lead_id=lead.id,
        activity_type="contacted",
        description=body.notes or "Lead contacted",
        created_by=current_staff.id,
    ))
    await db.commit()
    await db.refresh(lead)
    return lead


@router.post("/{lead_id}/activities", response_model=LeadActivityResponse, status_code=status.HTTP_201_CREATED)
async def add_activity(
    lead_id: str,
    body: LeadActivityCreate,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    lead = await _get_lead(db, lead_id)
    activity = LeadActivity(
        lead_id=lead.id,
        activity_type=body.activity_type,
        description=body.description,
        created_by=current_staff.id,
    )
    db.add(activity)
    await db.commit()
    await db.refresh(activity)
    return activity


@router.delete("/{lead_id}")
async def delete_lead(
    lead_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: Member = Depends(get_current_admin)
):
    lead = await _get_lead(db, lead_id)
    name = lead.name
    await db.execute(delete(LeadActivity).where(LeadActivity.lead_id == lead.id))
    await db.delete(lead)
    await db.commit()

    await log_admin_action(db, current_admin.id, "lead_deleted", "lead", lead_id, {"name": name}, request)
    return {"success": True}
