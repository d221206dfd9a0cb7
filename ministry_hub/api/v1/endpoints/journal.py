from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from datetime import datetime
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import ResourceNotFoundError, ValidationError
from ministry_hub.core.logging_config import logger
from ministry_hub.core.rate_limiter import ai_operation_rate_limit
from ministry_hub.models import Member, JournalEntry
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.schemas.journal import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalEntryResponse,
    JournalListResponse,
)
from ministry_hub.utils.ai_client import AIClient, get_ai_client

router = APIRouter()

REFLECTION_SYSTEM_PROMPT = (
    "You are a gentle pastoral companion. Read a member's private journal entry and "
    "respond only with JSON: "
    '{"summary": "<two sentences>", "insights": ["<short insight>", ...], '
    '"scriptures": ["<Book chapter:verse>", ...]}. '
    "Be encouraging, never judgmental, and keep insights under 25 words each."
)


async def _get_own_entry(db: AsyncSession, entry_id: str, member: Member) -> JournalEntry:
    result = await db.execute(
        select(JournalEntry).where(
            JournalEntry.id == entry_id,
            JournalEntry.member_id == member.id,
        )
    )
    entry = result.scalar_one_or_none()
    if not entry:
        raise ResourceNotFoundError("Journal Entry", entry_id)
    return entry


@router.get("", response_model=JournalListResponse)
async def list_entries(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    type: Optional[str] = None,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """The member's entries, newest first. total counts every entry of the member."""
    query = select(JournalEntry).where(JournalEntry.member_id == current_member.id)
    if type:
        query = query.where(JournalEntry.entry_type == type)
    query = query.order_by(JournalEntry.created_at.desc()).offset(offset).limit(limit)
    entries = (await db.execute(query)).scalars().all()

    total = (await db.execute(
        select(func.count()).select_from(JournalEntry).where(JournalEntry.member_id == current_member.id)
    )).scalar() or 0

    return {
        "entries": entries,
        "total": total,
        "has_more": offset + len(entries) < total,
    }


@router.post("", response_model=JournalEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: JournalEntryCreate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    entry = JournalEntry(
        member_id=current_member.id,
        entry_type=body.entry_type.value,
        title=body.title,
        content=body.content,
        transcription=body.transcription,
        audio_url=body.audio_url,
        scripture_references=body.scripture_references or [],
        mood=body.mood,
        tags=body.tags or [],
        is_private=body.is_private is not False,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return entry


@router.put("/{entry_id}", response_model=JournalEntryResponse)
async def update_entry(
    entry_id: str,
    body: JournalEntryUpdate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    entry = await _get_own_entry(db, entry_id, current_member)
    for field, value in body.model_dump(exclude_unset=True).items():
        if field == "entry_type" and value is not None:
            value = value.value
        setattr(entry, field, value)
    entry.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(entry)
    return entry


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    entry = await _get_own_entry(db, entry_id, current_member)
    await db.delete(entry)
    await db.commit()
    return {"success": True}


@router.post("/{entry_id}/reflect", response_model=JournalEntryResponse)
@ai_operation_rate_limit()
async def reflect_on_entry(
    request: Request,
    entry_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client),
):
    """Store an AI summary and insights for one entry"""
    entry = await _get_own_entry(db, entry_id, current_member)
    text = (entry.content or entry.transcription or "").strip()
    if not text:
        raise ValidationError("Entry has no content to reflect on", field="content")

    result = await ai_client.generate_json(
        f"Journal entry ({entry.entry_type}):\n{text}",
        system_prompt=REFLECTION_SYSTEM_PROMPT,
    )
    entry.ai_summary = str(result.get("summary") or "").strip() or None
    entry.ai_insights = {
        "insights": [str(i) for i in (result.get("insights") or [])][:5],
        "scriptures": [str(s) for s in (result.get("scriptures") or [])][:5],
    }
    entry.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(entry)

    logger.info(f"Journal reflection stored for entry {entry.id}", extra={"event_type": "journal_reflection"})
    return entry
