"""
Admin content management for teachings, sermons and resources.
"""
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import ContentNotFoundError, InvalidChoiceError, ValidationError
from ministry_hub.models import Member, Teaching, Sermon, Resource
from ministry_hub.modules.auth.dependencies import get_current_staff, get_current_admin
from ministry_hub.schemas.content import (
    TeachingCreate, TeachingUpdate, TeachingResponse,
    SermonCreate, SermonUpdate, SermonResponse,
    ResourceCreate, ResourceUpdate, ResourceResponse,
)
from ministry_hub.services.audit_service import log_admin_action
from ministry_hub.utils.pagination import paginate

router = APIRouter()

# content_type -> (model, create schema, update schema, response schema, published column, search columns)
CONTENT_TYPES = {
    "teaching": (Teaching, TeachingCreate, TeachingUpdate, TeachingResponse, "is_published",
                 ("title", "description", "speaker")),
    "sermon": (Sermon, SermonCreate, SermonUpdate, SermonResponse, "is_published",
               ("title", "speaker", "series_name")),
    "resource": (Resource, ResourceCreate, ResourceUpdate, ResourceResponse, "published",
                 ("title", "description", "author")),
}


def _content_config(content_type: str):
    if content_type not in CONTENT_TYPES:
        raise InvalidChoiceError("content_type", content_type, list(CONTENT_TYPES))
    return CONTENT_TYPES[content_type]


def _db_values(data: dict) -> dict:
    # Enum members (tier_required) are stored by value
    return {k: (v.value if hasattr(v, "value") else v) for k, v in data.items()}


async def _read_json(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError("Request body must be JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


async def _get_item(db: AsyncSession, content_type: str, item_id: str):
    model = _content_config(content_type)[0]
    item = await db.get(model, item_id)
    if not item:
        raise ContentNotFoundError(content_type, item_id)
    return item


@router.get("")
async def list_content(
    content_type: str = Query("teaching"),
    search: Optional[str] = None,
    published: Optional[bool] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    model, _, _, response_schema, published_col, search_cols = _content_config(content_type)
    query = select(model)
    if published is not None:
        query = query.where(getattr(model, published_col).is_(published))
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(*[getattr(model, col).ilike(pattern) for col in search_cols]))
    query = query.order_by(model.created_at.desc())
    return await paginate(db, query, page, page_size, serializer=response_schema.model_validate)


@router.post("/{content_type}", status_code=status.HTTP_201_CREATED)
async def create_content(
    content_type: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    model, create_schema, _, response_schema, _, _ = _content_config(content_type)
    data = create_schema.model_validate(await _read_json(request))

    item = model(**_db_values(data.model_dump()))
    db.add(item)
    await db.commit()
    await db.refresh(item)

    await log_admin_action(
        db, current_staff.id, f"{content_type}_created", content_type, item.id,
        {"title": item.title}, request
    )
    return response_schema.model_validate(item)


@router.patch("/{content_type}/{item_id}")
async def update_content(
    content_type: str,
    item_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    _, _, update_schema, response_schema, _, _ = _content_config(content_type)
    item = await _get_item(db, content_type, item_id)
    updates = _db_values(update_schema.model_validate(await _read_json(request)).model_dump(exclude_unset=True))

    for field, value in updates.items():
        setattr(item, field, value)
    await db.commit()
    await db.refresh(item)

    await log_admin_action(
        db, current_staff.id, f"{content_type}_updated", content_type, item.id,
        {"fields": sorted(updates)}, request
    )
    return response_schema.model_validate(item)


@router.post("/{content_type}/{item_id}/publish")
async def toggle_publish(
    content_type: str,
    item_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    published_col = _content_config(content_type)[4]
    item = await _get_item(db, content_type, item_id)
    new_value = not getattr(item, published_col)
    setattr(item, published_col, new_value)
    await db.commit()

    await log_admin_action(
        db, current_staff.id, f"{content_type}_{'published' if new_value else 'unpublished'}",
        content_type, item.id, None, request
    )
    return {"success": True, "id": item.id, "published": new_value}


@router.delete("/{content_type}/{item_id}")
async def delete_content(
    content_type: str,
    item_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_admin: Member = Depends(get_current_admin)
):
    item = await _get_item(db, content_type, item_id)
    title = item.title
    await db.delete(item)
    await db.commit()

    await log_admin_action(
        db, current_admin.id, f"{content_type}_deleted", content_type, item_id,
        {"title": title}, request
    )
    return {"success": True}
