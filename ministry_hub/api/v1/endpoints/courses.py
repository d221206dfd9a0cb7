from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import ResourceNotFoundError
from ministry_hub.models import Member, Course
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.services.tiers import has_tier_access, normalize_tier

router = APIRouter()


def _course_summary(course: Course, member: Member) -> dict:
    return {
        "id": course.id,
        "slug": course.slug,
        "name": course.name,
        "description": course.description,
        "category": course.category,
        "difficulty_level": course.difficulty_level,
        "required_tier": normalize_tier(course.required_tier),
        "estimated_hours": course.estimated_hours,
        "has_certificate": course.has_certificate,
        "module_count": len(course.modules),
        "lesson_count": sum(len(m.lessons) for m in course.modules),
        "has_access": has_tier_access(member.tier, course.required_tier, member.is_staff),
    }


@router.get("")
async def list_courses(
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    courses = (await db.execute(
        select(Course).where(Course.status == "published").order_by(Course.name)
    )).scalars().all()
    return {"courses": [_course_summary(c, current_member) for c in courses]}


@router.get("/{slug}")
async def get_course(
    slug: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Course outline. Lesson bodies only when accessible or marked preview."""
    course = (await db.execute(
        select(Course).where(Course.slug == slug, Course.status == "published")
    )).scalar_one_or_none()
    if not course:
        raise ResourceNotFoundError("Course", slug)

    summary = _course_summary(course, current_member)
    summary["modules"] = [
        {
            "id": module.id,
            "slug": module.slug,
            "name": module.name,
            "description": module.description,
            "sequence_order": module.sequence_order,
            "has_quiz": module.has_quiz,
            "lessons": [
                {
                    "id": lesson.id,
                    "slug": lesson.slug,
                    "name": lesson.name,
                    "content_type": lesson.content_type,
                    "estimated_minutes": lesson.estimated_minutes,
                    "is_preview": lesson.is_preview,
                    "sequence_order": lesson.sequence_order,
                    "content_html": lesson.content_html if (summary["has_access"] or lesson.is_preview) else None,
                }
                for lesson in module.lessons
            ],
        }
        for module in course.modules
    ]
    return summary
