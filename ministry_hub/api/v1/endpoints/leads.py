"""Public connect form. Submissions become leads for the outreach team."""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ministry_hub.core.database import get_db
from ministry_hub.core.logging_config import logger
from ministry_hub.core.rate_limiter import auth_rate_limit
from ministry_hub.models import Lead, LeadStatus
from ministry_hub.schemas.lead import PublicLeadCreate

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def submit_connect_form(
    request: Request,
    body: PublicLeadCreate,
    db: AsyncSession = Depends(get_db)
):
    lead = Lead(
        name=body.name.strip(),
        email=body.email.lower(),
        phone=body.phone,
        source="website",
        interests=body.interests,
        notes=body.message,
        status=LeadStatus.NEW.value,
    )
    db.add(lead)
    await db.commit()

    logger.info(f"New website lead {lead.id}", extra={"event_type": "lead_created", "source": "website"})
    return {"success": True, "message": "Thank you! Someone from our team will reach out soon."}
