import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import ConversationNotFoundError
from ministry_hub.models import Member, Message, ParticipantType
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.schemas.message import MemberMessageCreate
from ministry_hub.services.messaging_service import group_conversations, message_to_dict

router = APIRouter()


@router.get("")
async def list_my_conversations(
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """The member's conversations with the ministry team"""
    conversation_ids = select(Message.conversation_id).where(
        Message.sender_type == ParticipantType.MEMBER.value,
        Message.sender_id == current_member.id,
    )
    messages = (await db.execute(
        select(Message).where(Message.conversation_id.in_(conversation_ids))
    )).scalars().all()

    return {"conversations": group_conversations(
        messages, {str(current_member.id): current_member}, unread_for=ParticipantType.MEMBER.value
    )}


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MemberMessageCreate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Start a conversation or reply in one of the member's own"""
    subject = body.subject
    if body.conversation_id:
        owned = (await db.execute(
            select(Message).where(
                Message.conversation_id == body.conversation_id,
                Message.sender_type == ParticipantType.MEMBER.value,
                Message.sender_id == current_member.id,
            ).limit(1)
        )).scalar_one_or_none()
        if not owned:
            raise ConversationNotFoundError(body.conversation_id)
        conversation_id = body.conversation_id
        subject = subject or owned.subject
    else:
        conversation_id = str(uuid.uuid4())

    message = Message(
        conversation_id=conversation_id,
        sender_id=current_member.id,
        sender_type=ParticipantType.MEMBER.value,
        recipient_id=None,
        recipient_type=ParticipantType.ADMIN.value,
        subject=subject,
        message=body.message,
    )
    db.add(message)
    await db.commit()
    await db.refresh(message)
    return message_to_dict(message)


@router.post("/{conversation_id}/read")
async def mark_replies_read(
    conversation_id: str,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Mark the team's replies in one of the member's conversations as read"""
    result = await db.execute(
        update(Message)
        .where(
            Message.conversation_id == conversation_id,
            Message.recipient_type == ParticipantType.MEMBER.value,
            Message.recipient_id == current_member.id,
            Message.is_read.is_(False),
        )
        .values(is_read=True, read_at=datetime.utcnow())
    )
    await db.commit()
    return {"updated": result.rowcount or 0}
