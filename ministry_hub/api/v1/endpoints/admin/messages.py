"""Staff inbox for member conversations."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from datetime import datetime

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import ConversationNotFoundError
from ministry_hub.models import Member, Message, ParticipantType
from ministry_hub.modules.auth.dependencies import get_current_staff
from ministry_hub.schemas.message import AdminReply
from ministry_hub.services.messaging_service import group_conversations, conversation_member_id, message_to_dict

router = APIRouter()

PARTICIPANTS = (ParticipantType.MEMBER.value, ParticipantType.ADMIN.value)


@router.get("/conversations")
async def list_conversations(
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    messages = (await db.execute(
        select(Message).where(
            Message.sender_type.in_(PARTICIPANTS),
            Message.recipient_type.in_(PARTICIPANTS),
        )
    )).scalars().all()

    member_ids = {str(m.sender_id) for m in messages if m.sender_type == ParticipantType.MEMBER.value and m.sender_id}
    members = {}
    if member_ids:
        rows = (await db.execute(select(Member).where(Member.id.in_(member_ids)))).scalars().all()
        members = {str(m.id): m for m in rows}

    conversations = group_conversations(messages, members)
    return {
        "conversations": conversations,
        "total_unread": sum(c["unread_count"] for c in conversations),
    }


@router.post("/conversations/{conversation_id}/read")
async def mark_conversation_read(
    conversation_id: str,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    result = await db.execute(
        update(Message)
        .where(
            Message.conversation_id == conversation_id,
            Message.recipient_type == ParticipantType.ADMIN.value,
            Message.is_read.is_(False),
        )
        .values(is_read=True, read_at=datetime.utcnow())
    )
    await db.commit()
    return {"updated": result.rowcount or 0}


@router.post("/conversations/{conversation_id}/reply", status_code=status.HTTP_201_CREATED)
async def reply_to_conversation(
    conversation_id: str,
    body: AdminReply,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    text = body.message.strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Message cannot be empty")

    thread = (await db.execute(
        select(Message)
        .where(Message.conversation_id == conversation_id)
        .order_by(Message.created_at)
    )).scalars().all()
    member_id = conversation_member_id(thread)
    if not member_id:
        raise ConversationNotFoundError(conversation_id)

    reply = Message(
        conversation_id=conversation_id,
        sender_id=current_staff.id,
        sender_type=ParticipantType.ADMIN.value,
        recipient_id=member_id,
        recipient_type=ParticipantType.MEMBER.value,
        subject=thread[0].subject,
        message=text,
    )
    db.add(reply)
    await db.commit()
    await db.refresh(reply)
    return message_to_dict(reply)
