"""Conversation grouping for the member and staff inboxes."""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ministry_hub.models.message import ParticipantType


def message_to_dict(message) -> Dict[str, Any]:
    return {
        "id": str(message.id),
        "conversation_id": str(message.conversation_id),
        "sender_id": str(message.sender_id) if message.sender_id else None,
        "sender_type": message.sender_type,
        "recipient_id": str(message.recipient_id) if message.recipient_id else None,
        "recipient_type": message.recipient_type,
        "subject": message.subject,
        "message": message.message,
        "is_read": message.is_read,
        "read_at": message.read_at,
        "created_at": message.created_at,
    }


def conversation_member_id(messages: Iterable) -> Optional[str]:
    """The member taking part in a conversation (first member-sent message)"""
    for message in messages:
        if message.sender_type == ParticipantType.MEMBER.value and message.sender_id:
            return str(message.sender_id)
    return None


def group_conversations(
    messages: Iterable,
    members: Mapping[str, Any],
    unread_for: str = ParticipantType.ADMIN.value,
) -> List[Dict[str, Any]]:
    """
    Group messages by conversation_id.

    ``members`` maps member id to a Member (or anything with ``full_name`` and
    ``email``). Conversations with no member-sent message are skipped.
    ``unread_count`` counts unread messages addressed to ``unread_for``: the
    staff side by default, the member when building the member's own inbox.
    """
    grouped: Dict[str, List[Any]] = {}
    for message in messages:
        grouped.setdefault(str(message.conversation_id), []).append(message)

    conversations = []
    for conversation_id, thread in grouped.items():
        thread.sort(key=lambda m: m.created_at or datetime.min)
        member_id = conversation_member_id(thread)
        if not member_id:
            continue

        member = members.get(member_id)
        first, last = thread[0], thread[-1]
        conversations.append({
            "conversation_id": conversation_id,
            "member_id": member_id,
            "member_name": member.full_name if member else "Unknown member",
            "member_email": member.email if member else None,
            "subject": first.subject or "No Subject",
            "last_message": last.message,
            "last_message_at": last.created_at,
            "unread_count": sum(
                1 for m in thread
                if m.recipient_type == unread_for and not m.is_read
            ),
            "messages": [message_to_dict(m) for m in thread],
        })

    conversations.sort(key=lambda c: c["last_message_at"] or datetime.min, reverse=True)
    return conversations
