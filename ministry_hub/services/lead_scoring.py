"""
Lead scoring.

Asks the AI client for a score, priority and one-line summary per lead and
falls back to a deterministic heuristic when AI is unavailable or fails.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ministry_hub.core.exceptions import AIServiceError
from ministry_hub.core.logging_config import logger
from ministry_hub.models.lead import LeadPriority

VALID_PRIORITIES = {p.value for p in LeadPriority}

SCORING_SYSTEM_PROMPT = (
    "You are assisting a church outreach team. Score how likely a visitor lead is "
    "to become an engaged member. Respond only with JSON of the form "
    '{"score": <0-100>, "priority": "hot"|"warm"|"cold", "summary": "<one sentence>"}.'
)


def clamp_score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        score = 50
    return max(0, min(100, score))


def priority_for(score: int) -> str:
    if score >= 70:
        return LeadPriority.HOT.value
    if score >= 40:
        return LeadPriority.WARM.value
    return LeadPriority.COLD.value


def heuristic_score(lead, activity_count: int = 0, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Rule-based score used when AI scoring is not possible"""
    now = now or datetime.utcnow()
    score = 50
    reasons: List[str] = []

    if lead.phone:
        score += 15
        reasons.append("phone provided")
    if lead.interests:
        score += 10
        reasons.append("listed interests")
    if lead.interest_level == "hot":
        score += 15
        reasons.append("marked hot")
    elif lead.interest_level == "cold":
        score -= 10

    if lead.created_at:
        age_days = (now - lead.created_at).days
        if age_days < 7:
            score += 15
            reasons.append("recent")
        elif age_days > 30:
            score -= 10

    if activity_count > 0:
        score += 10
        reasons.append("has follow-up history")

    score = clamp_score(score)
    summary = "Heuristic score"
    if reasons:
        summary += ": " + ", ".join(reasons)
    return {"score": score, "priority": priority_for(score), "summary": summary, "method": "heuristic"}


def build_scoring_prompt(lead, activities: List[Any]) -> str:
    lines = [
        f"Name: {lead.name}",
        f"Source: {lead.source}",
        f"Interest level: {lead.interest_level or 'unknown'}",
        f"Interests: {', '.join(lead.interests or []) or 'none'}",
        f"Has phone: {'yes' if lead.phone else 'no'}",
        f"Status: {lead.status}",
        f"Created: {lead.created_at.isoformat() if lead.created_at else 'unknown'}",
    ]
    if lead.notes:
        lines.append(f"Notes: {lead.notes}")
    if activities:
        lines.append("Recent activity:")
        for activity in activities[:10]:
            lines.append(f"- {activity.activity_type}: {activity.description or ''}")
    return "\n".join(lines)


def normalize_ai_result(raw: Dict[str, Any]) -> Dict[str, Any]:
    score = clamp_score(raw.get("score"))
    priority = str(raw.get("priority", "")).lower()
    if priority not in VALID_PRIORITIES:
        priority = LeadPriority.WARM.value
    return {
        "score": score,
        "priority": priority,
        "summary": str(raw.get("summary") or "")[:500],
        "method": "ai",
    }


async def score_lead(lead, activities: List[Any], ai_client=None) -> Dict[str, Any]:
    """Score one lead with AI when a client is given, else heuristically"""
    if ai_client is not None:
        try:
            raw = await ai_client.generate_json(
                build_scoring_prompt(lead, activities),
                system_prompt=SCORING_SYSTEM_PROMPT,
            )
            return normalize_ai_result(raw)
        except AIServiceError as e:
            logger.warning(
                f"AI scoring failed for lead {lead.id}, using heuristic: {e.message}",
                extra={"event_type": "lead_scoring_fallback", "lead_id": str(lead.id)}
            )
    return heuristic_score(lead, len(activities))


def apply_score(lead, result: Dict[str, Any], now: Optional[datetime] = None) -> None:
    lead.ai_score = result["score"]
    lead.ai_priority = result["priority"]
    lead.ai_summary = result["summary"]
    lead.ai_scored_at = now or datetime.utcnow()
