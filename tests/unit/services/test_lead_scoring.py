"""
Unit Tests for lead scoring (heuristic and AI paths)
"""
import pytest
from datetime import datetime, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock

from ministry_hub.core.exceptions import AIServiceError
from ministry_hub.services.lead_scoring import (
    apply_score,
    build_scoring_prompt,
    clamp_score,
    heuristic_score,
    normalize_ai_result,
    priority_for,
    score_lead,
)

NOW = datetime(2024, 6, 15, 12, 0, 0)


def make_lead(**kwargs):
    defaults = dict(
        id="lead-1", name="Jordan Visitor", email="jordan@example.com", phone=None,
        source="website", interest_level=None, interests=[], notes=None, status="new",
        created_at=NOW - timedelta(days=10),
    )
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


class TestHeuristicScore:
    """Rule-based fallback"""

    def test_baseline(self):
        result = heuristic_score(make_lead(), now=NOW)

        assert result["score"] == 50
        assert result["priority"] == "warm"
        assert result["method"] == "heuristic"

    def test_hot_recent_lead(self):
        lead = make_lead(
            phone="555-0100", interests=["small groups"], interest_level="hot",
            created_at=NOW - timedelta(days=2),
        )

        # 50 + 15 phone + 10 interests + 15 hot + 15 recent + 10 activity = 115, clamped
        result = heuristic_score(lead, activity_count=1, now=NOW)

        assert result["score"] == 100
        assert result["priority"] == "hot"

    def test_cold_stale_lead(self):
        lead = make_lead(interest_level="cold", created_at=NOW - timedelta(days=45))

        result = heuristic_score(lead, now=NOW)

        assert result["score"] == 30
        assert result["priority"] == "cold"

    def test_activity_bonus(self):
        assert heuristic_score(make_lead(), activity_count=3, now=NOW)["score"] == 60


@pytest.mark.parametrize("score, priority", [(100, "hot"), (70, "hot"), (69, "warm"), (40, "warm"), (39, "cold"), (0, "cold")])
def test_priority_thresholds(score, priority):
    assert priority_for(score) == priority


@pytest.mark.parametrize("raw, expected", [(150, 100), (-5, 0), ("72", 72), (55.6, 56), ("n/a", 50), (None, 50)])
def test_clamp_score(raw, expected):
    assert clamp_score(raw) == expected


class TestAIResult:

    def test_normalize_valid(self):
        result = normalize_ai_result({"score": 82, "priority": "HOT", "summary": "Eager to join"})

        assert result == {"score": 82, "priority": "hot", "summary": "Eager to join", "method": "ai"}

    def test_invalid_priority_becomes_warm(self):
        result = normalize_ai_result({"score": 250, "priority": "urgent"})

        assert result["score"] == 100
        assert result["priority"] == "warm"

    def test_prompt_mentions_lead_details(self):
        lead = make_lead(phone="555", interests=["worship"], notes="Visited twice")
        activities = [SimpleNamespace(activity_type="call", description="Left voicemail")]

        prompt = build_scoring_prompt(lead, activities)

        assert "Jordan Visitor" in prompt
        assert "worship" in prompt
        assert "Has phone: yes" in prompt
        assert "call: Left voicemail" in prompt


class TestScoreLead:

    @pytest.mark.asyncio
    async def test_uses_ai_client(self):
        client = SimpleNamespace(generate_json=AsyncMock(return_value={"score": 77, "priority": "hot", "summary": "ok"}))

        result = await score_lead(make_lead(), [], ai_client=client)

        assert result["method"] == "ai"
        assert result["score"] == 77
        client.generate_json.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_falls_back_when_ai_fails(self):
        client = SimpleNamespace(generate_json=AsyncMock(side_effect=AIServiceError("overloaded")))

        result = await score_lead(make_lead(created_at=datetime.utcnow()), [], ai_client=client)

        assert result["method"] == "heuristic"
        assert result["score"] == 65

    @pytest.mark.asyncio
    async def test_heuristic_without_client(self):
        result = await score_lead(make_lead(created_at=datetime.utcnow()), [object()])

        assert result["method"] == "heuristic"
        assert result["score"] == 75


def test_apply_score_sets_fields():
    lead = make_lead(ai_score=None, ai_priority=None, ai_summary=None, ai_scored_at=None)

    apply_score(lead, {"score": 64, "priority": "warm", "summary": "Follow up"}, now=NOW)

    assert (lead.ai_score, lead.ai_priority, lead.ai_summary, lead.ai_scored_at) == (64, "warm", "Follow up", NOW)
