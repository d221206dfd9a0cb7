"""
Unit Tests for the membership tier hierarchy
"""
import pytest

from ministry_hub.services.tiers import (
    accessible_tiers,
    has_tier_access,
    normalize_tier,
    tier_index,
    tier_info,
)


@pytest.mark.parametrize("member_tier, required, expected", [
    ("free", "free", True),
    ("free", "member", False),
    ("member", "member", True),
    ("partner", "member", True),
    ("partner", "covenant", False),
    ("covenant", "partner", True),
    (None, "free", True),
    ("bogus", "member", False),
    ("covenant", "bogus", True),
])
def test_has_tier_access(member_tier, required, expected):
    assert has_tier_access(member_tier, required) is expected


def test_admin_bypasses_tiers():
    assert has_tier_access("free", "covenant", is_admin=True) is True


def test_normalize_tier():
    assert normalize_tier("PARTNER") == "partner"
    assert normalize_tier("") == "free"
    assert normalize_tier(None) == "free"
    assert tier_index("covenant") == 3


def test_accessible_tiers():
    assert accessible_tiers("partner") == ["free", "member", "partner"]
    assert accessible_tiers("unknown") == ["free"]


def test_tier_info():
    info = tier_info("member")

    assert info["tier"] == "member"
    assert info["name"] == "Member"
    assert info["rank"] == 1
    assert info["accessible_tiers"] == ["free", "member"]
    assert isinstance(info["benefits"], list)
