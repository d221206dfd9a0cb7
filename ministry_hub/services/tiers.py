"""
Membership tier hierarchy: free < member < partner < covenant.

An unknown or missing tier is treated as ``free`` on both sides of a check.
"""

from typing import Any, Dict, List, Optional

from ministry_hub.core.config import settings

TIER_ORDER: List[str] = ["free", "member", "partner", "covenant"]

TIER_NAMES: Dict[str, str] = {
    "free": "Free",
    "member": "Member",
    "partner": "Partner",
    "covenant": "Covenant",
}


def normalize_tier(tier: Optional[str]) -> str:
    if tier and tier.lower() in TIER_ORDER:
        return tier.lower()
    return "free"


def tier_index(tier: Optional[str]) -> int:
    return TIER_ORDER.index(normalize_tier(tier))


def has_tier_access(member_tier: Optional[str], required_tier: Optional[str], is_admin: bool = False) -> bool:
    """True when the member's tier meets the requirement, or the member is admin"""
    if is_admin:
        return True
    return tier_index(member_tier) >= tier_index(required_tier)


def accessible_tiers(member_tier: Optional[str]) -> List[str]:
    return TIER_ORDER[: tier_index(member_tier) + 1]


def tier_info(member_tier: Optional[str]) -> Dict[str, Any]:
    tier = normalize_tier(member_tier)
    benefits = settings.get_tier_benefits()
    return {
        "tier": tier,
        "name": TIER_NAMES[tier],
        "rank": tier_index(tier),
        "benefits": benefits.get(tier, []),
        "accessible_tiers": accessible_tiers(tier),
    }
