# =============================================================================
# core/pricing.py  —  Rate Card Generator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a creator's raw TikTok metrics (followers, engagement rate) into a
#   tiered sponsorship price estimate.  Pure function, no I/O, same input →
#   same output every time.
#
# THE MODEL IN FOUR STEPS:
#   1. Followers pick a TIER (Nano … Mega).  The tier picks a CPM triple
#      and a pair of price FLOORS.
#   2. Engagement rate picks a MULTIPLIER (0.70 … 1.40).
#   3. Estimated views = followers × 15% (observed TikTok reach per post).
#   4. rate = views/1000 × CPM × multiplier, never below the floor.
#
# NEVER RAISES:
#   Missing or junk metrics degrade to zero, which lands on Nano-tier floor
#   pricing.  A scraped profile with a hole in it still gets a card.
# =============================================================================

import math
from typing import Any, Mapping

from core.models import PriceRange, RateCard


# -----------------------------------------------------------------------------
# Tier tables
# -----------------------------------------------------------------------------
# Thresholds are inclusive lower bounds, checked highest first, so exactly
# 100,000 followers is Mid-Tier, not Micro.
# -----------------------------------------------------------------------------
TIER_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (1_000_000, "Mega"),
    (500_000, "Macro"),
    (100_000, "Mid-Tier"),
    (10_000, "Micro"),
    (0, "Nano"),
)

# USD per 1,000 views: (low, mid, high).  Rises within and across tiers.
CPM_TABLE: dict[str, tuple[float, float, float]] = {
    "Nano": (10, 20, 40),
    "Micro": (15, 30, 50),
    "Mid-Tier": (20, 40, 70),
    "Macro": (25, 50, 90),
    "Mega": (30, 60, 120),
}

# Minimum quotable price: (post, story).  Rises across tiers.
FLOOR_TABLE: dict[str, tuple[int, int]] = {
    "Nano": (50, 25),
    "Micro": (200, 100),
    "Mid-Tier": (1000, 400),
    "Macro": (5000, 2000),
    "Mega": (15000, 5000),
}

# (minimum engagement %, multiplier), checked highest first.
ENGAGEMENT_BANDS: tuple[tuple[float, float], ...] = (
    (10, 1.40),
    (7, 1.25),
    (5, 1.10),
    (3, 1.00),
    (1, 0.85),
)
LOWEST_MULTIPLIER = 0.70

REACH_RATIO = 0.15          # Share of followers who see a given post
STORY_CPM_FACTOR = 0.3      # Story mentions are ephemeral, worth less per view
FLOOR_STEPS = (1, 1.5, 2.5)  # low / mid / high floor scaling

DISCLAIMER = (
    "Estimates based on industry benchmarks. Actual rates depend on niche, "
    "exclusivity, and negotiation."
)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; quotes round .5 up.
    return math.floor(value + 0.5)


def _metric(profile: Mapping[str, Any], key: str) -> float:
    """Read a numeric metric, treating anything unusable as 0."""
    value = profile.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return value


def tier_for(followers: float) -> str:
    for threshold, tier in TIER_THRESHOLDS:
        if followers >= threshold:
            return tier
    return "Nano"


def engagement_multiplier(engagement_rate: float) -> float:
    for minimum, multiplier in ENGAGEMENT_BANDS:
        if engagement_rate >= minimum:
            return multiplier
    return LOWEST_MULTIPLIER


def price_card(profile: Mapping[str, Any]) -> RateCard:
    """Compute a RateCard from a profile snapshot.

    Args:
        profile: A profile record as returned by the TikTok profile scraper.
                 Only ``followers`` and ``engagementRate`` (a percentage,
                 e.g. 6 for 6%) are read.

    Returns:
        A RateCard whose low <= mid <= high for both placement types.
    """
    followers = _metric(profile, "followers")
    multiplier = engagement_multiplier(_metric(profile, "engagementRate"))

    tier = tier_for(followers)
    cpm = CPM_TABLE[tier]
    post_floor, story_floor = FLOOR_TABLE[tier]

    views = followers * REACH_RATIO

    def quote(base_cpm: float, floor: int) -> int:
        return max(_round_half_up(views / 1000 * base_cpm * multiplier), floor)

    def price_range(cpm_scale: float, floor: int) -> PriceRange:
        low, mid, high = (
            quote(point * cpm_scale, _round_half_up(floor * step))
            for point, step in zip(cpm, FLOOR_STEPS)
        )
        return PriceRange(low=low, mid=mid, high=high)

    return RateCard(
        tier=tier,
        estimated_views_per_post=_round_half_up(views),
        engagement_multiplier=multiplier,
        sponsored_post=price_range(1, post_floor),
        story_mention=price_range(STORY_CPM_FACTOR, story_floor),
        disclaimer=DISCLAIMER,
    )
