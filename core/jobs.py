# =============================================================================
# core/jobs.py  —  Static Tool → Provider Job Table
# =============================================================================
#
# Every remote tool maps to exactly one provider job: which actor runs it,
# how much memory and time it may use, and how the validated command is
# projected into the actor's input.  The table is built once at import and
# never changes; provider identifiers appear nowhere else in the codebase.
#
# Envelopes are the provider-side ceilings.  The gateway enforces no timeout
# of its own: if an actor runs past its envelope, the provider stops it and
# reports TIMED-OUT.
# =============================================================================

from types import MappingProxyType
from typing import Any, Mapping

from core.commands import (
    AuthenticityAuditCommand,
    BrandCompatibilityCommand,
    CompetitiveIntelCommand,
    ContentPerformanceCommand,
    RateCardCommand,
    TikTokProfileCommand,
    YouTubeAnalyzerCommand,
)
from core.errors import UnknownTool
from core.models import JobSpec, ResourceEnvelope

# Apify actor ids
TIKTOK_PROFILE_ACTOR = "apricot_blackberry/tiktok-profile-scraper"
AUTHENTICITY_AUDIT_ACTOR = "apricot_blackberry/audience-authenticity-audit"
CONTENT_PERFORMANCE_ACTOR = "apricot_blackberry/content-performance-tracker"
YOUTUBE_ANALYZER_ACTOR = "apricot_blackberry/youtube-creator-analyzer"
BRAND_COMPATIBILITY_ACTOR = "apricot_blackberry/brand-compatibility-scorer"
COMPETITIVE_INTEL_ACTOR = "apricot_blackberry/competitive-intelligence"

# Pause the scraper between profile requests (ms) to stay under TikTok limits.
PROFILE_REQUEST_DELAY_MS = 1000


# -----------------------------------------------------------------------------
# Payload projections: command → actor input
# -----------------------------------------------------------------------------
def _tiktok_profile_input(command: TikTokProfileCommand) -> dict[str, Any]:
    return {"usernames": list(command.usernames), "delayBetweenRequests": PROFILE_REQUEST_DELAY_MS}


def _rate_card_profile_input(command: RateCardCommand) -> dict[str, Any]:
    return {"usernames": [command.tiktokUsername], "delayBetweenRequests": PROFILE_REQUEST_DELAY_MS}


def _authenticity_audit_input(command: AuthenticityAuditCommand) -> dict[str, Any]:
    return {"tiktokUsernames": list(command.tiktokUsernames), "includeRawData": command.includeRawData}


def _content_performance_input(command: ContentPerformanceCommand) -> dict[str, Any]:
    return {"tiktokUsernames": list(command.tiktokUsernames), "compareMode": command.compareMode}


def _youtube_analyzer_input(command: YouTubeAnalyzerCommand) -> dict[str, Any]:
    return command.model_dump()


def _brand_compatibility_input(command: BrandCompatibilityCommand) -> dict[str, Any]:
    return {
        "brand": command.brand.model_dump(exclude_none=True),
        "tiktokUsernames": list(command.tiktokUsernames),
        "rankMode": command.rankMode,
    }


def _competitive_intel_input(command: CompetitiveIntelCommand) -> dict[str, Any]:
    # Only the fields the chosen mode uses are sent; absent ones are omitted.
    if command.mode == "benchmark":
        fields = ("targetUsername", "competitorUsernames")
    else:
        fields = ("tiktokUsernames",)
    payload: dict[str, Any] = {"mode": command.mode}
    for name in fields:
        value = getattr(command, name)
        if value is not None:
            payload[name] = value
    return payload


_JOB_SPECS = (
    JobSpec("get_tiktok_profile", TIKTOK_PROFILE_ACTOR, ResourceEnvelope(1024, 120), _tiktok_profile_input),
    JobSpec("audit_creator_authenticity", AUTHENTICITY_AUDIT_ACTOR, ResourceEnvelope(1024, 180), _authenticity_audit_input),
    JobSpec("analyze_content_performance", CONTENT_PERFORMANCE_ACTOR, ResourceEnvelope(1024, 180), _content_performance_input),
    JobSpec("analyze_youtube_creator", YOUTUBE_ANALYZER_ACTOR, ResourceEnvelope(256, 300), _youtube_analyzer_input),
    # Stage one of the rate card: a single-profile fetch with a tighter timeout.
    JobSpec("generate_rate_card", TIKTOK_PROFILE_ACTOR, ResourceEnvelope(1024, 60), _rate_card_profile_input),
    JobSpec("score_brand_compatibility", BRAND_COMPATIBILITY_ACTOR, ResourceEnvelope(1024, 180), _brand_compatibility_input),
    JobSpec("analyze_competitive_landscape", COMPETITIVE_INTEL_ACTOR, ResourceEnvelope(1024, 240), _competitive_intel_input),
)

JOB_TABLE: Mapping[str, JobSpec] = MappingProxyType({spec.tool_name: spec for spec in _JOB_SPECS})


def job_spec(tool_name: str) -> JobSpec:
    try:
        return JOB_TABLE[tool_name]
    except KeyError:
        raise UnknownTool(tool_name) from None
