# =============================================================================
# core/catalogue.py  —  Tool Catalogue & Command Validation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the fixed, ordered list of tools the gateway exposes, and the ONE
#   validation routine that turns (tool name, raw arguments) into a typed
#   Command.
#
# THE CATALOGUE IS DATA:
#   Each entry pairs a name and a description with its Command model (from
#   core/commands.py).  The advertised inputSchema is generated from that
#   model, so what the caller is told and what we enforce are the same thing.
#
# DESCRIPTIONS MATTER:
#   The calling LLM reads these to decide WHEN to call a tool.  They say what
#   comes back and when to use it, not how it works internally.
# =============================================================================

from typing import Any, Optional

from pydantic import ValidationError

from core.commands import (
    AuthenticityAuditCommand,
    BrandCompatibilityCommand,
    Command,
    CompetitiveIntelCommand,
    ContentPerformanceCommand,
    RateCardCommand,
    TikTokProfileCommand,
    YouTubeAnalyzerCommand,
)
from core.errors import SchemaViolation, UnknownTool
from core.models import ToolDescriptor


# -----------------------------------------------------------------------------
# Tool definitions, in the order list_tools() reports them
# -----------------------------------------------------------------------------
_TOOLS: list[tuple[str, str, type[Command]]] = [
    (
        "get_tiktok_profile",
        """Fetch detailed profile data for a TikTok creator.

Returns:
- Follower/following counts, total likes, video count
- Engagement rate calculated from recent content
- Account age and growth velocity
- Bio link extraction for cross-platform verification
- Verification status and commerce account detection

Use when you need raw TikTok metrics for a creator.""",
        TikTokProfileCommand,
    ),
    (
        "audit_creator_authenticity",
        """Detect fake followers, bot engagement, and suspicious patterns on creator profiles.

Returns an authenticity score (0-100) based on 6 weighted signals:
- Engagement rate vs tier benchmarks (30%)
- Follower/following ratio analysis (15%)
- Growth pattern vs account age (20%)
- Content consistency (15%)
- Profile completeness (10%)
- Trust signals (verification, bio links) (10%)

Includes actionable recommendations: PROCEED, PROCEED_WITH_CAUTION, VERIFY, or AVOID.
A condensed summary per creator is returned alongside the full detail.

Use before partnering with a creator to validate authenticity.""",
        AuthenticityAuditCommand,
    ),
    (
        "analyze_content_performance",
        """Analyze creator content performance patterns and get improvement recommendations.

Returns:
- Performance rating vs tier benchmarks
- Posting frequency and consistency scores
- Growth velocity (followers/month)
- Overall performance score (0-100)
- Actionable recommendations for improvement

Can also compare two creators side-by-side using compareMode.""",
        ContentPerformanceCommand,
    ),
    (
        "analyze_youtube_creator",
        """Comprehensive YouTube creator analysis for brand partnerships.

Requires user's own YouTube Data API key (free from Google Cloud Console).

Returns:
- Creator Fusion Score (0-100) with letter grade
- Engagement analytics (rate, views, likes, comments)
- Sponsorship history detection (brands, promo codes, affiliate networks)
- Engagement authenticity analysis (5 statistical signals)
- Sponsorship rate card (integration, dedicated, shorts, usage rights)
- Partnership readiness assessment with strengths/red flags

Zero proxy cost - uses official YouTube API.""",
        YouTubeAnalyzerCommand,
    ),
    (
        "generate_rate_card",
        """Generate a sponsorship rate card for a TikTok creator.

Uses the TikTok profile data to estimate sponsorship rates based on:
- Follower count and tier
- Engagement rate
- Industry CPM benchmarks

Returns low/mid/high estimates for sponsored posts and story mentions.""",
        RateCardCommand,
    ),
    (
        "score_brand_compatibility",
        """Match a brand with compatible TikTok creators.

Analyzes:
- Niche alignment (30%)
- Engagement quality (25%)
- Brand safety (20%)
- Audience size fit (15%)
- Sponsorship readiness (10%)

Returns compatibility scores, strengths, flags, and recommendations.
Can rank multiple creators for one brand using rankMode.""",
        BrandCompatibilityCommand,
    ),
    (
        "analyze_competitive_landscape",
        """Analyze competitor creators and benchmark performance.

Two modes:
- landscape: Analyze group as competitive market (rankings, market share, insights)
- benchmark: Compare target against competitors (percentiles, gap analysis)

Returns market leader, fastest growing, highest engagement, and strategic insights.""",
        CompetitiveIntelCommand,
    ),
]

_COMMANDS: dict[str, type[Command]] = {name: model for name, _, model in _TOOLS}

_DESCRIPTORS: tuple[ToolDescriptor, ...] = tuple(
    ToolDescriptor(name=name, description=description, input_schema=model.model_json_schema())
    for name, description, model in _TOOLS
)


def list_tools() -> list[ToolDescriptor]:
    """Every tool the gateway exposes, in a stable order."""
    return list(_DESCRIPTORS)


def get_descriptor(tool_name: str) -> ToolDescriptor:
    for descriptor in _DESCRIPTORS:
        if descriptor.name == tool_name:
            return descriptor
    raise UnknownTool(tool_name)


def command_type(tool_name: str) -> type[Command]:
    try:
        return _COMMANDS[tool_name]
    except KeyError:
        raise UnknownTool(tool_name) from None


def tool_name_for(command: Command) -> str:
    """Reverse lookup: which tool a validated command belongs to."""
    for name, model in _COMMANDS.items():
        if type(command) is model:
            return name
    raise UnknownTool(type(command).__name__)


# =============================================================================
# validate — the single, generic validation routine
# =============================================================================
def validate(tool_name: str, raw_args: Optional[dict[str, Any]]) -> Command:
    """Parse raw caller arguments into the tool's typed Command.

    Applies every declared default on success.  Raises UnknownTool if the
    name isn't in the catalogue, SchemaViolation (listing each offending
    field) if the arguments don't fit the schema.  No side effects.
    """
    model = command_type(tool_name)
    try:
        return model.model_validate(raw_args if raw_args is not None else {})
    except ValidationError as exc:
        issues = [
            (".".join(str(part) for part in error["loc"]) or "arguments", error["msg"])
            for error in exc.errors()
        ]
        raise SchemaViolation(tool_name, issues) from None
