# =============================================================================
# core/commands.py  —  Validated Commands (one per tool)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares, per tool, the exact shape of its arguments: field names, types,
#   bounds, enums and defaults.  Each class is BOTH the schema advertised to
#   the caller (via model_json_schema) AND the typed object the dispatcher
#   receives after validation.  One declaration, no drift between the two.
#
# STRICTNESS:
#   strict=True means "30" is not a number and 1 is not a boolean — the caller
#   must send the right JSON types.  Unknown keys are dropped silently, the
#   way the upstream actors ignore fields they don't know.
#
# Commands are frozen: a command belongs to the one call that produced it.
# =============================================================================

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Command(BaseModel):
    """Base for every tool command."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class TikTokProfileCommand(Command):
    usernames: list[str] = Field(description="TikTok usernames to fetch (without @ symbol)")


class AuthenticityAuditCommand(Command):
    tiktokUsernames: list[str] = Field(description="TikTok usernames to audit (without @)")
    includeRawData: bool = Field(default=False, description="Include raw profile data in response")


class ContentPerformanceCommand(Command):
    tiktokUsernames: list[str] = Field(description="TikTok usernames to analyze")
    compareMode: bool = Field(default=False, description="Compare exactly 2 creators head-to-head")


class YouTubeAnalyzerCommand(Command):
    # Passed straight through to the actor.  Never logged, never stored.
    apiKey: str = Field(description="YouTube Data API v3 key")
    channels: list[str] = Field(description="Channel URLs, @handles, or channel IDs")
    videosPerChannel: int = Field(default=30, ge=5, le=200, description="Recent videos to analyze (5-200)")
    enableSponsorshipDetection: bool = True
    enableAuthenticityCheck: bool = True
    enableRateCard: bool = True


class RateCardCommand(Command):
    tiktokUsername: str = Field(description="TikTok username (without @)")


class Brand(Command):
    category: Optional[str] = None
    name: Optional[str] = None
    targetTier: Optional[str] = None


class BrandCompatibilityCommand(Command):
    brand: Brand = Field(
        description="Brand details: { category: 'technology', name: 'Acme', targetTier: 'micro' }"
    )
    tiktokUsernames: list[str] = Field(description="Creators to evaluate")
    rankMode: bool = Field(default=False, description="Rank creators and return sorted list with top pick")


class CompetitiveIntelCommand(Command):
    mode: Literal["landscape", "benchmark"]
    tiktokUsernames: Optional[list[str]] = Field(default=None, description="Creators to analyze (landscape mode)")
    targetUsername: Optional[str] = Field(default=None, description="Target to benchmark (benchmark mode)")
    competitorUsernames: Optional[list[str]] = Field(default=None, description="Competitors (benchmark mode)")
