# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the gateway)
# =============================================================================
#
# Plain dataclasses for everything that flows through the gateway except the
# validated commands themselves (those live in core/commands.py because they
# carry a schema).
#
# Everything here is frozen.  A ToolDescriptor or JobSpec is built once at
# import time and shared by every request; a RateCard belongs to the single
# call that computed it.  Nothing is ever mutated after construction.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Callable, Optional


# -----------------------------------------------------------------------------
# ToolDescriptor — one entry of the catalogue the caller can introspect
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A named, schema-described operation exposed to the caller."""

    name: str                          # "generate_rate_card"
    description: str                   # Read by the calling LLM to pick a tool
    input_schema: dict[str, Any]       # JSON Schema for the arguments

    def as_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# ResourceEnvelope — the ceiling a remote job may consume
# -----------------------------------------------------------------------------
# Fixed per tool.  The caller never gets to choose these.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResourceEnvelope:
    memory_mb: int
    timeout_seconds: int


# -----------------------------------------------------------------------------
# JobSpec — one row of the static tool → provider job table
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class JobSpec:
    """How a tool's command turns into a provider job.

    ``project`` receives the validated command and returns the provider's
    input payload.  It must only read the command.
    """

    tool_name: str
    job_type: str                      # Provider-side identifier (Apify actor)
    envelope: ResourceEnvelope
    project: Callable[[Any], dict[str, Any]]


# -----------------------------------------------------------------------------
# Job — the provider's handle on a submitted unit of work
# -----------------------------------------------------------------------------
# Remote lifecycle: READY → RUNNING → SUCCEEDED | FAILED | TIMED-OUT | ABORTED.
# We only ever act on the terminal state.
# -----------------------------------------------------------------------------
TERMINAL_STATUSES = frozenset({"SUCCEEDED", "FAILED", "TIMED-OUT", "ABORTED"})


@dataclass(frozen=True)
class Job:
    job_id: str
    job_type: str
    status: str
    dataset_id: Optional[str] = None
    status_message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def succeeded(self) -> bool:
        return self.status == "SUCCEEDED"


# -----------------------------------------------------------------------------
# PriceRange / RateCard — the pricing model's output
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PriceRange:
    """Low/mid/high quote for one placement type.  Always low <= mid <= high."""

    low: int
    mid: int
    high: int
    currency: str = "USD"


@dataclass(frozen=True)
class RateCard:
    """A sponsorship price estimate for a single creator profile."""

    tier: str                          # "Nano" … "Mega"
    estimated_views_per_post: int
    engagement_multiplier: float
    sponsored_post: PriceRange
    story_mention: PriceRange
    disclaimer: str

    def as_payload(self) -> dict[str, Any]:
        """camelCase dict, the shape callers of the gateway expect."""
        return {
            "tier": self.tier,
            "estimatedViewsPerPost": self.estimated_views_per_post,
            "engagementMultiplier": self.engagement_multiplier,
            "sponsoredPost": _range_payload(self.sponsored_post),
            "storyMention": _range_payload(self.story_mention),
            "disclaimer": self.disclaimer,
        }


def _range_payload(price: PriceRange) -> dict[str, Any]:
    return {"low": price.low, "mid": price.mid, "high": price.high, "currency": price.currency}


# -----------------------------------------------------------------------------
# ToolResponse — what one call_tool hands back over the channel
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResponse:
    text: str
    is_error: bool = False

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            payload["isError"] = True
        return payload


# Records produced by one completed job, in provider order.  Read-only.
ResultSet = list[dict[str, Any]]
