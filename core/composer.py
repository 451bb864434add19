# =============================================================================
# core/composer.py  —  Result Composer
# =============================================================================
#
# Shapes a ResultSet into what the caller receives.  Most tools pass their
# records through untouched.  The authenticity audit is the exception: its
# records are large, so a one-line-per-creator summary goes in front of the
# full detail and the agent can usually stop reading there.  The rate card
# is a single locally computed record and goes out unwrapped.
#
# compose() never mutates the records it is given.
# =============================================================================

import json
from typing import Any, Optional

from core.models import ResultSet


def _dig(record: Any, *path: str) -> Optional[Any]:
    """Follow ``path`` through nested dicts; None as soon as a step is missing."""
    value = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _count(value: Any) -> int:
    return len(value) if isinstance(value, list) else 0


def summarize_audit(record: dict[str, Any]) -> dict[str, Any]:
    """Condensed view of one audit record.  Absent fields become None / 0."""
    return {
        "username": _dig(record, "username"),
        "score": _dig(record, "audit", "overallScore"),
        "rating": _dig(record, "audit", "rating", "label"),
        "recommendation": _dig(record, "audit", "recommendation", "action"),
        "redFlags": _count(_dig(record, "redFlags")),
        "greenFlags": _count(_dig(record, "greenFlags")),
    }


def compose(tool_name: str, result_set: ResultSet) -> Any:
    if tool_name == "generate_rate_card" and len(result_set) == 1:
        # The locally priced card is a single record; callers get it bare.
        return result_set[0]
    if tool_name == "audit_creator_authenticity":
        return {
            "summary": [summarize_audit(record) for record in result_set],
            "details": result_set,
        }
    return result_set


def render(payload: Any) -> str:
    """Serialize a composed payload for the text content block."""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)
