"""Result composition and the audit summary projection."""

import copy
import json

from core.composer import compose, render, summarize_audit

FULL_AUDIT = {
    "username": "creator",
    "audit": {
        "overallScore": 82,
        "rating": {"label": "Good"},
        "recommendation": {"action": "PROCEED"},
    },
    "redFlags": ["sudden follower spike"],
    "greenFlags": ["verified", "consistent posting", "bio link"],
}


def test_default_tools_pass_records_through():
    records = [{"a": 1}, {"b": 2}]
    assert compose("get_tiktok_profile", records) is records
    assert compose("score_brand_compatibility", []) == []


def test_audit_summary_projects_known_fields():
    assert summarize_audit(FULL_AUDIT) == {
        "username": "creator",
        "score": 82,
        "rating": "Good",
        "recommendation": "PROCEED",
        "redFlags": 1,
        "greenFlags": 3,
    }


def test_audit_summary_tolerates_missing_fields():
    assert summarize_audit({"username": "sparse", "audit": {"rating": "not-a-dict"}, "redFlags": None}) == {
        "username": "sparse",
        "score": None,
        "rating": None,
        "recommendation": None,
        "redFlags": 0,
        "greenFlags": 0,
    }


def test_audit_payload_has_summary_and_untouched_details():
    records = [FULL_AUDIT, {"username": "empty"}]
    before = copy.deepcopy(records)

    payload = compose("audit_creator_authenticity", records)

    assert [row["username"] for row in payload["summary"]] == ["creator", "empty"]
    assert payload["details"] == before
    assert records == before


def test_rate_card_record_is_unwrapped():
    record = {"username": "creator", "rateCard": {"tier": "Nano"}}
    assert compose("generate_rate_card", [record]) == record


def test_render_is_indented_json():
    text = render({"summary": [], "details": [{"name": "Zoë"}]})
    assert json.loads(text) == {"summary": [], "details": [{"name": "Zoë"}]}
    assert "\n  " in text
    assert "Zoë" in text
