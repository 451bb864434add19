"""Job table projections and the dispatch pipeline against a fake provider."""

import asyncio

import pytest

from core.catalogue import list_tools, validate
from core.dispatcher import dispatch
from core.errors import ExternalJobError, JobTimedOut, NotFound
from core.jobs import (
    COMPETITIVE_INTEL_ACTOR,
    JOB_TABLE,
    TIKTOK_PROFILE_ACTOR,
    YOUTUBE_ANALYZER_ACTOR,
    job_spec,
)
from core.models import ResourceEnvelope


def test_every_catalogue_tool_has_a_job():
    assert set(JOB_TABLE) == {tool.name for tool in list_tools()}


def test_job_table_is_read_only():
    with pytest.raises(TypeError):
        JOB_TABLE["get_tiktok_profile"] = None


@pytest.mark.parametrize(
    "tool, memory, timeout",
    [
        ("get_tiktok_profile", 1024, 120),
        ("audit_creator_authenticity", 1024, 180),
        ("analyze_content_performance", 1024, 180),
        ("analyze_youtube_creator", 256, 300),
        ("generate_rate_card", 1024, 60),
        ("score_brand_compatibility", 1024, 180),
        ("analyze_competitive_landscape", 1024, 240),
    ],
)
def test_envelopes_are_fixed_per_tool(tool, memory, timeout):
    assert job_spec(tool).envelope == ResourceEnvelope(memory, timeout)


async def test_profile_payload_and_envelope(provider):
    provider.results[TIKTOK_PROFILE_ACTOR] = [{"username": "a"}, {"username": "b"}]

    records = await dispatch(validate("get_tiktok_profile", {"usernames": ["a", "b"]}), provider)

    assert records == [{"username": "a"}, {"username": "b"}]
    [submission] = provider.submissions
    assert submission.job_type == TIKTOK_PROFILE_ACTOR
    assert submission.payload == {"usernames": ["a", "b"], "delayBetweenRequests": 1000}
    assert submission.envelope == ResourceEnvelope(1024, 120)


async def test_youtube_payload_carries_every_field(provider):
    command = validate("analyze_youtube_creator", {"apiKey": "secret", "channels": ["@veritasium"], "enableRateCard": False})

    await dispatch(command, provider)

    [submission] = provider.submissions
    assert submission.job_type == YOUTUBE_ANALYZER_ACTOR
    assert submission.payload == {
        "apiKey": "secret",
        "channels": ["@veritasium"],
        "videosPerChannel": 30,
        "enableSponsorshipDetection": True,
        "enableAuthenticityCheck": True,
        "enableRateCard": False,
    }


async def test_brand_payload_omits_unset_brand_fields(provider):
    command = validate("score_brand_compatibility", {"brand": {"category": "beauty"}, "tiktokUsernames": ["a"], "rankMode": True})

    await dispatch(command, provider)

    assert provider.submissions[0].payload == {
        "brand": {"category": "beauty"},
        "tiktokUsernames": ["a"],
        "rankMode": True,
    }


@pytest.mark.parametrize(
    "arguments, payload",
    [
        (
            {"mode": "benchmark", "targetUsername": "t", "competitorUsernames": ["c1", "c2"], "tiktokUsernames": ["x"]},
            {"mode": "benchmark", "targetUsername": "t", "competitorUsernames": ["c1", "c2"]},
        ),
        (
            {"mode": "landscape", "tiktokUsernames": ["a", "b"], "targetUsername": "ignored"},
            {"mode": "landscape", "tiktokUsernames": ["a", "b"]},
        ),
        ({"mode": "landscape"}, {"mode": "landscape"}),
    ],
)
async def test_competitive_payload_depends_on_mode(provider, arguments, payload):
    await dispatch(validate("analyze_competitive_landscape", arguments), provider)

    [submission] = provider.submissions
    assert submission.job_type == COMPETITIVE_INTEL_ACTOR
    assert submission.payload == payload


async def test_failed_job_surfaces_job_type_and_reason(provider):
    provider.outcomes[TIKTOK_PROFILE_ACTOR] = "FAILED"
    provider.messages[TIKTOK_PROFILE_ACTOR] = "Actor crashed"

    with pytest.raises(ExternalJobError) as excinfo:
        await dispatch(validate("get_tiktok_profile", {"usernames": ["a"]}), provider)

    error = excinfo.value
    assert not isinstance(error, JobTimedOut)
    assert error.job_type == TIKTOK_PROFILE_ACTOR
    assert error.reason == "Actor crashed"
    assert error.status == "FAILED"


async def test_aborted_job_without_message_still_explains(provider):
    provider.outcomes[TIKTOK_PROFILE_ACTOR] = "ABORTED"

    with pytest.raises(ExternalJobError, match="ABORTED"):
        await dispatch(validate("get_tiktok_profile", {"usernames": ["a"]}), provider)


async def test_timed_out_job_is_distinguished(provider):
    provider.outcomes[YOUTUBE_ANALYZER_ACTOR] = "TIMED-OUT"

    with pytest.raises(JobTimedOut) as excinfo:
        await dispatch(validate("analyze_youtube_creator", {"apiKey": "k", "channels": ["c"]}), provider)

    assert excinfo.value.status == "TIMED-OUT"
    assert excinfo.value.job_type == YOUTUBE_ANALYZER_ACTOR


async def test_rate_card_prices_first_profile(provider):
    provider.results[TIKTOK_PROFILE_ACTOR] = [
        {"username": "creator", "followers": 250_000, "engagementRate": 6, "bio": "hi"},
        {"username": "someone_else", "followers": 5},
    ]

    [record] = await dispatch(validate("generate_rate_card", {"tiktokUsername": "creator"}), provider)

    assert record["username"] == "creator"
    assert record["followers"] == 250_000
    assert record["engagementRate"] == 6
    assert record["rateCard"]["tier"] == "Mid-Tier"
    assert record["rateCard"]["sponsoredPost"]["mid"] == 1650

    [submission] = provider.submissions
    assert submission.payload == {"usernames": ["creator"], "delayBetweenRequests": 1000}
    assert submission.envelope == ResourceEnvelope(1024, 60)


async def test_rate_card_for_missing_profile_is_not_found(provider):
    with pytest.raises(NotFound) as excinfo:
        await dispatch(validate("generate_rate_card", {"tiktokUsername": "ghost"}), provider)

    assert excinfo.value.identifier == "ghost"
    assert str(excinfo.value) == "Could not find TikTok profile: @ghost"
    # Only the profile fetch ran.
    assert len(provider.submissions) == 1


async def test_concurrent_dispatches_do_not_share_state(provider):
    provider.delay = 0.01
    provider.results[TIKTOK_PROFILE_ACTOR] = [{"username": "p", "followers": 1_500_000, "engagementRate": 2}]
    provider.results[COMPETITIVE_INTEL_ACTOR] = [{"marketLeader": "x"}]

    profile_command = validate("get_tiktok_profile", {"usernames": ["p"]})
    intel_command = validate("analyze_competitive_landscape", {"mode": "landscape", "tiktokUsernames": ["x", "y"]})

    profiles, intel = await asyncio.gather(dispatch(profile_command, provider), dispatch(intel_command, provider))

    assert profiles == [{"username": "p", "followers": 1_500_000, "engagementRate": 2}]
    assert intel == [{"marketLeader": "x"}]
    assert profile_command.usernames == ["p"]
    assert intel_command.tiktokUsernames == ["x", "y"]
    assert {s.job_type for s in provider.submissions} == {TIKTOK_PROFILE_ACTOR, COMPETITIVE_INTEL_ACTOR}
