"""Apify client against httpx.MockTransport."""

import json

import httpx
import pytest

from core.errors import MissingCredentials
from core.models import Job, ResourceEnvelope
from tools.provider import ApifyProvider, ProviderResponseError, ProviderSettings

SETTINGS = ProviderSettings(token="test-token", base_url="https://apify.test", poll_seconds=5)


def _run(status, run_id="run-1", dataset="ds-1", message=None):
    return {"data": {"id": run_id, "status": status, "defaultDatasetId": dataset, "statusMessage": message}}


class Recorder:
    """Serves queued responses and remembers the requests it saw."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)


def _provider(recorder):
    return ApifyProvider(SETTINGS, transport=httpx.MockTransport(recorder))


async def test_submit_job_posts_input_with_envelope():
    recorder = Recorder(httpx.Response(201, json=_run("READY")))

    async with _provider(recorder) as provider:
        job = await provider.submit_job(
            "apricot_blackberry/tiktok-profile-scraper",
            {"usernames": ["a"], "delayBetweenRequests": 1000},
            ResourceEnvelope(1024, 120),
        )

    [request] = recorder.requests
    assert request.method == "POST"
    assert request.url.path == "/v2/acts/apricot_blackberry~tiktok-profile-scraper/runs"
    assert request.url.params["memory"] == "1024"
    assert request.url.params["timeout"] == "120"
    assert request.headers["Authorization"] == "Bearer test-token"
    assert json.loads(request.content) == {"usernames": ["a"], "delayBetweenRequests": 1000}
    assert job == Job(job_id="run-1", job_type="apricot_blackberry/tiktok-profile-scraper", status="READY", dataset_id="ds-1")


async def test_await_completion_polls_until_terminal():
    recorder = Recorder(
        httpx.Response(200, json=_run("RUNNING")),
        httpx.Response(200, json=_run("TIMING-OUT")),
        httpx.Response(200, json=_run("TIMED-OUT", message="Actor timed out")),
    )

    async with _provider(recorder) as provider:
        job = await provider.await_completion(Job(job_id="run-1", job_type="actor", status="READY"))

    assert job.status == "TIMED-OUT"
    assert job.status_message == "Actor timed out"
    assert len(recorder.requests) == 3
    assert all(r.url.path == "/v2/actor-runs/run-1" for r in recorder.requests)
    assert recorder.requests[0].url.params["waitForFinish"] == "5"


async def test_await_completion_skips_polling_for_terminal_job():
    recorder = Recorder()

    async with _provider(recorder) as provider:
        job = Job(job_id="run-1", job_type="actor", status="SUCCEEDED", dataset_id="ds-1")
        assert await provider.await_completion(job) is job

    assert recorder.requests == []


async def test_fetch_results_reads_dataset_items():
    recorder = Recorder(httpx.Response(200, json=[{"username": "a"}, {"username": "b"}]))

    async with _provider(recorder) as provider:
        items = await provider.fetch_results(Job(job_id="run-1", job_type="actor", status="SUCCEEDED", dataset_id="ds-9"))

    assert items == [{"username": "a"}, {"username": "b"}]
    [request] = recorder.requests
    assert request.url.path == "/v2/datasets/ds-9/items"
    assert request.url.params["format"] == "json"
    assert request.url.params["clean"] == "true"


async def test_http_errors_propagate():
    recorder = Recorder(httpx.Response(401, json={"error": {"type": "user-or-token-not-found"}}))

    async with _provider(recorder) as provider:
        with pytest.raises(httpx.HTTPStatusError):
            await provider.submit_job("actor", {}, ResourceEnvelope(256, 60))


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(201, json={"unexpected": True}),
        httpx.Response(201, json={"data": {"status": "READY"}}),
        httpx.Response(201, content=b"<html>gateway error</html>"),
    ],
)
async def test_malformed_run_responses_raise(response):
    async with _provider(Recorder(response)) as provider:
        with pytest.raises(ProviderResponseError):
            await provider.submit_job("actor", {}, ResourceEnvelope(256, 60))


async def test_dataset_must_be_a_list():
    recorder = Recorder(httpx.Response(200, json={"items": []}))

    async with _provider(recorder) as provider:
        with pytest.raises(ProviderResponseError):
            await provider.fetch_results(Job(job_id="r", job_type="actor", status="SUCCEEDED", dataset_id="ds"))


async def test_fetch_without_dataset_raises():
    async with _provider(Recorder()) as provider:
        with pytest.raises(ProviderResponseError):
            await provider.fetch_results(Job(job_id="r", job_type="actor", status="SUCCEEDED"))


def test_settings_require_token(monkeypatch):
    monkeypatch.delenv("APIFY_TOKEN", raising=False)
    with pytest.raises(MissingCredentials):
        ProviderSettings.from_env()

    monkeypatch.setenv("APIFY_TOKEN", "   ")
    with pytest.raises(MissingCredentials):
        ProviderSettings.from_env()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("APIFY_TOKEN", "abc")
    monkeypatch.setenv("APIFY_API_BASE_URL", "https://proxy.local")
    monkeypatch.setenv("APIFY_POLL_SECONDS", "15")

    assert ProviderSettings.from_env() == ProviderSettings(token="abc", base_url="https://proxy.local", poll_seconds=15)
