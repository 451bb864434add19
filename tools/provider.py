# =============================================================================
# tools/provider.py  —  Apify Provider Client
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Talks to the Apify REST API (v2) on behalf of the dispatcher.  It
#   implements the three-call provider contract from core/dispatcher.py:
#
#     submit_job       POST /v2/acts/{actor}/runs?memory=&timeout=
#     await_completion GET  /v2/actor-runs/{run}?waitForFinish=N   (repeat)
#     fetch_results    GET  /v2/datasets/{dataset}/items?format=json&clean=true
#
# WHY httpx.AsyncClient?
#   Tool calls run as asyncio tasks on one event loop.  A single AsyncClient
#   gives every call a shared connection pool with no per-call state, so
#   concurrent tool calls can use it without any locking.
#
# WAITING:
#   Apify's waitForFinish holds the request open for up to N seconds and
#   returns early once the run is terminal.  We loop on it until the run
#   reaches SUCCEEDED / FAILED / TIMED-OUT / ABORTED.  There is no local
#   deadline: the run's own timeout (from the resource envelope) guarantees
#   Apify eventually reports a terminal state.
#
# CONFIGURATION:
#   APIFY_TOKEN          required, read once at startup
#   APIFY_API_BASE_URL   default https://api.apify.com
#   APIFY_POLL_SECONDS   long-poll window per status request, default 60
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from core.errors import MissingCredentials
from core.models import Job, ResourceEnvelope, ResultSet

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.apify.com"
DEFAULT_POLL_SECONDS = 60


class ProviderResponseError(Exception):
    """Apify answered, but not with something we can read."""


@dataclass(frozen=True)
class ProviderSettings:
    token: str
    base_url: str = DEFAULT_BASE_URL
    poll_seconds: int = DEFAULT_POLL_SECONDS

    @classmethod
    def from_env(cls) -> "ProviderSettings":
        """Read provider settings from the environment.

        Call load_dotenv() first if a .env file should be honoured.
        Raises MissingCredentials when APIFY_TOKEN is unset or blank.
        """
        token = os.environ.get("APIFY_TOKEN", "").strip()
        if not token:
            raise MissingCredentials("APIFY_TOKEN environment variable is required")
        return cls(
            token=token,
            base_url=os.environ.get("APIFY_API_BASE_URL", DEFAULT_BASE_URL),
            poll_seconds=int(os.environ.get("APIFY_POLL_SECONDS", DEFAULT_POLL_SECONDS)),
        )


def _actor_path_id(actor_id: str) -> str:
    # "user/actor-name" is addressed as "user~actor-name" in URLs.
    return actor_id.replace("/", "~")


class ApifyProvider:
    """Async Apify client.  Create one per process and close it on shutdown."""

    def __init__(self, settings: ProviderSettings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {settings.token}"},
            # Long-poll requests stay open for poll_seconds; leave headroom.
            timeout=httpx.Timeout(30.0, read=settings.poll_seconds + 30.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApifyProvider":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # Provider contract
    # -------------------------------------------------------------------------
    async def submit_job(self, job_type: str, payload: dict[str, Any], envelope: ResourceEnvelope) -> Job:
        logger.debug("Starting %s (memory=%sMB, timeout=%ss)", job_type, envelope.memory_mb, envelope.timeout_seconds)
        data = await self._request_data(
            "POST",
            f"/v2/acts/{_actor_path_id(job_type)}/runs",
            params={"memory": envelope.memory_mb, "timeout": envelope.timeout_seconds},
            json=payload,
        )
        job = self._to_job(job_type, data)
        logger.info("Started %s run %s", job_type, job.job_id)
        return job

    async def await_completion(self, job: Job) -> Job:
        while not job.is_terminal:
            data = await self._request_data(
                "GET",
                f"/v2/actor-runs/{job.job_id}",
                params={"waitForFinish": self._settings.poll_seconds},
            )
            job = self._to_job(job.job_type, data)
            logger.debug("Run %s status: %s", job.job_id, job.status)
        logger.info("Run %s finished: %s", job.job_id, job.status)
        return job

    async def fetch_results(self, job: Job) -> ResultSet:
        if not job.dataset_id:
            raise ProviderResponseError(f"Run {job.job_id} has no default dataset")
        response = await self._client.get(
            f"/v2/datasets/{job.dataset_id}/items",
            params={"format": "json", "clean": "true"},
        )
        response.raise_for_status()
        items = self._json(response)
        if not isinstance(items, list):
            raise ProviderResponseError(f"Dataset {job.dataset_id} did not return a list of items")
        return items

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    async def _request_data(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        response = await self._client.request(method, path, **kwargs)
        response.raise_for_status()
        body = self._json(response)
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ProviderResponseError(f"Unexpected response from {method} {path}: missing 'data' object")
        return data

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderResponseError(f"Invalid JSON from {response.request.url.path}: {exc}") from exc

    @staticmethod
    def _to_job(job_type: str, data: dict[str, Any]) -> Job:
        run_id = data.get("id")
        status = data.get("status")
        if not run_id or not status:
            raise ProviderResponseError(f"Run record for {job_type} is missing 'id' or 'status'")
        return Job(
            job_id=run_id,
            job_type=job_type,
            status=status,
            dataset_id=data.get("defaultDatasetId"),
            status_message=data.get("statusMessage"),
        )
