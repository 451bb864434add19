# =============================================================================
# core/dispatcher.py  —  Remote Job Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Takes a validated Command, looks up its row in the job table, runs the
#   job on the provider, and hands back the records it produced.
#
#   submit → await terminal state → fetch records
#
# The provider is injected.  This module only knows the three-call contract
# in JobProvider below, so tests swap in an in-memory fake and the real
# Apify client lives in tools/provider.py.
#
# CONCURRENCY:
#   Each dispatch owns its command, job and records.  The only shared things
#   are the job table (read-only) and the provider (stateless apart from its
#   connection pool), so concurrent dispatches need no locking.
# =============================================================================

from typing import Any, Protocol

from core.catalogue import tool_name_for
from core.commands import Command, RateCardCommand
from core.errors import ExternalJobError, JobTimedOut, NotFound
from core.jobs import job_spec
from core.models import Job, JobSpec, ResourceEnvelope, ResultSet
from core.pricing import price_card


class JobProvider(Protocol):
    """The external computation backend, seen as a black box."""

    async def submit_job(self, job_type: str, payload: dict[str, Any], envelope: ResourceEnvelope) -> Job: ...

    async def await_completion(self, job: Job) -> Job: ...

    async def fetch_results(self, job: Job) -> ResultSet: ...


async def run_job(spec: JobSpec, command: Command, provider: JobProvider) -> ResultSet:
    """Run one provider job for ``command`` and return its records.

    Raises JobTimedOut if the provider stopped the job at its timeout, and
    ExternalJobError for any other unsuccessful terminal state.
    """
    job = await provider.submit_job(spec.job_type, spec.project(command), spec.envelope)
    job = await provider.await_completion(job)

    if not job.succeeded:
        reason = job.status_message or f"run {job.job_id} finished with status {job.status}"
        if job.status == "TIMED-OUT":
            raise JobTimedOut(spec.job_type, reason)
        raise ExternalJobError(spec.job_type, reason, job.status)

    return await provider.fetch_results(job)


async def dispatch(command: Command, provider: JobProvider) -> ResultSet:
    """Execute a command and return its ResultSet.

    generate_rate_card is two-stage: fetch the single profile remotely, then
    price it locally.  The result is one synthesized record.  If the profile
    fetch returns nothing, NotFound is raised and nothing is priced.
    """
    spec = job_spec(tool_name_for(command))
    records = await run_job(spec, command, provider)

    if isinstance(command, RateCardCommand):
        if not records:
            raise NotFound(command.tiktokUsername)
        return [rate_card_record(records[0])]

    return records


def rate_card_record(profile: dict[str, Any]) -> dict[str, Any]:
    """The record generate_rate_card returns for a fetched profile."""
    return {
        "username": profile.get("username"),
        "followers": profile.get("followers"),
        "engagementRate": profile.get("engagementRate"),
        "rateCard": price_card(profile).as_payload(),
    }
