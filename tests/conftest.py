"""Shared fixtures: an in-memory provider standing in for Apify."""

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Any, Optional

import pytest

from core.models import Job, ResourceEnvelope


@dataclass
class Submission:
    job_type: str
    payload: dict[str, Any]
    envelope: ResourceEnvelope


@dataclass
class FakeProvider:
    """Satisfies the JobProvider contract without any network.

    ``outcomes`` maps a job type to the terminal status it ends in;
    ``results`` maps a job type to the records it produces.  ``delay``
    makes await_completion yield to the event loop so concurrent calls
    interleave.
    """

    results: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    outcomes: dict[str, str] = field(default_factory=dict)
    messages: dict[str, str] = field(default_factory=dict)
    delay: float = 0.0
    submissions: list[Submission] = field(default_factory=list)
    fetch_error: Optional[Exception] = None
    _ids: Any = field(default_factory=lambda: itertools.count(1))

    async def submit_job(self, job_type, payload, envelope):
        self.submissions.append(Submission(job_type, payload, envelope))
        run_id = f"run-{next(self._ids)}"
        return Job(job_id=run_id, job_type=job_type, status="READY", dataset_id=f"ds-{run_id}")

    async def await_completion(self, job):
        if self.delay:
            await asyncio.sleep(self.delay)
        return Job(
            job_id=job.job_id,
            job_type=job.job_type,
            status=self.outcomes.get(job.job_type, "SUCCEEDED"),
            dataset_id=job.dataset_id,
            status_message=self.messages.get(job.job_type),
        )

    async def fetch_results(self, job):
        if self.fetch_error is not None:
            raise self.fetch_error
        return [dict(record) for record in self.results.get(job.job_type, [])]


@pytest.fixture
def provider():
    return FakeProvider()
