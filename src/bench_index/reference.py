"""Third-party reference timings inferred from a public benchmark repository."""

import logging
from dataclasses import dataclass
from typing import Any

from .config import REFERENCE_WORKFLOW_NAME
from .github.client import GhClient
from .github.runs import (
    find_job,
    job_duration_seconds,
    list_successful_runs,
    step_duration_seconds,
    view_run,
)
from .parsing import round_seconds, seconds_to_text

logger = logging.getLogger(__name__)

DOCKER_ACTION = "docker/build-push-action"
DEPOT_ACTION = "depot/build-push-action"


@dataclass(frozen=True)
class ReferenceMetrics:
    repo: str
    run_id: int
    run_url: str | None
    docker_seconds: float | None
    docker_job_url: str | None
    depot_seconds: float | None
    depot_job_url: str | None

    @property
    def representative_seconds(self) -> float | None:
        """Plain Docker build time in the reference repo, else its product's build time."""
        return self.docker_seconds if self.docker_seconds is not None else self.depot_seconds

    def to_dict(self) -> dict[str, Any]:
        docker = round_seconds(self.docker_seconds)
        depot = round_seconds(self.depot_seconds)
        return {
            "repo": self.repo,
            "run_id": self.run_id,
            "run_url": self.run_url,
            "docker_seconds": docker,
            "docker_text": seconds_to_text(docker) if docker is not None else None,
            "docker_job_url": self.docker_job_url,
            "depot_seconds": depot,
            "depot_text": seconds_to_text(depot) if depot is not None else None,
            "depot_job_url": self.depot_job_url,
        }


def _build_seconds(job: dict[str, Any] | None, action_name: str) -> float | None:
    if job is None:
        return None
    seconds = step_duration_seconds(job, action_name)
    return seconds if seconds is not None else job_duration_seconds(job)


def _fetch(client: GhClient, reference_repo: str, limit: int) -> ReferenceMetrics | None:
    runs = list_successful_runs(client, reference_repo, REFERENCE_WORKFLOW_NAME, limit)
    if not runs:
        logger.info("No successful reference run in %s", reference_repo)
        return None

    run = runs[0]
    detail = view_run(client, reference_repo, run.id)
    docker_job = find_job(detail, "docker")
    depot_job = find_job(detail, "depot")
    docker_seconds = _build_seconds(docker_job, DOCKER_ACTION)
    depot_seconds = _build_seconds(depot_job, DEPOT_ACTION)
    if docker_seconds is None and depot_seconds is None:
        logger.info("Reference run %s in %s has no usable build timings", run.id, reference_repo)
        return None

    return ReferenceMetrics(
        repo=reference_repo,
        run_id=run.id,
        run_url=detail.get("url") or run.url,
        docker_seconds=docker_seconds,
        docker_job_url=docker_job.get("url") if docker_job else None,
        depot_seconds=depot_seconds,
        depot_job_url=depot_job.get("url") if depot_job else None,
    )


def fetch_reference_metrics(
    client: GhClient, reference_repo: str, *, limit: int = 10
) -> ReferenceMetrics | None:
    """Latest successful reference run's Docker and Depot build times.

    Any failure is logged and yields None; the primary comparison never
    depends on the reference.
    """
    try:
        return _fetch(client, reference_repo, limit)
    except Exception as exc:
        logger.warning("Reference metrics lookup failed for %s: %s", reference_repo, exc)
        return None
