import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..parsing import OLDEST, duration_seconds, parse_timestamp
from .client import GhClient

logger = logging.getLogger(__name__)

RUN_LIST_FIELDS = "databaseId,conclusion,createdAt,url,headSha"
RUN_VIEW_FIELDS = "databaseId,conclusion,status,url,jobs,createdAt,updatedAt"


@dataclass(frozen=True)
class WorkflowRun:
    id: int
    conclusion: str
    created_at: datetime | None
    url: str | None
    head_commit: str | None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkflowRun":
        head = data.get("headSha")
        return cls(
            id=int(data["databaseId"]),
            conclusion=str(data.get("conclusion") or ""),
            created_at=parse_timestamp(data.get("createdAt")),
            url=data.get("url") or None,
            head_commit=str(head) if head else None,
        )


def list_successful_runs(
    client: GhClient, repo: str, workflow_name: str, limit: int = 20
) -> list[WorkflowRun]:
    """Successful completed runs of a workflow, newest first.

    Runs without a parseable creation time sort last.
    """
    items = client.run_json(
        [
            "run",
            "list",
            "--repo",
            repo,
            "--workflow",
            workflow_name,
            "--status",
            "completed",
            "--limit",
            str(limit),
            "--json",
            RUN_LIST_FIELDS,
        ]
    )
    if not isinstance(items, list):
        logger.warning("Unexpected run list payload for %s / %s", repo, workflow_name)
        return []

    runs: list[WorkflowRun] = []
    for item in items:
        if not isinstance(item, dict) or item.get("conclusion") != "success":
            continue
        try:
            runs.append(WorkflowRun.from_dict(item))
        except (KeyError, TypeError, ValueError):
            logger.debug("Skipping run without a usable id: %r", item)
    runs.sort(key=lambda run: run.created_at or OLDEST, reverse=True)
    return runs


def view_run(client: GhClient, repo: str, run_id: int) -> dict[str, Any]:
    detail = client.run_json(
        ["run", "view", str(run_id), "--repo", repo, "--json", RUN_VIEW_FIELDS]
    )
    return detail if isinstance(detail, dict) else {}


def _jobs(run_detail: dict[str, Any]) -> list[dict[str, Any]]:
    jobs = run_detail.get("jobs")
    if not isinstance(jobs, list):
        return []
    return [job for job in jobs if isinstance(job, dict)]


def job_duration_seconds(job: dict[str, Any]) -> float | None:
    return duration_seconds(job.get("startedAt"), job.get("completedAt"))


def step_duration_seconds(job: dict[str, Any], action_name: str) -> float | None:
    """Duration of the first completed step whose name mentions `action_name`."""
    steps = job.get("steps")
    if not isinstance(steps, list):
        return None
    for step in steps:
        if not isinstance(step, dict):
            continue
        if action_name in str(step.get("name", "")) and step.get("status") == "completed":
            return duration_seconds(step.get("startedAt"), step.get("completedAt"))
    return None


def find_job(run_detail: dict[str, Any], keyword: str) -> dict[str, Any] | None:
    """First job whose name contains `keyword` (case-insensitive)."""
    needle = keyword.lower()
    for job in _jobs(run_detail):
        if needle in str(job.get("name", "")).lower():
            return job
    return None


def observed_run_seconds(run_detail: dict[str, Any]) -> float | None:
    """Wall time of a run: earliest job start to latest job completion.

    Falls back to createdAt -> updatedAt when no job has usable timestamps.
    """
    starts: list[datetime] = []
    ends: list[datetime] = []
    for job in _jobs(run_detail):
        started = parse_timestamp(job.get("startedAt"))
        completed = parse_timestamp(job.get("completedAt"))
        if started is None or completed is None or completed < started:
            continue
        starts.append(started)
        ends.append(completed)
    if starts:
        return (max(ends) - min(starts)).total_seconds()
    return duration_seconds(run_detail.get("createdAt"), run_detail.get("updatedAt"))
