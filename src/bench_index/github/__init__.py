from .artifacts import artifact_prefix, find_artifact, load_artifact_json
from .client import GhClient
from .retry import RetryPolicy
from .runs import (
    WorkflowRun,
    find_job,
    job_duration_seconds,
    list_successful_runs,
    observed_run_seconds,
    step_duration_seconds,
    view_run,
)

__all__ = [
    "GhClient",
    "RetryPolicy",
    "WorkflowRun",
    "artifact_prefix",
    "find_artifact",
    "find_job",
    "job_duration_seconds",
    "list_successful_runs",
    "load_artifact_json",
    "observed_run_seconds",
    "step_duration_seconds",
    "view_run",
]
