from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .github.runs import WorkflowRun


@dataclass(frozen=True)
class RunPair:
    baseline_run: WorkflowRun
    candidate_run: WorkflowRun
    paired_on_commit: bool
    pairing_commit: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "paired_on_commit": self.paired_on_commit,
            "commit": self.pairing_commit,
            "baseline_run_id": self.baseline_run.id,
            "baseline_run_url": self.baseline_run.url,
            "candidate_run_id": self.candidate_run.id,
            "candidate_run_url": self.candidate_run.url,
        }


def pick_pair(
    baseline_runs: Sequence[WorkflowRun], candidate_runs: Sequence[WorkflowRun]
) -> RunPair | None:
    """Pick the runs to compare, preferring both sides built from the same commit.

    Both inputs are newest-first. The newest candidate whose commit also has a
    baseline run wins; without any shared commit the newest run of each side
    is used and the pair is flagged as unmatched.
    """
    if not baseline_runs or not candidate_runs:
        return None

    baseline_by_commit: dict[str, WorkflowRun] = {}
    for run in baseline_runs:
        if run.head_commit and run.head_commit not in baseline_by_commit:
            baseline_by_commit[run.head_commit] = run

    for run in candidate_runs:
        if run.head_commit and run.head_commit in baseline_by_commit:
            return RunPair(
                baseline_run=baseline_by_commit[run.head_commit],
                candidate_run=run,
                paired_on_commit=True,
                pairing_commit=run.head_commit,
            )

    return RunPair(
        baseline_run=baseline_runs[0],
        candidate_run=candidate_runs[0],
        paired_on_commit=False,
        pairing_commit=None,
    )
