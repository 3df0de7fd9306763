"""Shared fakes and builders for the test suite."""

import json
from datetime import timedelta
from pathlib import Path
from typing import Any

from bench_index.errors import GhCommandError
from bench_index.github.runs import WorkflowRun
from bench_index.parsing import parse_timestamp

REPO = "boringcache/benchmarks"


class FakeGh:
    """In-memory stand-in for GhClient that answers the gh commands we issue."""

    def __init__(self) -> None:
        self.runs: dict[tuple[str, str], list[dict[str, Any]]] = {}
        self.views: dict[tuple[str, int], dict[str, Any]] = {}
        self.artifacts: dict[int, list[dict[str, Any]]] = {}
        self.downloads: dict[tuple[int, str], dict[str, Any] | str] = {}
        self.failing: set[str] = set()
        self.calls: list[list[str]] = []

    # -- setup helpers ---------------------------------------------------

    def add_run(
        self,
        workflow: str,
        run_id: int,
        sha: str | None,
        created_at: str,
        *,
        repo: str = REPO,
        conclusion: str = "success",
    ) -> None:
        self.runs.setdefault((repo, workflow), []).append(
            {
                "databaseId": run_id,
                "conclusion": conclusion,
                "createdAt": created_at,
                "url": f"https://github.com/{repo}/actions/runs/{run_id}",
                "headSha": sha,
            }
        )

    def add_view(self, run_id: int, seconds: float, *, repo: str = REPO, jobs: list | None = None) -> None:
        if jobs is None:
            jobs = [
                {
                    "name": "benchmark",
                    "startedAt": "2026-01-01T00:00:00Z",
                    "completedAt": _plus_seconds("2026-01-01T00:00:00Z", seconds),
                }
            ]
        self.views[(repo, run_id)] = {
            "databaseId": run_id,
            "url": f"https://github.com/{repo}/actions/runs/{run_id}",
            "jobs": jobs,
        }

    def add_artifact(self, run_id: int, name: str, payload: dict[str, Any] | str, *, expired: bool = False) -> None:
        self.artifacts.setdefault(run_id, []).append({"name": name, "expired": expired})
        self.downloads[(run_id, name)] = payload

    # -- GhClient interface ---------------------------------------------

    def run(self, args: list[str]) -> str:
        self.calls.append(list(args))
        if args[0] in self.failing or " ".join(args[:2]) in self.failing:
            raise GhCommandError(args, 1, "HTTP 502")
        if args[:2] == ["run", "download"]:
            run_id = int(args[2])
            name = args[args.index("-n") + 1]
            dest = Path(args[args.index("--dir") + 1])
            payload = self.downloads[(run_id, name)]
            dest.mkdir(parents=True, exist_ok=True)
            text = payload if isinstance(payload, str) else json.dumps(payload)
            (dest / "result.json").write_text(text, encoding="utf-8")
            return ""
        return json.dumps(self._answer(args))

    def run_json(self, args: list[str]) -> Any:
        return json.loads(self.run(args))

    def _answer(self, args: list[str]) -> Any:
        if args[:2] == ["run", "list"]:
            repo = args[args.index("--repo") + 1]
            workflow = args[args.index("--workflow") + 1]
            return self.runs.get((repo, workflow), [])
        if args[:2] == ["run", "view"]:
            repo = args[args.index("--repo") + 1]
            return self.views.get((repo, int(args[2])), {})
        if args[0] == "api":
            run_id = int(args[1].split("/")[-2])
            return {"artifacts": self.artifacts.get(run_id, [])}
        raise AssertionError(f"unexpected gh call: {args}")


def _plus_seconds(timestamp: str, seconds: float) -> str:
    parsed = parse_timestamp(timestamp)
    assert parsed is not None
    return (parsed + timedelta(seconds=seconds)).isoformat()


def make_run(run_id: int, sha: str | None = None, created_at: str | None = None) -> WorkflowRun:
    return WorkflowRun(
        id=run_id,
        conclusion="success",
        created_at=parse_timestamp(created_at),
        url=f"https://github.com/{REPO}/actions/runs/{run_id}",
        head_commit=sha,
    )


def make_payload(
    *,
    cold: float | None = 600.0,
    warm1: float | None = None,
    warm2: float | None = None,
    average: float | None = None,
    stale: float | None = None,
    internal_only: float | None = None,
    storage_bytes: int | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"runs": {}, "speed": {}, "cache": {}, "hit_behavior": {}}
    if cold is not None:
        payload["runs"]["cold_seconds"] = cold
    if warm1 is not None:
        payload["runs"]["warm1_seconds"] = warm1
    if warm2 is not None:
        payload["runs"]["warm2_seconds"] = warm2
        payload["hit_behavior"]["two_consecutive_warm_succeeded"] = True
    if average is not None:
        payload["speed"]["warm_average_seconds"] = average
    if stale is not None:
        payload["stale_docker_cache"] = {"seconds": stale}
    if internal_only is not None:
        payload["internal_only"] = {"warm_no_docker_cache_seconds": internal_only}
    if storage_bytes is not None:
        payload["cache"] = {"storage_bytes": storage_bytes, "storage_source": "api"}
    return payload


