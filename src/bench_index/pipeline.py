import logging
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .comparison import build, build_run_duration_entry
from .config import BenchmarkDescriptor, Catalog, IndexConfig
from .errors import GhCommandError
from .events import log_event
from .github.artifacts import find_artifact, load_artifact_json
from .github.client import GhClient
from .github.runs import WorkflowRun, list_successful_runs, observed_run_seconds, view_run
from .index import order_entries
from .metrics import extract
from .pairing import pick_pair
from .reference import fetch_reference_metrics

logger = logging.getLogger(__name__)

OUTCOME_PUBLISHED = "published"
OUTCOME_REDUCED = "reduced"
OUTCOME_SKIPPED = "skipped"
OUTCOME_FAILED = "failed"


@dataclass(frozen=True)
class BenchmarkOutcome:
    kind: str
    entry: dict[str, Any] | None = None
    detail: str | None = None


def _load_payload(
    client: GhClient,
    config: IndexConfig,
    descriptor: BenchmarkDescriptor,
    run: WorkflowRun,
    strategy: str,
    work_dir: Path,
) -> dict[str, Any] | None:
    try:
        artifact_name = find_artifact(client, config.repo, run.id, descriptor.benchmark_id, strategy)
        if artifact_name is None:
            logger.info(
                "%s: no %s artifact in run %s", descriptor.display_name, strategy, run.id
            )
            return None
        return load_artifact_json(
            client, config.repo, run.id, artifact_name, work_dir / str(run.id) / strategy
        )
    except GhCommandError as exc:
        logger.warning(
            "%s: %s artifact lookup failed for run %s: %s",
            descriptor.display_name,
            strategy,
            run.id,
            exc,
        )
        return None


def _observed_seconds(client: GhClient, config: IndexConfig, run: WorkflowRun) -> float | None:
    try:
        return observed_run_seconds(view_run(client, config.repo, run.id))
    except GhCommandError as exc:
        logger.warning("Run detail lookup failed for run %s: %s", run.id, exc)
        return None


def process_benchmark(
    client: GhClient,
    config: IndexConfig,
    descriptor: BenchmarkDescriptor,
    work_dir: Path,
) -> BenchmarkOutcome:
    """Compute one benchmark's entry.

    Errors listing runs propagate; artifact and run-detail errors degrade to
    a reduced entry or a skip.
    """
    name = descriptor.display_name
    baseline_runs = list_successful_runs(
        client, config.repo, descriptor.baseline_workflow_name, config.run_limit
    )
    candidate_runs = list_successful_runs(
        client, config.repo, descriptor.candidate_workflow_name, config.run_limit
    )
    pair = pick_pair(baseline_runs, candidate_runs)
    if pair is None:
        return BenchmarkOutcome(OUTCOME_SKIPPED, detail="no successful run on one side")

    if pair.paired_on_commit:
        logger.info("%s: paired runs on commit %s", name, (pair.pairing_commit or "")[:12])
    else:
        logger.info("%s: no shared commit, comparing newest runs", name)

    baseline_payload = _load_payload(
        client, config, descriptor, pair.baseline_run, descriptor.baseline_strategy, work_dir
    )
    candidate_payload = _load_payload(
        client, config, descriptor, pair.candidate_run, descriptor.candidate_strategy, work_dir
    )
    baseline_total = _observed_seconds(client, config, pair.baseline_run)
    candidate_total = _observed_seconds(client, config, pair.candidate_run)

    if baseline_payload is not None and candidate_payload is not None:
        baseline = replace(extract(baseline_payload), run_total_seconds=baseline_total)
        candidate = replace(extract(candidate_payload), run_total_seconds=candidate_total)
        reference = None
        if descriptor.third_party_repo:
            reference = fetch_reference_metrics(client, descriptor.third_party_repo)
        entry = build(descriptor, baseline, candidate, pair, reference)
        if entry is not None:
            return BenchmarkOutcome(OUTCOME_PUBLISHED, entry=entry)

    entry = build_run_duration_entry(descriptor, pair, baseline_total, candidate_total)
    if entry is not None:
        logger.info("%s: metrics unavailable, publishing run durations only", name)
        return BenchmarkOutcome(OUTCOME_REDUCED, entry=entry)
    return BenchmarkOutcome(OUTCOME_SKIPPED, detail="no comparable metrics or run durations")


def run_pipeline(
    config: IndexConfig, catalog: Catalog, client: GhClient | None = None
) -> list[dict[str, Any]]:
    """Process every tracked benchmark and return the ordered index entries.

    A failing benchmark keeps its placeholder entry, if the catalog has one.
    """
    client = client or GhClient(config)
    entries_by_name = catalog.default_entries()

    with tempfile.TemporaryDirectory(prefix="benchmark-index-") as tmp:
        work_dir = Path(tmp)
        for descriptor in catalog.descriptors:
            name = descriptor.display_name
            try:
                outcome = process_benchmark(client, config, descriptor, work_dir)
            except Exception as exc:
                logger.warning("Skipping %s: %s", name, exc)
                log_event(OUTCOME_FAILED, name, error=str(exc))
                continue

            if outcome.entry is not None:
                entries_by_name[name] = outcome.entry
                log_event(
                    outcome.kind,
                    name,
                    scenario=outcome.entry.get("headline_scenario"),
                    faster=outcome.entry.get("faster"),
                )
            else:
                logger.info("Keeping default entry for %s: %s", name, outcome.detail)
                log_event(outcome.kind, name, detail=outcome.detail)

    return order_entries(catalog, entries_by_name)
