import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_state_dir

from .compat import env_bool, env_float, env_int

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_BASELINE_STRATEGY",
    "DEFAULT_CANDIDATE_STRATEGY",
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_REPO",
    "IndexConfig",
]

DEFAULT_REPO = "boringcache/benchmarks"
DEFAULT_OUTPUT_PATH = Path("data") / "latest" / "index.json"
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BASE_DELAY = 2.0
DEFAULT_RUN_LIMIT = 20
DEFAULT_GH_TIMEOUT_SECONDS = 300.0

# Artifact name suffixes: benchmark-<benchmark_id>-<strategy>
DEFAULT_BASELINE_STRATEGY = "actions-cache"
DEFAULT_CANDIDATE_STRATEGY = "boringcache"

# Reference repositories publish their timings from this workflow.
REFERENCE_WORKFLOW_NAME = "Benchmark"

# Event log (BENCH_INDEX_EVENT_LOG, default: off)
# - Linux: ~/.local/state/bench-index
# - macOS: ~/Library/Application Support/bench-index
# Note: Directory is created lazily in events.py when actually writing
EVENT_LOG_DIR = Path(user_state_dir("bench-index", appauthor=False))
EVENT_LOG_PATH = EVENT_LOG_DIR / "events.log"
MAX_LOG_SIZE_BYTES = 10 * 1024 * 1024


def event_log_enabled() -> bool:
    return env_bool("BENCH_INDEX_EVENT_LOG", default=False)


@dataclass(frozen=True)
class IndexConfig:
    repo: str = DEFAULT_REPO
    output_path: Path = DEFAULT_OUTPUT_PATH
    catalog_path: Path | None = None  # None: packaged benchmarks.yaml
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY
    run_limit: int = DEFAULT_RUN_LIMIT
    gh_timeout: float = DEFAULT_GH_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "IndexConfig":
        repo = os.getenv("BENCHMARKS_REPO", "").strip() or DEFAULT_REPO
        if "/" not in repo:
            raise RuntimeError(f"BENCHMARKS_REPO must look like 'owner/name', got: {repo!r}")

        output_path = Path(os.getenv("BENCH_INDEX_OUTPUT", "").strip() or DEFAULT_OUTPUT_PATH)

        catalog_raw = os.getenv("BENCH_INDEX_CATALOG", "").strip()
        catalog_path = Path(catalog_raw).expanduser() if catalog_raw else None
        if catalog_path is not None:
            logger.debug("Using BENCH_INDEX_CATALOG: %s", catalog_path)

        return cls(
            repo=repo,
            output_path=output_path,
            catalog_path=catalog_path,
            max_retries=env_int("BENCH_INDEX_MAX_RETRIES", default=DEFAULT_MAX_RETRIES),
            retry_base_delay=env_float(
                "BENCH_INDEX_RETRY_BASE_DELAY", default=DEFAULT_RETRY_BASE_DELAY
            ),
            run_limit=env_int("BENCH_INDEX_RUN_LIMIT", default=DEFAULT_RUN_LIMIT, minimum=1),
            gh_timeout=env_float("BENCH_INDEX_GH_TIMEOUT", default=DEFAULT_GH_TIMEOUT_SECONDS),
        )

    def with_overrides(self, **overrides: object) -> "IndexConfig":
        """Return a copy with every non-None override applied (CLI options)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)  # type: ignore[arg-type]
