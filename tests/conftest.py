from collections.abc import Generator
from pathlib import Path

import pytest
from helpers import REPO, FakeGh

from bench_index.config import BenchmarkDescriptor, IndexConfig

_ENV_VARS = (
    "BENCHMARKS_REPO",
    "BENCH_INDEX_MAX_RETRIES",
    "BENCH_INDEX_RETRY_BASE_DELAY",
    "BENCH_INDEX_RUN_LIMIT",
    "BENCH_INDEX_OUTPUT",
    "BENCH_INDEX_CATALOG",
    "BENCH_INDEX_GH_TIMEOUT",
    "BENCH_INDEX_LOG_LEVEL",
    "BENCH_INDEX_EVENT_LOG",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path: Path) -> IndexConfig:
    return IndexConfig(
        repo=REPO,
        output_path=tmp_path / "data" / "latest" / "index.json",
        max_retries=0,
        retry_base_delay=0.01,
    )


@pytest.fixture
def docker_descriptor() -> BenchmarkDescriptor:
    return BenchmarkDescriptor(
        display_name="Mastodon",
        logo_id="mastodon",
        source_repo="mastodon/mastodon",
        step_label="Docker build (Ruby+Node)",
        benchmark_id="mastodon-docker",
        baseline_workflow_name="Mastodon Docker - Actions Cache",
        candidate_workflow_name="Mastodon Docker - BoringCache",
    )


@pytest.fixture
def cargo_descriptor() -> BenchmarkDescriptor:
    return BenchmarkDescriptor(
        display_name="Bevy",
        logo_id="bevy",
        source_repo="bevyengine/bevy",
        step_label="cargo build",
        benchmark_id="bevy",
        baseline_workflow_name="Bevy - Actions Cache",
        candidate_workflow_name="Bevy - BoringCache",
    )


@pytest.fixture
def fake_gh() -> Generator[FakeGh, None, None]:
    yield FakeGh()
