import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bench_index.cli import main


@pytest.fixture
def runner(clean_env: None) -> CliRunner:
    return CliRunner()


class TestCli:
    def test_dry_run_lists_tracked_benchmarks(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--dry-run", "--repo", "acme/benchmarks"])

        assert result.exit_code == 0
        assert "Repository: acme/benchmarks" in result.output
        assert "Entries:    7" in result.output
        assert "Mastodon: 'Mastodon Docker - Actions Cache' vs 'Mastodon Docker - BoringCache'" in result.output

    def test_writes_index(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "out" / "index.json"
        entries = [{"name": "Bevy", "faster": "80"}]

        with patch("bench_index.cli.run_pipeline", return_value=entries) as run_pipeline:
            result = runner.invoke(main, ["--output", str(output), "--max-retries", "0"])

        assert result.exit_code == 0, result.output
        assert f"Wrote {output} with 1 entries" in result.output
        config = run_pipeline.call_args.args[0]
        assert config.max_retries == 0
        assert json.loads(output.read_text(encoding="utf-8")) == {"entries": entries}

    def test_unwritable_output_exits_nonzero(self, runner: CliRunner, tmp_path: Path) -> None:
        blocker = tmp_path / "data"
        blocker.write_text("not a directory", encoding="utf-8")

        with patch("bench_index.cli.run_pipeline", return_value=[]):
            result = runner.invoke(main, ["--output", str(blocker / "index.json")])

        assert result.exit_code == 1
        assert "failed to write" in result.output

    def test_invalid_catalog_exits_nonzero(self, runner: CliRunner, tmp_path: Path) -> None:
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text("entries: 3\n", encoding="utf-8")

        result = runner.invoke(main, ["--catalog", str(catalog), "--dry-run"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_invalid_repo_env_exits_nonzero(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BENCHMARKS_REPO", "no-owner")
        result = runner.invoke(main, ["--dry-run"])
        assert result.exit_code == 1
        assert "owner/name" in result.output
