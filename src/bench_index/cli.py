import logging
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from .config import IndexConfig, load_catalog
from .errors import CatalogError
from .index import write_index
from .pipeline import run_pipeline

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.getenv("BENCH_INDEX_LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


@click.command()
@click.option("--repo", default=None, help="Benchmarks repository (default: $BENCHMARKS_REPO or boringcache/benchmarks)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Index file to write (default: data/latest/index.json)",
)
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML catalog of benchmarks (default: packaged benchmarks.yaml)",
)
@click.option("--max-retries", type=click.IntRange(min=0), default=None, help="Retries per gh call (default: 3)")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Runs listed per workflow (default: 20)")
@click.option("--dry-run", is_flag=True, help="Only load the catalog and list tracked benchmarks")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    repo: str | None,
    output: Path | None,
    catalog: Path | None,
    max_retries: int | None,
    limit: int | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Publish the benchmark comparison index from CI workflow artifacts.

    Per-benchmark failures are logged and keep the placeholder entry; the
    command only fails when the catalog or the output file is unusable.
    """
    load_dotenv()
    _configure_logging(verbose)

    try:
        config = IndexConfig.from_env().with_overrides(
            repo=repo,
            output_path=output,
            catalog_path=catalog,
            max_retries=max_retries,
            run_limit=limit,
        )
        bench_catalog = load_catalog(config.catalog_path)
    except (RuntimeError, CatalogError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if dry_run:
        click.echo(f"Repository: {config.repo}")
        click.echo(f"Output:     {config.output_path}")
        click.echo(f"Entries:    {len(bench_catalog.entries)}")
        for descriptor in bench_catalog.descriptors:
            click.echo(
                f"  - {descriptor.display_name}: {descriptor.baseline_workflow_name!r} vs "
                f"{descriptor.candidate_workflow_name!r}"
            )
        return

    logger.info("Publishing index from %s (max_retries=%d)", config.repo, config.max_retries)
    entries = run_pipeline(config, bench_catalog)

    try:
        path = write_index(entries, config.output_path)
    except OSError as exc:
        click.echo(f"Error: failed to write {config.output_path}: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Wrote {path} with {len(entries)} entries")


if __name__ == "__main__":
    main()
