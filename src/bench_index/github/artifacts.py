import json
import logging
from pathlib import Path
from typing import Any

from .client import GhClient

logger = logging.getLogger(__name__)


def artifact_prefix(benchmark_id: str, strategy: str) -> str:
    return f"benchmark-{benchmark_id}-{strategy}"


def find_artifact(
    client: GhClient, repo: str, run_id: int, benchmark_id: str, strategy: str
) -> str | None:
    """Name of the first non-expired artifact for this benchmark and strategy.

    Listing order decides when several match; one canonical artifact per
    run and strategy is assumed.
    """
    listing = client.run_json(["api", f"repos/{repo}/actions/runs/{run_id}/artifacts"])
    artifacts = listing.get("artifacts", []) if isinstance(listing, dict) else []
    prefix = artifact_prefix(benchmark_id, strategy)
    for item in artifacts:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name", ""))
        if name.startswith(prefix) and not item.get("expired"):
            return name
    return None


def load_artifact_json(
    client: GhClient, repo: str, run_id: int, artifact_name: str, dest_dir: Path
) -> dict[str, Any] | None:
    """Download an artifact and parse the first JSON file inside it."""
    dest_dir.mkdir(parents=True, exist_ok=True)
    client.run(
        ["run", "download", str(run_id), "--repo", repo, "-n", artifact_name, "--dir", str(dest_dir)]
    )

    json_files = sorted(dest_dir.rglob("*.json"))
    if not json_files:
        logger.warning("Artifact %s of run %s contains no JSON file", artifact_name, run_id)
        return None

    json_file = json_files[0]
    try:
        with json_file.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Failed to parse %s from artifact %s: %s", json_file.name, artifact_name, exc)
        return None

    if not isinstance(payload, dict):
        logger.warning("Artifact %s payload is not a JSON object", artifact_name)
        return None
    return payload
