import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .config import Catalog

logger = logging.getLogger(__name__)


def order_entries(catalog: Catalog, entries_by_name: Mapping[str, dict[str, Any]]) -> list[dict[str, Any]]:
    """Project entries into catalog display order, dropping names the catalog does not list."""
    return [entries_by_name[name] for name in catalog.names if entries_by_name.get(name) is not None]


def render_index(entries: list[dict[str, Any]]) -> str:
    return json.dumps({"entries": entries}, indent=2, ensure_ascii=False) + "\n"


def write_index(entries: list[dict[str, Any]], output_path: Path) -> Path:
    """Write the index file, replacing any previous one. OSError propagates."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        f.write(render_index(entries))
    logger.info("Wrote %s with %d entries", output_path, len(entries))
    return output_path
