"""Static benchmark catalog: display order, placeholders and tracked workflows."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..errors import CatalogError
from .settings import DEFAULT_BASELINE_STRATEGY, DEFAULT_CANDIDATE_STRATEGY

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "benchmarks.yaml"

_PLACEHOLDER_KEYS = ("before", "after", "faster")


@dataclass(frozen=True)
class BenchmarkDescriptor:
    display_name: str
    logo_id: str
    source_repo: str
    step_label: str
    benchmark_id: str
    baseline_workflow_name: str
    candidate_workflow_name: str
    third_party_repo: str | None = None
    baseline_strategy: str = DEFAULT_BASELINE_STRATEGY
    candidate_strategy: str = DEFAULT_CANDIDATE_STRATEGY

    @property
    def is_docker_build(self) -> bool:
        """Docker benchmarks share cache layers across projects in the baseline tool."""
        return "docker" in self.step_label.lower() or "docker" in self.benchmark_id.lower()

    def base_fields(self) -> dict[str, Any]:
        return {
            "name": self.display_name,
            "logo": self.logo_id,
            "repo": self.source_repo,
            "step": self.step_label,
        }


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    logo: str
    repo: str
    step: str
    placeholder: dict[str, str] | None = None
    descriptor: BenchmarkDescriptor | None = None

    def placeholder_entry(self) -> dict[str, Any] | None:
        if self.placeholder is None:
            return None
        return {
            "name": self.name,
            "logo": self.logo,
            "repo": self.repo,
            "step": self.step,
            **self.placeholder,
        }


@dataclass(frozen=True)
class Catalog:
    entries: tuple[CatalogEntry, ...]

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    @property
    def descriptors(self) -> list[BenchmarkDescriptor]:
        return [entry.descriptor for entry in self.entries if entry.descriptor is not None]

    def default_entries(self) -> dict[str, dict[str, Any]]:
        """Placeholder entries keyed by display name, in display order."""
        defaults: dict[str, dict[str, Any]] = {}
        for entry in self.entries:
            placeholder = entry.placeholder_entry()
            if placeholder is not None:
                defaults[entry.name] = placeholder
        return defaults


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise CatalogError(f"{where}: '{key}' must be a non-empty string")
    return value.strip()


def _parse_placeholder(raw: Any, where: str) -> dict[str, str] | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise CatalogError(f"{where}: 'placeholder' must be a mapping")
    placeholder: dict[str, str] = {}
    for key in _PLACEHOLDER_KEYS:
        value = raw.get(key)
        if value is None or isinstance(value, bool) or not str(value).strip():
            raise CatalogError(f"{where}.placeholder: '{key}' is required")
        placeholder[key] = str(value).strip()
    return placeholder


def _parse_track(raw: Any, base: dict[str, str], where: str) -> BenchmarkDescriptor | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise CatalogError(f"{where}: 'track' must be a mapping")
    where = f"{where}.track"
    third_party = raw.get("third_party_repo")
    return BenchmarkDescriptor(
        display_name=base["name"],
        logo_id=base["logo"],
        source_repo=base["repo"],
        step_label=base["step"],
        benchmark_id=_require_str(raw, "benchmark", where),
        baseline_workflow_name=_require_str(raw, "baseline_workflow", where),
        candidate_workflow_name=_require_str(raw, "candidate_workflow", where),
        third_party_repo=str(third_party).strip() if third_party else None,
        baseline_strategy=str(raw.get("baseline_strategy") or DEFAULT_BASELINE_STRATEGY),
        candidate_strategy=str(raw.get("candidate_strategy") or DEFAULT_CANDIDATE_STRATEGY),
    )


def parse_catalog(data: Any) -> Catalog:
    if not isinstance(data, dict) or not isinstance(data.get("entries"), list):
        raise CatalogError("catalog must be a mapping with an 'entries' list")

    entries: list[CatalogEntry] = []
    seen: set[str] = set()
    for index, raw in enumerate(data["entries"]):
        where = f"entries[{index}]"
        if not isinstance(raw, dict):
            raise CatalogError(f"{where}: entry must be a mapping")
        base = {key: _require_str(raw, key, where) for key in ("name", "logo", "repo", "step")}
        if base["name"] in seen:
            raise CatalogError(f"{where}: duplicate name {base['name']!r}")
        seen.add(base["name"])
        entries.append(
            CatalogEntry(
                **base,
                placeholder=_parse_placeholder(raw.get("placeholder"), where),
                descriptor=_parse_track(raw.get("track"), base, where),
            )
        )
    return Catalog(entries=tuple(entries))


def load_catalog(path: Path | None = None) -> Catalog:
    catalog_path = path or DEFAULT_CATALOG_PATH
    try:
        with catalog_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise CatalogError(f"cannot read catalog {catalog_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"invalid YAML in catalog {catalog_path}: {exc}") from exc

    catalog = parse_catalog(data)
    logger.debug(
        "Loaded catalog %s (%d entries, %d tracked)",
        catalog_path,
        len(catalog.entries),
        len(catalog.descriptors),
    )
    return catalog
