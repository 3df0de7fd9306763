"""Configuration module for bench-index."""

from .catalog import (
    DEFAULT_CATALOG_PATH,
    BenchmarkDescriptor,
    Catalog,
    CatalogEntry,
    load_catalog,
    parse_catalog,
)
from .settings import (
    DEFAULT_BASELINE_STRATEGY,
    DEFAULT_CANDIDATE_STRATEGY,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_REPO,
    EVENT_LOG_PATH,
    MAX_LOG_SIZE_BYTES,
    REFERENCE_WORKFLOW_NAME,
    IndexConfig,
    event_log_enabled,
)

__all__ = [
    # Settings
    "DEFAULT_BASELINE_STRATEGY",
    "DEFAULT_CANDIDATE_STRATEGY",
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_REPO",
    "event_log_enabled",
    "EVENT_LOG_PATH",
    "MAX_LOG_SIZE_BYTES",
    "REFERENCE_WORKFLOW_NAME",
    "IndexConfig",
    # Catalog
    "DEFAULT_CATALOG_PATH",
    "BenchmarkDescriptor",
    "Catalog",
    "CatalogEntry",
    "load_catalog",
    "parse_catalog",
]
