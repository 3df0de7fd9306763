__version__ = "0.1.0"

from .comparison import build, build_run_duration_entry, improvement_pct
from .config import BenchmarkDescriptor, IndexConfig, load_catalog
from .index import write_index
from .metrics import StrategyMetrics, extract
from .pairing import RunPair, pick_pair
from .pipeline import run_pipeline

__all__ = [
    "__version__",
    "BenchmarkDescriptor",
    "IndexConfig",
    "RunPair",
    "StrategyMetrics",
    "build",
    "build_run_duration_entry",
    "extract",
    "improvement_pct",
    "load_catalog",
    "pick_pair",
    "run_pipeline",
    "write_index",
]
