"""Normalize raw benchmark artifact payloads into strategy metrics."""

from dataclasses import asdict, dataclass
from typing import Any

from .parsing import parse_number, round_seconds


@dataclass(frozen=True)
class StrategyMetrics:
    cold_seconds: float | None = None
    warm1_seconds: float | None = None
    warm2_seconds: float | None = None
    warm_average_seconds: float | None = None
    stale_seconds: float | None = None
    internal_only_seconds: float | None = None
    storage_bytes: float | None = None
    storage_source: str | None = None
    two_consecutive_warm_succeeded: bool = False
    # Observed wall time of the CI run; filled in from the run detail, not the payload.
    run_total_seconds: float | None = None

    @property
    def steady_warm_seconds(self) -> float | None:
        """Most cache-warmed reading: second warm run, then the average, then the first."""
        for value in (self.warm2_seconds, self.warm_average_seconds, self.warm1_seconds):
            if value is not None:
                return value
        return None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if key.endswith("_seconds"):
                data[key] = round_seconds(value)
        if self.storage_bytes is not None:
            data["storage_bytes"] = int(self.storage_bytes)
        return data


def _section(payload: Any, name: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    section = payload.get(name)
    return section if isinstance(section, dict) else {}


def _measurement(value: Any) -> float | None:
    # Durations and byte counts are never negative; treat one as unmeasured.
    number = parse_number(value)
    if number is None or number < 0:
        return None
    return number


def _first_number(*values: Any) -> float | None:
    for value in values:
        number = _measurement(value)
        if number is not None:
            return number
    return None


def extract(payload: Any) -> StrategyMetrics:
    """Read every metric independently; missing or malformed fields become None."""
    runs = _section(payload, "runs")
    speed = _section(payload, "speed")
    stale = _section(payload, "stale_docker_cache")
    internal_only = _section(payload, "internal_only")
    cache = _section(payload, "cache")
    hit_behavior = _section(payload, "hit_behavior")

    warm1 = _measurement(runs.get("warm1_seconds"))
    warm2 = _measurement(runs.get("warm2_seconds"))
    warm_average = _measurement(speed.get("warm_average_seconds"))
    if warm_average is None:
        samples = [value for value in (warm1, warm2) if value is not None]
        if samples:
            warm_average = sum(samples) / len(samples)

    storage_source = cache.get("storage_source")

    return StrategyMetrics(
        cold_seconds=_measurement(runs.get("cold_seconds")),
        warm1_seconds=warm1,
        warm2_seconds=warm2,
        warm_average_seconds=warm_average,
        stale_seconds=_first_number(stale.get("seconds"), runs.get("stale_docker_seconds")),
        internal_only_seconds=_first_number(
            internal_only.get("warm_no_docker_cache_seconds"), internal_only.get("seconds")
        ),
        storage_bytes=_measurement(cache.get("storage_bytes")),
        storage_source=str(storage_source) if storage_source else None,
        two_consecutive_warm_succeeded=hit_behavior.get("two_consecutive_warm_succeeded") is True,
    )
