import os

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}


def env_bool(name: str, *, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def env_int(name: str, *, default: int, minimum: int = 0) -> int:
    """Integer env var; invalid or below-minimum values fall back to the default."""
    try:
        value = int(os.getenv(name, "").strip() or default)
    except ValueError:
        return default
    if value < minimum:
        return default
    return value


def env_float(name: str, *, default: float) -> float:
    """Positive float env var; invalid or non-positive values fall back to the default."""
    try:
        value = float(os.getenv(name, "").strip() or default)
    except ValueError:
        return default
    if value <= 0:
        return default
    return value
