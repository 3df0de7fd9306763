"""Optional JSONL audit log of per-benchmark outcomes."""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from . import config

logger = logging.getLogger(__name__)

MAX_ROTATED_LOGS = 5


def rotate_log_if_needed() -> None:
    try:
        log_path = config.EVENT_LOG_PATH
        if log_path.exists() and log_path.stat().st_size > config.MAX_LOG_SIZE_BYTES:
            ts = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
            rotated_path = log_path.with_name(f"{log_path.stem}.{ts}{log_path.suffix}")
            log_path.rename(rotated_path)
            logger.debug("Rotated event log to %s", rotated_path)

            rotated_logs = sorted(log_path.parent.glob(f"{log_path.stem}.*{log_path.suffix}"), reverse=True)
            for old_log in rotated_logs[MAX_ROTATED_LOGS:]:
                old_log.unlink(missing_ok=True)
                logger.debug("Cleaned up old event log: %s", old_log)
    except OSError as exc:
        logger.warning("Failed to rotate event log: %s", exc)


def log_event(kind: str, benchmark: str, **fields: Any) -> None:
    """Append one event; write failures never affect the pipeline."""
    if not config.event_log_enabled():
        return

    event = {
        "timestamp": datetime.now(UTC).isoformat(),
        "kind": kind,
        "benchmark": benchmark,
        "level": "warning" if kind in ("failed", "skipped") else "info",
        **fields,
    }
    try:
        log_path = config.EVENT_LOG_PATH
        if log_path.is_dir():
            logger.warning("Event log path is a directory, skipping write: %s", log_path)
            return
        log_path.parent.mkdir(parents=True, exist_ok=True)

        rotate_log_if_needed()

        with open(log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")
    except OSError as exc:
        logger.warning("Failed to write event log: %s", exc)
