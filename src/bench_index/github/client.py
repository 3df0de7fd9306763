import json
import logging
import subprocess  # nosec B404
import time
from typing import Any

from ..config import IndexConfig
from ..errors import GhCommandError, GhNotInstalledError
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


class GhClient:
    """Runs GitHub CLI commands with bounded retry.

    Every external CI call goes through :meth:`run`.
    """

    def __init__(
        self,
        config: IndexConfig,
        retry: RetryPolicy | None = None,
        executable: str = "gh",
    ) -> None:
        self._config = config
        self._retry = retry or RetryPolicy(
            max_retries=config.max_retries, base_delay=config.retry_base_delay
        )
        self._executable = executable

    def _run_once(self, args: list[str]) -> str:
        cmd = [self._executable, *args]
        started_at = time.monotonic()
        try:
            completed = subprocess.run(  # nosec B603
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._config.gh_timeout,
            )
        except FileNotFoundError as exc:
            raise GhNotInstalledError(f"'{self._executable}' not found on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise GhCommandError(args, None, f"timed out after {self._config.gh_timeout}s") from exc

        latency_ms = int((time.monotonic() - started_at) * 1000)
        if completed.returncode != 0:
            stderr = (completed.stderr or completed.stdout or "").strip()
            raise GhCommandError(args, completed.returncode, stderr)
        logger.debug("gh %s ok (latency=%dms)", args[0] if args else "", latency_ms)
        return completed.stdout or ""

    def run(self, args: list[str]) -> str:
        description = "gh " + " ".join(args[:2])
        return self._retry.call(lambda: self._run_once(args), description=description)

    def run_json(self, args: list[str]) -> Any:
        output = self.run(args)
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise GhCommandError(args, 0, f"non-JSON output: {exc}") from exc
