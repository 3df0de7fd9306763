import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from ..errors import GhCommandError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with linear backoff.

    The first attempt is followed by up to ``max_retries`` retries; retry N
    waits ``base_delay * N`` seconds. Only ``retry_on`` exceptions are retried,
    anything else propagates immediately.
    """

    max_retries: int = 3
    base_delay: float = 2.0
    retry_on: tuple[type[BaseException], ...] = (GhCommandError,)
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, attempt: int) -> float:
        return self.base_delay * attempt

    def call(self, func: Callable[[], T], *, description: str = "call") -> T:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return func()
            except self.retry_on as exc:
                if attempt >= self.max_attempts:
                    logger.warning(
                        "%s failed, giving up (attempt=%d/%d): %s",
                        description,
                        attempt,
                        self.max_attempts,
                        exc,
                    )
                    raise
                delay = self.backoff(attempt)
                logger.warning(
                    "%s failed, retrying in %.1fs (attempt=%d/%d): %s",
                    description,
                    delay,
                    attempt,
                    self.max_attempts,
                    exc,
                )
                self.sleep(delay)
        raise AssertionError("unreachable")  # pragma: no cover
