"""Exponential backoff for remote storage calls."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

_logger = logging.getLogger(__name__)

_UNAVAILABLE_CODES = {"unavailable", "503"}
_SERVICE_UNAVAILABLE = 503

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Retry transient failures with a doubling delay."""

    attempts: int = 5
    base_delay_seconds: float = 1.0
    sleep: Callable[[float], None] = time.sleep

    def call(self, func: Callable[[], T], *, action: str) -> T:
        """Call ``func``, retrying while it fails with a transient error."""
        delay = self.base_delay_seconds
        for attempt in range(1, self.attempts + 1):
            try:
                return func()
            except Exception as exc:
                if attempt >= self.attempts or not is_transient(exc):
                    raise
                _logger.warning(
                    "Storage %s unavailable (attempt %s/%s), retrying in %.1fs: %s",
                    action,
                    attempt,
                    self.attempts,
                    delay,
                    exc,
                )
                self.sleep(delay)
                delay *= 2
        raise RuntimeError(f"Retry policy for {action} made no attempts")


def is_transient(exc: Exception) -> bool:
    """Return True when the failure means the service is temporarily unavailable."""
    if isinstance(exc, httpx.TransportError):
        return True
    code = getattr(exc, "code", None)
    if code is not None and str(code).lower() in _UNAVAILABLE_CODES:
        return True
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    return status_code == _SERVICE_UNAVAILABLE
