from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from ..core.constants import DEFAULT_EXTERNAL_TIMEOUT_SECONDS
from ..core.exceptions import ExternalServiceError, ExternalTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TaskResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ExternalServiceError] = None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


class ExternalTaskRunner:
    """Run blocking external work (AI calls, document rendering) with a timeout.

    The caller gets a TaskResult instead of an exception so the route layer can
    decide how to report the failure. A timed out task keeps running on its
    worker thread; its result is discarded and `on_abandon` runs once it ends.
    """

    def __init__(
        self,
        *,
        max_workers: int = 4,
        timeout_seconds: float = DEFAULT_EXTERNAL_TIMEOUT_SECONDS,
        name: str = "external",
    ):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)
        self._timeout = float(timeout_seconds)

    def run(
        self,
        name: str,
        fn: Callable[[], T],
        *,
        timeout: Optional[float] = None,
        on_abandon: Optional[Callable[[], None]] = None,
    ) -> TaskResult[T]:
        limit = self._timeout if timeout is None else float(timeout)
        future = self._executor.submit(fn)
        try:
            return TaskResult(value=future.result(timeout=limit))
        except FutureTimeoutError:
            future.cancel()
            logger.warning("External task %s timed out after %.1fs", name, limit)
            if on_abandon is not None:
                future.add_done_callback(lambda f: self._abandoned(name, f, on_abandon))
            return TaskResult(error=ExternalTimeoutError(f"{name} timed out after {limit:g}s"))
        except ExternalServiceError as e:
            logger.error("External task %s failed: %s", name, e)
            return TaskResult(error=e)
        except Exception as e:
            logger.exception("External task %s raised", name)
            return TaskResult(error=ExternalServiceError(f"{name} failed: {e}"))

    @staticmethod
    def _abandoned(name: str, future: Future, cleanup: Callable[[], None]) -> None:
        try:
            cleanup()
        except Exception:
            logger.exception("Cleanup after abandoned task %s failed", name)
        else:
            logger.info("Cleaned up after abandoned task %s (cancelled=%s)", name, future.cancelled())

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
