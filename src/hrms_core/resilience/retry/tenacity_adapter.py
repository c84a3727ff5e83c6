"""Resilience – TenacityRetryPolicy adapter."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

import tenacity

from hrms_core.observability.logging import get_logger

T = TypeVar("T")
logger = get_logger(__name__)


def _log_retry(retry_state: tenacity.RetryCallState) -> None:
    outcome = retry_state.outcome
    logger.warning(
        "retrying",
        attempt=retry_state.attempt_number,
        delay=retry_state.next_action.sleep if retry_state.next_action else None,
        error=repr(outcome.exception()) if outcome is not None else None,
    )


class TenacityRetryPolicy:
    """Retry policy backed by the ``tenacity`` library.

    Parameters
    ----------
    max_attempts:
        Maximum number of call attempts (including the first call).
    wait:
        A ``tenacity`` wait strategy, e.g.
        ``tenacity.wait_exponential(multiplier=1, max=10)``.
        Defaults to ``wait_fixed(1)``.
    retry:
        A ``tenacity`` retry predicate, e.g.
        ``tenacity.retry_if_exception_type(IOError)``.
        Defaults to retrying on any exception.
    reraise:
        Whether to re-raise the original exception after all attempts are
        exhausted.  When ``False`` a :class:`tenacity.RetryError` is raised
        instead, carrying the last attempt.  Defaults to ``True``.
    kwargs:
        Additional keyword arguments forwarded directly to
        :class:`tenacity.AsyncRetrying`.

    Example
    -------
    ::

        from tenacity import wait_exponential, retry_if_exception_type
        policy = TenacityRetryPolicy(
            max_attempts=5,
            wait=wait_exponential(multiplier=0.5, max=8),
            retry=retry_if_exception_type(IOError),
        )
        result = await policy.execute_async(my_async_fn)
    """

    def __init__(
        self,
        max_attempts: int = 3,
        wait: Any = None,
        retry: Any = None,
        reraise: bool = True,
        **kwargs: Any,
    ) -> None:
        self.max_attempts = max_attempts
        self._wait = wait or tenacity.wait_fixed(1)
        self._retry = retry or tenacity.retry_if_exception(lambda _: True)
        self._reraise = reraise
        self._extra_kwargs = kwargs

    def _build_async_retrying(self) -> tenacity.AsyncRetrying:
        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self.max_attempts),
            wait=self._wait,
            retry=self._retry,
            reraise=self._reraise,
            before_sleep=_log_retry,
            **self._extra_kwargs,
        )

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func* asynchronously with tenacity retry."""
        async for attempt in self._build_async_retrying():
            with attempt:
                result = await func()
        return result  # type: ignore[return-value]


__all__ = ["TenacityRetryPolicy"]
