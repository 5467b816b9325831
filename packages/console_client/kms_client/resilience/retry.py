"""Per-attempt retry bookkeeping and the query retry policy.

A ``RetryContext`` is created for each outbound request (or query call) and
advanced by returning a new value, so no retry state is ever stamped onto a
shared request object.

Transitions:
- SENT -> REFRESHED: auth failure on a request that has not been refreshed yet
- attempt N -> attempt N+1: failure accepted by ``QueryRetryPolicy``
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from kms_client.exceptions import ApiResponseError


@dataclass(frozen=True)
class RetryContext:
    """Immutable retry state of one request lifecycle."""

    refreshed: bool = False
    failure_count: int = 0

    def after_refresh(self) -> RetryContext:
        return replace(self, refreshed=True)

    def after_failure(self) -> RetryContext:
        return replace(self, failure_count=self.failure_count + 1)


@dataclass(frozen=True)
class QueryRetryPolicy:
    """Retry policy for read operations.

    Envelope errors are final: the server has already said what is wrong.
    Any other failure is retried while fewer than ``max_retries`` retries
    have been made, with exponential backoff capped at ``max_delay_seconds``.
    """

    max_retries: int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0

    def should_retry(self, context: RetryContext, error: BaseException) -> bool:
        if isinstance(error, ApiResponseError):
            return False
        return context.failure_count < self.max_retries

    def delay_for(self, context: RetryContext) -> float:
        """Backoff before the next attempt: base * 2^failures (1s, 2s, 4s...)."""
        return min(self.base_delay_seconds * (2**context.failure_count), self.max_delay_seconds)


NO_RETRY = QueryRetryPolicy(max_retries=0)
