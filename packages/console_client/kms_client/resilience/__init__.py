"""Resilience components for the console API client."""

from kms_client.resilience.retry import NO_RETRY, QueryRetryPolicy, RetryContext
from kms_client.resilience.single_flight import SingleFlight

__all__ = [
    "NO_RETRY",
    "QueryRetryPolicy",
    "RetryContext",
    "SingleFlight",
]
