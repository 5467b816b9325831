"""Query and mutation adapters that turn envelopes into data plus notices."""

from kms_client.adapters.context import AdapterContext, AdapterTimings
from kms_client.adapters.mutation import MutationAdapter
from kms_client.adapters.query import QueryAdapter

__all__ = [
    "AdapterContext",
    "AdapterTimings",
    "MutationAdapter",
    "QueryAdapter",
]
