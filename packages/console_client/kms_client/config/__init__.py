"""Configuration module: settings and error policies."""

from kms_client.config.error_policies import (
    ErrorPolicyRegistry,
    ErrorPolicyTable,
    load_error_policies,
)
from kms_client.config.settings import ClientSettings

__all__ = [
    "ClientSettings",
    "ErrorPolicyRegistry",
    "ErrorPolicyTable",
    "load_error_policies",
]
