"""Error-policy table and YAML loader.

Maps ``(operation, error_code)`` to the message shown to the user. Entries in
the ``default`` section apply to every operation. Display text is resolved
in order: operation override, server hint, envelope message, default
section, fallback text. Transport and unknown errors never show their raw
text to the user; they skip straight to the default section.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from kms_client.diagnostics.error_classifier import ErrorOrigin, NormalizedErrorInfo

logger = logging.getLogger(__name__)

BUNDLED_POLICIES_PATH = Path(__file__).with_name("error_policies.yaml")
DEFAULT_FALLBACK_MESSAGE = "요청 처리 중 오류가 발생했습니다."


class ErrorPolicyTable(BaseModel):
    """Typed shape of the YAML file."""

    default: dict[str, str] = Field(default_factory=dict)
    operations: dict[str, dict[str, str]] = Field(default_factory=dict)


class ErrorPolicyRegistry:
    """Central ``(operation, code) -> message`` lookup used by the adapters."""

    def __init__(
        self,
        table: ErrorPolicyTable | None = None,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ) -> None:
        table = table or ErrorPolicyTable()
        self._default: dict[str, str] = dict(table.default)
        self._operations: dict[str, dict[str, str]] = {
            op: dict(messages) for op, messages in table.operations.items()
        }
        self._fallback_message = fallback_message

    @property
    def operations(self) -> list[str]:
        return sorted(self._operations)

    def register(self, operation: str | None, code: str, message: str) -> None:
        """Add or replace one entry; ``operation=None`` writes the default section."""
        if operation is None:
            self._default[code] = message
        else:
            self._operations.setdefault(operation, {})[code] = message

    def message_for(self, operation: str | None, code: str) -> str | None:
        if operation is not None:
            message = self._operations.get(operation, {}).get(code)
            if message is not None:
                return message
        return self._default.get(code)

    def resolve(self, operation: str | None, info: NormalizedErrorInfo) -> str:
        if operation is not None:
            override = self._operations.get(operation, {}).get(info.code)
            if override:
                return override
        if info.origin is ErrorOrigin.ENVELOPE and (info.hint or info.message):
            return info.hint or info.message
        return self._default.get(info.code) or self._fallback_message


def load_error_policies(
    yaml_path: str | Path | None = None,
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
) -> ErrorPolicyRegistry:
    """Parse an error-policy YAML file into a registry.

    Args:
        yaml_path: Path to the YAML file; None loads the bundled table.
        fallback_message: Text used when an error carries no message at all.

    Returns:
        A registry. Missing or malformed files yield an empty registry.
    """
    path = Path(yaml_path) if yaml_path is not None else BUNDLED_POLICIES_PATH

    if not path.exists():
        logger.warning("Error policies file not found at %s, using no overrides", path)
        return ErrorPolicyRegistry(fallback_message=fallback_message)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse error policies YAML at %s: %s", path, exc)
        return ErrorPolicyRegistry(fallback_message=fallback_message)

    if not isinstance(raw, dict):
        logger.warning("Error policies YAML at %s is not a mapping, using no overrides", path)
        return ErrorPolicyRegistry(fallback_message=fallback_message)

    try:
        table = ErrorPolicyTable.model_validate(raw)
    except ValidationError as exc:
        logger.error("Invalid error policies at %s: %s", path, exc)
        return ErrorPolicyRegistry(fallback_message=fallback_message)

    return ErrorPolicyRegistry(table, fallback_message=fallback_message)
