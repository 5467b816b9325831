"""Unit tests for ClientSettings and error policy loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from kms_client.config.error_policies import (
    ErrorPolicyRegistry,
    ErrorPolicyTable,
    load_error_policies,
)
from kms_client.config.settings import ClientSettings
from kms_client.diagnostics.error_classifier import ErrorOrigin, NormalizedErrorInfo


# ---------------------------------------------------------------------------
# ClientSettings
# ---------------------------------------------------------------------------


class TestClientSettings:
    def test_defaults_are_correct(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("KMS_BASE_URL", raising=False)

        settings = ClientSettings()

        assert settings.base_url == "http://localhost:8080"
        assert settings.request_timeout_seconds == 30
        assert settings.long_request_timeout_seconds == 120
        assert settings.refresh_path == "/api/v1/auth/refresh"
        assert settings.login_route == "/login"
        assert settings.token_storage_path is None
        assert settings.success_duration_ms == 3000
        assert settings.warning_duration_ms == 4000
        assert settings.error_duration_ms == 5000
        assert settings.feedback_stagger_ms == 200
        assert settings.query_feedback_delay_ms == 100
        assert settings.query_success_delay_ms == 200
        assert settings.mutation_feedback_delay_ms == 500
        assert settings.query_max_retries == 3
        assert settings.json_logs is False

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("KMS_BASE_URL", "https://kms.example.com")
        monkeypatch.setenv("KMS_QUERY_MAX_RETRIES", "1")
        monkeypatch.setenv("KMS_JSON_LOGS", "true")

        settings = ClientSettings()

        assert settings.base_url == "https://kms.example.com"
        assert settings.query_max_retries == 1
        assert settings.json_logs is True

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            ClientSettings(request_timeout_seconds=0)

    def test_rejects_negative_delays(self):
        with pytest.raises(ValidationError):
            ClientSettings(feedback_stagger_ms=-1)


# ---------------------------------------------------------------------------
# Error policies
# ---------------------------------------------------------------------------


def _info(code: str, message: str = "raw", hint: str | None = None) -> NormalizedErrorInfo:
    return NormalizedErrorInfo(origin=ErrorOrigin.ENVELOPE, code=code, message=message, hint=hint)


class TestErrorPolicyRegistry:
    @pytest.fixture
    def registry(self) -> ErrorPolicyRegistry:
        table = ErrorPolicyTable(
            default={"SERVER.ERROR": "서버 오류"},
            operations={"departments.create": {"SERVER.ERROR": "부서 생성 실패", "VALIDATION.ERROR": "입력값 오류"}},
        )
        return ErrorPolicyRegistry(table, fallback_message="fallback")

    def test_operation_override_first(self, registry: ErrorPolicyRegistry):
        assert registry.resolve("departments.create", _info("SERVER.ERROR", hint="h")) == "부서 생성 실패"

    def test_server_hint_beats_default_section(self, registry: ErrorPolicyRegistry):
        assert registry.resolve("departments.update", _info("SERVER.ERROR", hint="3시 점검 중입니다")) == (
            "3시 점검 중입니다"
        )
        assert registry.resolve(None, _info("SERVER.ERROR", "server down")) == "server down"

    def test_default_section_when_envelope_has_no_text(self, registry: ErrorPolicyRegistry):
        assert registry.resolve("departments.update", _info("SERVER.ERROR", "")) == "서버 오류"

    def test_hint_then_message_then_fallback(self, registry: ErrorPolicyRegistry):
        assert registry.resolve("departments.create", _info("RESOURCE.NOT_FOUND", "raw", "hint")) == "hint"
        assert registry.resolve("departments.create", _info("RESOURCE.NOT_FOUND", "raw")) == "raw"
        assert registry.resolve("departments.create", _info("RESOURCE.NOT_FOUND", "")) == "fallback"

    def test_transport_text_is_never_shown(self, registry: ErrorPolicyRegistry):
        raw = "Server error '502 Bad Gateway' for url 'http://kms.test/api/v1/departments'"
        info = NormalizedErrorInfo(origin=ErrorOrigin.TRANSPORT, code="HTTP_502", message=raw)

        assert registry.resolve("departments.create", info) == "fallback"

        registry.register(None, "NETWORK_ERROR", "네트워크 오류")
        network = NormalizedErrorInfo(origin=ErrorOrigin.TRANSPORT, code="NETWORK_ERROR", message="refused")
        assert registry.resolve("departments.create", network) == "네트워크 오류"

    def test_register(self, registry: ErrorPolicyRegistry):
        registry.register("reviews.detail", "AUTH.FORBIDDEN", "권한 없음")
        registry.register(None, "TIMEOUT", "시간 초과")

        assert registry.message_for("reviews.detail", "AUTH.FORBIDDEN") == "권한 없음"
        assert registry.message_for("anything", "TIMEOUT") == "시간 초과"
        assert registry.operations == ["departments.create", "reviews.detail"]


class TestLoadErrorPolicies:
    def test_bundled_table(self):
        registry = load_error_policies()

        assert "departments.create" in registry.operations
        assert registry.message_for("departments.delete", "RESOURCE.IN_USE") == "사용 중인 부서는 삭제할 수 없습니다."
        assert registry.message_for("reviews.detail", "NETWORK_ERROR") == (
            "네트워크 오류가 발생했습니다. 인터넷 연결을 확인해주세요."
        )

    def test_bundled_table_keeps_server_hint(self):
        registry = load_error_policies()
        info = _info("SERVER.ERROR", "internal", hint="3시 점검 중입니다")

        assert registry.resolve("manuals.detail", info) == "3시 점검 중입니다"

    def test_loads_custom_file(self, tmp_path: Path):
        path = tmp_path / "policies.yaml"
        path.write_text(
            yaml.safe_dump(
                {"operations": {"manuals.update": {"VALIDATION.ERROR": "메뉴얼 입력 오류"}}},
                allow_unicode=True,
            ),
            encoding="utf-8",
        )

        registry = load_error_policies(path)

        assert registry.operations == ["manuals.update"]
        assert registry.message_for("manuals.update", "VALIDATION.ERROR") == "메뉴얼 입력 오류"

    def test_missing_file_gives_empty_registry(self, tmp_path: Path):
        registry = load_error_policies(tmp_path / "nope.yaml", fallback_message="fb")

        assert registry.operations == []
        assert registry.resolve("x", _info("SERVER.ERROR", "")) == "fb"

    def test_malformed_yaml_gives_empty_registry(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("default: [unclosed", encoding="utf-8")

        assert load_error_policies(path).operations == []

    def test_non_mapping_gives_empty_registry(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        assert load_error_policies(path).operations == []

    def test_invalid_shape_gives_empty_registry(self, tmp_path: Path):
        path = tmp_path / "shape.yaml"
        path.write_text("operations:\n  departments.create: [1, 2]\n", encoding="utf-8")

        assert load_error_policies(path).operations == []
