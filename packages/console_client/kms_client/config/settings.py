"""Pydantic Settings for the console API client.

All environment variables use the KMS_ prefix.
Example: KMS_BASE_URL=https://kms.example.com, KMS_REQUEST_TIMEOUT_SECONDS=30
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # Transport
    base_url: str = "http://localhost:8080"
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    long_request_timeout_seconds: float = Field(default=120.0, gt=0)  # AI draft generation

    # Auth
    refresh_path: str = "/api/v1/auth/refresh"
    login_route: str = "/login"
    token_storage_path: str | None = None  # None keeps tokens in memory only

    # Error policies
    error_policies_path: str | None = None  # None loads the bundled table
    fallback_error_message: str = "요청 처리 중 오류가 발생했습니다."
    default_success_message: str = "작업이 완료되었습니다."

    # Notification durations (ms)
    success_duration_ms: int = Field(default=3000, ge=0)
    info_duration_ms: int = Field(default=3000, ge=0)
    warning_duration_ms: int = Field(default=4000, ge=0)
    error_duration_ms: int = Field(default=5000, ge=0)

    # Adapter timings (ms)
    feedback_stagger_ms: int = Field(default=200, ge=0)
    query_feedback_delay_ms: int = Field(default=100, ge=0)
    query_success_delay_ms: int = Field(default=200, ge=0)
    query_error_delay_ms: int = Field(default=100, ge=0)
    query_error_feedback_delay_ms: int = Field(default=200, ge=0)
    mutation_feedback_delay_ms: int = Field(default=500, ge=0)
    mutation_error_feedback_delay_ms: int = Field(default=100, ge=0)

    # Query retries
    query_max_retries: int = Field(default=3, ge=0)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0)
    retry_max_delay_seconds: float = Field(default=30.0, ge=0)

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    model_config = {"env_prefix": "KMS_"}
