"""Tests for logging_utils processors and request context helpers."""

from typing import Any

import pytest
from structlog.contextvars import get_contextvars

from services.libs.swapi_service_libs.logging_utils import (
    add_service_context,
    bind_request_context,
    clear_request_context,
    configure_service_logging,
)


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_service_fields_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_NAME", "test_service")
        monkeypatch.setenv("ENVIRONMENT", "production")
        event_dict: dict[str, Any] = {"event": "test message", "level": "info"}

        result = add_service_context(None, "", event_dict)

        assert result["service.name"] == "test_service"
        assert result["deployment.environment"] == "production"
        assert result["level"] == "info"

    def test_defaults_when_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        result = add_service_context(None, "", {})

        assert result["service.name"] == "unknown"
        assert result["deployment.environment"] == "development"


class TestRequestContext:
    def test_bind_replaces_previous_context(self) -> None:
        bind_request_context("first", path="/people")
        bind_request_context("second")

        assert get_contextvars() == {"correlation_id": "second"}

        clear_request_context()
        assert get_contextvars() == {}


def test_file_logging_creates_log_directory(
    tmp_path: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("SERVICE_NAME", "test_service")
    monkeypatch.setenv("ENVIRONMENT", "development")
    log_file = tmp_path / "nested" / "service.log"

    configure_service_logging(
        "test_service", log_to_file=True, log_file_path=str(log_file)
    )

    assert log_file.parent.is_dir()
