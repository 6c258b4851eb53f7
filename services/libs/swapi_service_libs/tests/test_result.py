"""Tests for Result[T, E] monad implementation."""

from dataclasses import dataclass

import pytest

from services.libs.swapi_service_libs import Result


@dataclass
class CustomError:
    """Custom error type for testing."""

    code: str
    message: str


class TestResultOk:
    """Tests for Result.ok() success path."""

    def test_ok_exposes_value(self) -> None:
        result: Result[int, str] = Result.ok(42)

        assert result.is_ok
        assert not result.is_err
        assert result.value == 42

    def test_ok_accessing_error_raises_value_error(self) -> None:
        """Test accessing error on Result.ok raises ValueError."""
        result: Result[str, str] = Result.ok("success")

        with pytest.raises(ValueError, match="Called error on Result.ok"):
            _ = result.error

    def test_ok_with_none_value_is_still_ok(self) -> None:
        result: Result[None, str] = Result.ok(None)

        assert result.is_ok
        assert result.value is None


class TestResultErr:
    """Tests for Result.err() failure path."""

    def test_err_exposes_custom_error(self) -> None:
        error = CustomError(code="E001", message="bad reference")
        result: Result[int, CustomError] = Result.err(error)

        assert result.is_err
        assert not result.is_ok
        assert result.error is error

    def test_err_accessing_value_raises_value_error(self) -> None:
        """Test accessing value on Result.err raises ValueError naming the error."""
        result: Result[int, str] = Result.err("boom")

        with pytest.raises(ValueError, match="Called value on Result.err: 'boom'"):
            _ = result.value


def test_result_is_immutable() -> None:
    result: Result[int, str] = Result.ok(1)

    with pytest.raises(AttributeError):
        result._is_ok = False  # type: ignore[misc]
