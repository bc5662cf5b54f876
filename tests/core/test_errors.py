"""Tests for the cadence error hierarchy."""

import pytest

from cadence.core.errors import (
    CadenceError,
    ConfigError,
    ErrorCategory,
    ExhaustionError,
    MaxAttemptsReached,
    MaxRetriesReached,
    SerializationError,
    require_non_negative,
)


class TestCadenceError:
    """Tests for the base error."""

    def test_defaults(self):
        """Test default category and empty context."""
        error = CadenceError("boom")
        assert error.message == "boom"
        assert error.category == ErrorCategory.INTERNAL
        assert error.context == {}
        assert error.cause is None

    def test_cause_is_chained(self):
        """Test cause becomes __cause__."""
        root = ConnectionError("dns")
        error = CadenceError("wrapped", cause=root)
        assert error.__cause__ is root

    def test_with_context_is_fluent(self):
        """Test with_context returns self and merges keys."""
        error = CadenceError("x")
        assert error.with_context(a=1).with_context(b=2) is error
        assert error.context == {"a": 1, "b": 2}

    def test_to_dict(self):
        """Test serialization for logging."""
        error = CadenceError("x", cause=ValueError("inner")).with_context(job="sync")
        data = error.to_dict()
        assert data["error_type"] == "CadenceError"
        assert data["category"] == "INTERNAL"
        assert data["context"] == {"job": "sync"}
        assert "inner" in data["cause"]

    def test_repr(self):
        """Test repr includes message and category."""
        assert repr(ConfigError("bad")) == "ConfigError('bad', category=CONFIG)"


class TestExhaustionErrors:
    """Tests for retry/poll exhaustion errors."""

    def test_max_retries_message_and_fields(self):
        """Test MaxRetriesReached carries attempts and last error."""
        last = ValueError("final")
        error = MaxRetriesReached(attempts=4, last_error=last)

        assert str(error) == "Max retries reached"
        assert error.attempts == 4
        assert error.last_error is last
        assert error.__cause__ is last
        assert error.category == ErrorCategory.EXHAUSTION
        assert error.context["attempts"] == 4

    def test_max_attempts_message_and_fields(self):
        """Test MaxAttemptsReached carries attempts and last result."""
        error = MaxAttemptsReached(attempts=3, last_result={"state": "pending"})

        assert str(error) == "Max attempts reached"
        assert error.attempts == 3
        assert error.last_result == {"state": "pending"}

    def test_common_base(self):
        """Test both exhaustion errors share ExhaustionError."""
        assert issubclass(MaxRetriesReached, ExhaustionError)
        assert issubclass(MaxAttemptsReached, ExhaustionError)
        assert issubclass(ExhaustionError, CadenceError)


class TestInputErrors:
    """Tests for errors that double as builtin exceptions."""

    def test_serialization_error_is_type_error(self):
        """Test SerializationError is caught by TypeError handlers."""
        with pytest.raises(TypeError):
            raise SerializationError("cycle")

    def test_config_error_is_value_error(self):
        """Test ConfigError is caught by ValueError handlers."""
        with pytest.raises(ValueError):
            raise ConfigError("negative wait")

    def test_require_non_negative(self):
        """Test validation of durations and counts."""
        assert require_non_negative("wait", 0) == 0
        assert require_non_negative("wait", 1.5) == 1.5

        with pytest.raises(ConfigError) as exc_info:
            require_non_negative("wait", -0.1)
        assert exc_info.value.context == {"wait": -0.1}
