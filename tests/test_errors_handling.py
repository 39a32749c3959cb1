"""
Tests for the error hierarchy and structured error logging
"""

import logging
from unittest.mock import patch

import pytest

from ircwire.errors import (
    AlreadyConnectedError,
    AlreadyDisconnectedError,
    ConfigError,
    ConnectionStateError,
    InternalError,
    NetworkError,
    NotConnectedError,
    ShortWriteError,
    classify_error,
    log_error,
)


class TestHierarchy:
    def test_state_errors_default_messages(self):
        assert str(AlreadyConnectedError()) == "already connected"
        assert str(AlreadyDisconnectedError()) == "already disconnected"
        assert str(NotConnectedError()) == "not connected"
        assert isinstance(NotConnectedError(), ConnectionStateError)

    def test_short_write_data(self):
        error = ShortWriteError(5, 12)
        assert isinstance(error, NetworkError)
        assert error.sent == 5
        assert error.expected == 12
        assert error.data == {"sent": 5, "expected": 12}
        assert "5 of 12" in str(error)

    def test_data_copied(self):
        source = {"path": "x"}
        error = ConfigError("bad", data=source)
        source["path"] = "y"
        assert error.data == {"path": "x"}

    def test_data_defaults_empty(self):
        assert InternalError("plain").data == {}


class TestClassifyError:
    @pytest.mark.parametrize(
        "error, category",
        [
            (NotConnectedError(), "connection"),
            (ShortWriteError(1, 2), "network"),
            (ConnectionResetError(), "network"),
            (ConfigError("x"), "config"),
            (InternalError("x"), "internal"),
            (RuntimeError("x"), "unknown"),
        ],
    )
    def test_categories(self, error, category):
        assert classify_error(error) == category


class TestLogError:
    def test_merges_error_data_into_context(self):
        with patch("ircwire.errors.handling.log_structured_error") as structured:
            log_error("Send failed", ShortWriteError(1, 4), context={"nick": "bot"})
        kwargs = structured.call_args.kwargs
        assert kwargs["error_type"] == "network"
        assert kwargs["message"] == "Send failed: short write: 1 of 4 bytes"
        assert kwargs["context"] == {"nick": "bot", "sent": 1, "expected": 4}

    def test_caller_context_wins(self):
        with patch("ircwire.errors.handling.log_structured_error") as structured:
            log_error("x", ConfigError("bad", data={"path": "a"}), context={"path": "b"})
        assert structured.call_args.kwargs["context"] == {"path": "b"}

    def test_no_context(self):
        with patch("ircwire.errors.handling.log_structured_error") as structured:
            log_error("x", RuntimeError("boom"))
        assert structured.call_args.kwargs["context"] is None

    def test_logged_at_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            log_error("Connection failed", ConnectionRefusedError("refused"))
        assert "[NETWORK] Connection failed: refused" in caplog.text
