"""Tests for structlog configuration and processors."""

import logging

import pytest
import structlog

from reelthreads.config.settings import Settings
from reelthreads.core.context import OperationContext
from reelthreads.core.logging import (
    add_app_info_processor,
    add_context_processor,
    configure_structlog,
    get_logger,
    mask_sensitive_data,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore structlog and root handlers after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestProcessors:
    """Tests for custom processors."""

    def test_context_processor_adds_operation_context(self) -> None:
        with OperationContext(operation_id="op-9", user_id="u-1"):
            event = add_context_processor(None, "info", {"event": "x"})

        assert event["operation_id"] == "op-9"
        assert event["user_id"] == "u-1"

    def test_context_processor_keeps_explicit_keys(self) -> None:
        with OperationContext(movie_id="from-context"):
            event = add_context_processor(
                None, "info", {"event": "x", "movie_id": "explicit"}
            )

        assert event["movie_id"] == "explicit"

    def test_app_info_processor(self) -> None:
        processor = add_app_info_processor("reelthreads", "1.2.3", "testing")
        event = processor(None, "info", {"event": "x"})

        assert event["app"] == "reelthreads"
        assert event["version"] == "1.2.3"
        assert event["environment"] == "testing"


class TestMaskSensitiveData:
    """Tests for mask_sensitive_data."""

    def test_masks_long_values_partially(self) -> None:
        event = mask_sensitive_data(None, "info", {"api_token": "abcdef123456"})
        assert event["api_token"] == "ab********56"

    @pytest.mark.parametrize("key", ["password", "Authorization", "email"])
    def test_masks_short_values_fully(self, key: str) -> None:
        assert mask_sensitive_data(None, "info", {key: "abc"})[key] == "***"

    def test_masks_nested_dicts(self) -> None:
        event = mask_sensitive_data(
            None, "info", {"payload": {"secret": "hunter22", "title": "Heat"}}
        )
        assert event["payload"] == {"secret": "hu****22", "title": "Heat"}

    def test_leaves_engagement_fields_alone(self) -> None:
        event = {
            "event": "comment_added",
            "author_id": "7f9c0d4e",
            "comment_id": "c-1",
            "total_likes": 3,
        }
        assert mask_sensitive_data(None, "info", dict(event)) == event


class TestConfigureStructlog:
    """Tests for configure_structlog."""

    def test_console_only_by_default(self, settings) -> None:
        configure_structlog(settings)

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_json_output(self, capsys) -> None:
        configure_structlog(
            Settings(environment="testing", log_format="json", log_level="INFO")
        )

        get_logger("tests").info(
            "comment_added", comment_id="c-1", reporter_email="fan@example.com"
        )

        out = capsys.readouterr().out
        assert '"event": "comment_added"' in out
        assert '"comment_id": "c-1"' in out
        assert '"app": "reelthreads"' in out
        assert "fan@example.com" not in out
        assert '"reporter_email": "fa***********om"' in out

    def test_file_handlers(self, tmp_path) -> None:
        settings = Settings(environment="testing", log_to_file=True, log_format="json")
        configure_structlog(settings, log_dir=tmp_path)

        get_logger("tests").error("store_conflict_retries_exhausted")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert (tmp_path / "reelthreads.log").exists()
        assert "store_conflict_retries_exhausted" in (
            tmp_path / "reelthreads.error.log"
        ).read_text()
