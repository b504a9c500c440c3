"""Tests for logging configuration and lookup tracing."""

from __future__ import annotations

import logging
import logging.config

import pytest
from rich.logging import RichHandler

from pyqueryable import QueryableList, finder
from pyqueryable import logging as pq_logging


@pytest.fixture
def restore_level():
    """Undo level changes made to the package logger by setup()."""
    package = logging.getLogger("pyqueryable")
    level = package.level
    yield
    package.setLevel(level)


class TestSetup:
    """Test the logging configuration."""

    def test_package_logger_level(self):
        assert pq_logging.LOGGING_CONFIG["loggers"]["pyqueryable"]["level"] == "INFO"

    def test_setup_applies_config(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging.config, "dictConfig", calls.append)
        pq_logging.setup()
        assert calls == [pq_logging.LOGGING_CONFIG]

    @pytest.mark.usefixtures("restore_level")
    def test_setup_with_level(self, monkeypatch):
        monkeypatch.setattr(logging.config, "dictConfig", lambda _: None)
        pq_logging.setup("DEBUG")
        assert logging.getLogger("pyqueryable").level == logging.DEBUG

    def test_only_the_package_logger_is_configured(self):
        loggers = pq_logging.LOGGING_CONFIG["loggers"]
        assert list(loggers) == ["pyqueryable"]
        assert loggers["pyqueryable"]["handlers"] == ["rich"]
        assert not pq_logging.LOGGING_CONFIG["disable_existing_loggers"]

    def test_rich_handler(self):
        handler = pq_logging.rich_handler()
        assert isinstance(handler, RichHandler)
        assert handler.rich_tracebacks
        assert handler.console.stderr


class TestTracing:
    """Test debug messages emitted while resolving lookups."""

    def test_default_finder_match_is_logged(self, caplog, collection):
        caplog.set_level(logging.DEBUG, logger="pyqueryable")
        collection["PAGE_2"]
        assert "by default finder 'name'" in caplog.text

    def test_dynamic_finder_is_logged(self, caplog, collection):
        caplog.set_level(logging.DEBUG, logger="pyqueryable")
        collection.find_all_by_uri_and_name("page_1", "PAGE_1")
        assert "Dynamic finder 'find_all_by_uri_and_name'" in caplog.text

    def test_unresolvable_name_is_logged(self, caplog, pages):
        caplog.set_level(logging.DEBUG, logger="pyqueryable")
        assert getattr(QueryableList(pages), "page_1?") is False
        assert "No default finders to resolve 'page_1?'" in caplog.text

    def test_finder_attributes_are_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="pyqueryable")
        finder({"name": "bob", "age": 23})
        assert "Built finder for attributes ['name', 'age']" in caplog.text

    def test_finder_is_silent_above_debug(self, caplog):
        caplog.set_level(logging.INFO, logger="pyqueryable")
        finder({"name": "bob"})
        assert "Built finder" not in caplog.text
