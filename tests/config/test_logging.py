"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from storefront.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    shop = logging.getLogger("storefront")
    shop_level = shop.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    shop.setLevel(shop_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("storefront").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("storefront").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("storefront.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "storefront.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("storefront.services.cart").debug("Loaded 2 cart entries")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Loaded 2 cart entries"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "storefront.services.cart"

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("storefront.services.cart").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sqlalchemy.engine").debug("SELECT noise")
        logging.getLogger("pluggy").debug("hook noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
