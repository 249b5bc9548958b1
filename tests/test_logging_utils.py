"""Tests for logging helpers."""

import logging

from cdnresolve import configure_logging
from cdnresolve.common.logging_utils import Timer, extra_context, redact, safe_url


class TestConfigureLogging:
    """Tests for configure_logging."""

    def setup_method(self):
        self.root = logging.getLogger()
        self.level = self.root.level
        self.handlers = list(self.root.handlers)

    def teardown_method(self):
        self.root.handlers[:] = self.handlers
        self.root.setLevel(self.level)

    def test_sets_level_and_single_handler(self):
        """Repeated calls install one handler and update the level."""
        configure_logging("debug")
        configure_logging("warning")

        ours = [h for h in self.root.handlers if getattr(h, "_cdnresolve", False)]
        assert len(ours) == 1
        assert self.root.level == logging.WARNING

    def test_level_from_environment(self, monkeypatch):
        """CDNRESOLVE_LOG_LEVEL is used when no level is given."""
        monkeypatch.setenv("CDNRESOLVE_LOG_LEVEL", "ERROR")
        configure_logging()
        assert self.root.level == logging.ERROR

    def test_resolver_leaves_root_logger_alone(self):
        """Building a resolver does not touch logging configuration."""
        from cdnresolve import CdnResolver, ResolverConfig

        CdnResolver(ResolverConfig(log_level="DEBUG"), client=object())
        assert self.root.level == self.level
        assert self.root.handlers == self.handlers


class TestLogHelpers:
    """Tests for structured-log helpers."""

    def test_extra_context_drops_none(self):
        assert extra_context(event="x", status_code=None) == {"event": "x"}

    def test_safe_url_strips_credentials_and_secrets(self):
        cleaned = safe_url("https://user:pw@unpkg.com/react?token=abc#frag")
        assert cleaned == "https://unpkg.com/react?token=[REDACTED]"

    def test_redact(self):
        assert redact("api_key=123&x=1") == "api_key=[REDACTED]&x=1"

    def test_timer(self):
        with Timer() as t:
            pass
        assert t.duration_ms() >= 0
