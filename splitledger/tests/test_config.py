import logging
import os
import subprocess
import sys

import pytest
from pydantic import ValidationError

from splitledger.config import configure_logging, load_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("SPLITLEDGER_CURRENCY_SYMBOL", "SPLITLEDGER_RECENT_LIMIT",
                    "SPLITLEDGER_LOG_LEVEL", "SPLITLEDGER_HOST", "SPLITLEDGER_PORT",
                    "SPLITLEDGER_CORS_ORIGINS"):
            monkeypatch.delenv(var, raising=False)

        settings = load_settings()

        assert settings.ledger.currency_symbol == "$"
        assert settings.ledger.recent_limit == 10
        assert settings.logging.level == "INFO"
        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 8000
        assert settings.server.cors_origins == ["*"]

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_CURRENCY_SYMBOL", "€")
        monkeypatch.setenv("SPLITLEDGER_RECENT_LIMIT", "3")
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", "debug")
        monkeypatch.setenv("SPLITLEDGER_HOST", "127.0.0.1")
        monkeypatch.setenv("SPLITLEDGER_PORT", "9001")
        monkeypatch.setenv("SPLITLEDGER_CORS_ORIGINS", "http://a.test, http://b.test")

        settings = load_settings()

        assert settings.ledger.currency_symbol == "€"
        assert settings.ledger.recent_limit == 3
        assert settings.logging.level == "DEBUG"
        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 9001
        assert settings.server.cors_origins == ["http://a.test", "http://b.test"]

    def test_invalid_values_rejected(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            load_settings()


class TestLoggingSetup:

    def test_importing_service_leaves_root_logger_alone(self):
        repo_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        result = subprocess.run(
            [sys.executable, "-c",
             "import logging, splitledger.service, splitledger.api; "
             "assert not logging.getLogger().handlers"],
            cwd=repo_root,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr

    def test_configure_logging_installs_root_handler(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", "DEBUG")

        configure_logging(load_settings())

        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

    def test_configure_logging_keeps_existing_handlers(self, monkeypatch):
        root = logging.getLogger()
        existing = logging.NullHandler()
        monkeypatch.setattr(root, "handlers", [existing])

        configure_logging(load_settings())

        assert root.handlers == [existing]
