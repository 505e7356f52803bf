"""
Tests pour Settings, le niveau de log console et l'identite statique.
"""

from pathlib import Path

import pytest
from loguru import logger

from cinetag.adapters.identity import StaticIdentityProvider
from cinetag.config import Settings
from cinetag.core.errors import AuthenticationRequired
from cinetag.logging_config import configure_logging, console_level


class TestSettings:
    """Tests pour Settings."""

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CINETAG_OWNER_ID", "alice")
        monkeypatch.setenv("CINETAG_SEARCH_LIMIT", "5")
        monkeypatch.setenv("CINETAG_LOG_LEVEL", "debug")

        settings = Settings()
        assert settings.owner_id == "alice"
        assert settings.authenticated
        assert settings.search_limit == 5
        assert settings.log_level == "DEBUG"

    def test_log_file_expands_home(self, monkeypatch):
        monkeypatch.setenv("CINETAG_LOG_FILE", "~/cinetag/app.log")
        assert Settings().log_file == Path("~/cinetag/app.log").expanduser()

    def test_search_limit_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("CINETAG_SEARCH_LIMIT", "0")
        with pytest.raises(ValueError):
            Settings()


class TestConsoleLevel:
    """Tests pour console_level."""

    @pytest.mark.parametrize(
        "verbose,quiet,expected",
        [(0, False, "WARNING"), (1, False, "INFO"), (2, False, "DEBUG"), (5, False, "DEBUG"),
         (2, True, "ERROR")],
    )
    def test_levels(self, verbose, quiet, expected):
        assert console_level("WARNING", verbose, quiet) == expected


class TestConfigureLogging:
    """Tests pour configure_logging."""

    def test_file_sink_receives_json(self, tmp_path):
        log_file = tmp_path / "logs" / "cinetag.log"
        configure_logging(log_level="ERROR", log_file=log_file)
        try:
            logger.info("Tag cree : Dark")
            logger.complete()
        finally:
            logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "Tag cree : Dark" in content
        assert '"level"' in content


class TestStaticIdentityProvider:
    """Tests pour StaticIdentityProvider."""

    def test_require_owner(self):
        assert StaticIdentityProvider("alice").require_owner() == "alice"

    @pytest.mark.parametrize("owner_id", [None, ""])
    def test_anonymous(self, owner_id):
        with pytest.raises(AuthenticationRequired):
            StaticIdentityProvider(owner_id).require_owner()

    def test_switch(self):
        identity = StaticIdentityProvider("alice")
        identity.switch("bob")
        assert identity.current_owner() == "bob"
