"""
Tests des commandes CLI CineTag.

Tests couvrant:
- commandes generales : version, categories, info
- subcategory / tag / content sur une base SQLite temporaire
- codes de sortie : 1 pour un echec du domaine, 2 pour un argument invalide
- decorateur with_container avec un container simule
"""

from unittest.mock import MagicMock, patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from cinetag import main
from cinetag.core.errors import NotFoundError
from cinetag.core.result import Result
from cinetag.main import app

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Base et journal temporaires, utilisateur alice."""
    monkeypatch.setenv("CINETAG_DATABASE_URL", f"sqlite:///{tmp_path}/cinetag.db")
    monkeypatch.setenv("CINETAG_OWNER_ID", "alice")
    monkeypatch.setenv("CINETAG_LOG_FILE", str(tmp_path / "logs" / "cinetag.log"))
    yield tmp_path
    # Les sinks loguru pointent vers les flux du runner, fermes apres invoke
    logger.remove()


def invoke(*args: str):
    return runner.invoke(app, list(args))


# ============================================================================
# Commandes generales
# ============================================================================


class TestGeneralCommands:
    """Tests pour version et categories."""

    def test_version(self, cli_env):
        result = invoke("version")
        assert result.exit_code == 0
        assert "CineTag v0.1.0" in result.output

    def test_categories(self, cli_env):
        result = invoke("categories")
        assert result.exit_code == 0
        assert "Catégories" in result.output


# ============================================================================
# Parcours sur une base temporaire
# ============================================================================


class TestTaggingWorkflow:
    """Creation de tags et pose sur des contenus via la CLI."""

    def test_subcategory_list(self, cli_env):
        result = invoke("subcategory", "list", "6")
        assert result.exit_code == 0
        assert "Mood" in result.output

    def test_subcategory_create_duplicate_fails(self, cli_env):
        assert invoke("subcategory", "create", "6", "Cerebral").exit_code == 0

        result = invoke("subcategory", "create", "6", "tone")
        assert result.exit_code == 1
        assert "duplicate_name" in result.output

    def test_tag_and_content_workflow(self, cli_env):
        created = invoke("tag", "create", "6", "164", "Dark", "--color", "#ef4444")
        assert created.exit_code == 0
        assert "Tag cree" in created.output
        assert "#EF4444" in created.output

        added = invoke("content", "add", "1", "1396", "tv", "--episode", "S01E03")
        assert added.exit_code == 0
        assert "tv:1396 S01E03" in added.output

        shown = invoke("content", "show", "1396", "tv", "-e", "s1e3")
        assert shown.exit_code == 0
        assert "Dark" in shown.output

        series_level = invoke("content", "show", "1396", "tv")
        assert series_level.exit_code == 0
        assert "Aucun tag" in series_level.output

    def test_duplicate_association_exit_code(self, cli_env):
        invoke("tag", "create", "6", "164", "Dark")
        assert invoke("content", "add", "1", "550", "movie").exit_code == 0

        result = invoke("content", "add", "1", "550", "movie")
        assert result.exit_code == 1
        assert "duplicate_association" in result.output

    def test_unknown_tag(self, cli_env):
        result = invoke("tag", "usage", "42")
        assert result.exit_code == 1
        assert "not_found" in result.output

    def test_invalid_episode_is_bad_parameter(self, cli_env):
        result = invoke("content", "show", "1396", "tv", "--episode", "episode3")
        assert result.exit_code == 2

    def test_delete_with_yes(self, cli_env):
        invoke("tag", "create", "6", "164", "Dark")
        invoke("content", "add", "1", "550", "movie")

        result = invoke("tag", "delete", "1", "--yes")
        assert result.exit_code == 0
        assert "1 association(s)" in result.output

    def test_meta_requires_an_option(self, cli_env):
        result = invoke("content", "meta", "1")
        assert result.exit_code == 2


class TestAuthentication:
    """Sans CINETAG_OWNER_ID, les commandes de tagging echouent."""

    def test_no_owner(self, cli_env, monkeypatch):
        monkeypatch.delenv("CINETAG_OWNER_ID")
        result = invoke("tag", "list")
        assert result.exit_code == 1
        assert "authentication_required" in result.output

    def test_info_reports_missing_owner(self, cli_env, monkeypatch):
        monkeypatch.delenv("CINETAG_OWNER_ID")
        # Settings est un singleton du container du module main
        main.container.config.reset()
        result = invoke("info")
        assert result.exit_code == 0
        assert "non authentifié" in result.output


# ============================================================================
# Container simule
# ============================================================================


class TestWithMockContainer:
    """Patche Container dans helpers.py, la ou with_container l'instancie."""

    @pytest.fixture
    def mock_container(self):
        with patch("cinetag.adapters.cli.helpers.Container") as mock_cls:
            container_instance = MagicMock()
            mock_cls.return_value = container_instance
            yield container_instance

    def test_failure_result_exits_with_code_1(self, cli_env, mock_container):
        service = mock_container.tagging_service.return_value
        service.usage_stats.return_value = Result.failure(NotFoundError("Tag", 7))

        result = invoke("tag", "usage", "7")

        assert result.exit_code == 1
        assert "Tag introuvable : 7" in result.output
        mock_container.database.init.assert_called_once()
        mock_container.session.return_value.close.assert_called_once()
