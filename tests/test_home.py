"""Tests for project root resolution."""

from pathlib import Path

import pytest

from schemakit.home import get_project_root


class TestGetProjectRoot:
    """Tests for project root path resolution."""

    @pytest.fixture(autouse=True)
    def clear_root_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Clear SCHEMAKIT_ROOT env var before each test."""
        monkeypatch.delenv("SCHEMAKIT_ROOT", raising=False)

    def test_returns_env_var_when_set(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify SCHEMAKIT_ROOT env var takes precedence."""
        # Given
        custom_path = "/custom/site"
        monkeypatch.setenv("SCHEMAKIT_ROOT", custom_path)

        # When
        result = get_project_root()

        # Then
        assert result == Path(custom_path)

    def test_returns_cwd_when_env_var_not_set(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify the current directory is used when SCHEMAKIT_ROOT is not set."""
        # Given
        monkeypatch.chdir(tmp_path)

        # When
        result = get_project_root()

        # Then
        assert result == tmp_path

    def test_expands_tilde_in_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify ~ is expanded in SCHEMAKIT_ROOT."""
        # Given
        monkeypatch.setenv("SCHEMAKIT_ROOT", "~/my-site")
        expected = Path.home() / "my-site"

        # When
        result = get_project_root()

        # Then
        assert result == expected
