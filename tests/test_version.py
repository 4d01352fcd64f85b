"""Test schemakit version and basic imports."""

from importlib.metadata import version

from typer.testing import CliRunner

from schemakit import __version__
from schemakit.cli import app


class TestVersion:
    """Tests for schemakit version and package structure."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_version_is_defined(self) -> None:
        """Verify that __version__ matches the installed package metadata."""
        # Given
        expected = version("schemakit-cli")

        # When
        actual = __version__

        # Then
        assert actual == expected

    def test_cli_app_is_importable(self) -> None:
        """Verify that the CLI app can be imported."""
        assert app is not None
        assert app.info.name == "schemakit"

    def test_version_flag(self) -> None:
        """Verify that --version prints the version."""
        # When
        result = self.runner.invoke(app, ["--version"])

        # Then
        assert result.exit_code == 0
        assert f"schemakit v{__version__}" in result.output
