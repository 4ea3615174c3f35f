"""Tests for the Asymptote CLI."""

import json

import pytest
from click.testing import CliRunner

from asymptote import __version__
from asymptote.cli.main import cli

NESTED_C = """\
for (int i = 0; i < n; i++) {
    for (int j = 0; j < n; j++) {
        sum += a[i][j];
    }
}
"""


@pytest.fixture
def runner():
    return CliRunner()


class TestCLIBasics:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"Asymptote v{__version__}" in result.output

    def test_help_without_command(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "analyse" in result.output
        assert "languages" in result.output

    def test_languages(self, runner):
        result = runner.invoke(cli, ["languages"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["python  (default for auto)", "java", "c"]


class TestAnalyseCommand:
    """Tests for the analyse command."""

    def test_stdin_heuristic(self, runner):
        result = runner.invoke(
            cli,
            ["analyse", "-", "--lang", "python", "--heuristic"],
            input="for i in range(n): print(i)\n",
        )
        assert result.exit_code == 0
        assert "Time complexity: O(n)" in result.output
        assert "Confidence:      60%" in result.output
        assert "Loops:           1 (max depth 1)" in result.output
        assert "  - Detected loop bounded by n" in result.output

    def test_file_argument_json(self, runner, tmp_path):
        source = tmp_path / "matrix.c"
        source.write_text(NESTED_C)
        result = runner.invoke(cli, ["analyse", str(source), "-l", "C", "--heuristic", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["loops"] == {"count": 2, "maxDepth": 2}
        assert data["time"]["bigO"] == "O(n^2)"
        assert data["tags"] == []

    def test_tags_line(self, runner):
        result = runner.invoke(
            cli,
            ["analyse", "--lang", "java", "--heuristic"],
            input="Arrays.sort(arr);\n",
        )
        assert result.exit_code == 0
        assert "Tags:            sort" in result.output
        assert "O(n log n)" in result.output

    def test_structural_default(self, runner):
        result = runner.invoke(cli, ["analyse", "--json"], input="x = 1\n")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["time"]["bigO"] == "O(1)"

    def test_unknown_language_rejected(self, runner):
        result = runner.invoke(cli, ["analyse", "--lang", "rust"], input="")
        assert result.exit_code != 0
        assert "rust" in result.output

    def test_invalid_config(self, runner, monkeypatch):
        monkeypatch.setenv("ASYMPTOTE_SNIPPET_MAX_LENGTH", "-3")
        result = runner.invoke(cli, ["analyse", "--heuristic"], input="x = 1\n")
        assert result.exit_code == 1
        assert "Configuration error occurred." in result.output

    def test_unknown_log_level(self, runner, monkeypatch):
        monkeypatch.setenv("ASYMPTOTE_LOG_LEVEL", "LOUD")
        result = runner.invoke(cli, ["analyse", "--heuristic"], input="x = 1\n")
        assert result.exit_code == 1
        assert "Unknown log level 'LOUD'" in result.output
        assert "Traceback" not in result.output
