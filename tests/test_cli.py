import os

import pytest
from click.testing import CliRunner
from unittest.mock import patch

from codebase_digest.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def fake_tokenizer():
    with patch("codebase_digest.core.tokenizer.tiktoken") as mock_tiktoken:
        mock_tiktoken.get_encoding.return_value.encode.side_effect = lambda text, **kwargs: text.split()
        yield mock_tiktoken


@pytest.fixture(autouse=True)
def clean_env():
    with patch.dict(os.environ, {"NO_COLOR": "1"}, clear=True):
        yield


class TestCli:
    def test_report(self, runner, sample_repo):
        result = runner.invoke(main, [str(sample_repo), "--no-progress"])

        assert result.exit_code == 0, result.output
        assert "ANALYSIS COMPLETE" in result.output
        assert "📁 src" in result.output
        assert "helpers.py" in result.output
        assert "FILES PROCESSED: 5" in result.output

    def test_json_output(self, runner, sample_repo):
        result = runner.invoke(main, [str(sample_repo), "--json"])

        assert result.exit_code == 0, result.output
        assert '"processedCount": 5' in result.output
        assert '"treeView"' in result.output

    def test_context_output(self, runner, sample_repo):
        result = runner.invoke(main, [str(sample_repo), "--context", "--no-progress", "-e", ".ts"])

        assert result.exit_code == 0, result.output
        assert "export class AppModule {}" in result.output
        assert "def main():" not in result.output

    def test_ignore_option_replaces_defaults(self, runner, sample_repo):
        result = runner.invoke(main, [str(sample_repo), "--json", "-i", "tests", "-e", ".py", "-e", ".js"])

        assert result.exit_code == 0, result.output
        assert "test_main.py" not in result.output
        assert "module.exports" in result.output

    def test_no_relevant_files_exits_1(self, runner, temp_workspace):
        (temp_workspace / "notes.md").write_text("nothing")

        result = runner.invoke(main, [str(temp_workspace), "--no-progress"])

        assert result.exit_code == 1
        assert "No relevant files found." in result.output

    def test_invalid_pattern_exits_1(self, runner, temp_workspace):
        result = runner.invoke(main, [str(temp_workspace), "-i", "[oops"])

        assert result.exit_code == 1
        assert "Invalid ignore pattern" in result.output

    def test_directory_from_environment(self, runner, sample_repo):
        with patch.dict(os.environ, {"CODEBASE_DIGEST_DIRECTORY": str(sample_repo)}):
            result = runner.invoke(main, ["--json"])

        assert result.exit_code == 0, result.output
        assert '"totalCount": 5' in result.output
