import asyncio

import pytest
from unittest.mock import patch

from codebase_digest.core.analyzer import CodebaseAnalyzer
from codebase_digest.core.exceptions import MemoryLimitExceededError, NoRelevantFilesError
from codebase_digest.core.models import AnalyzerConfig
from codebase_digest.core.tokenizer import TokenCounter


class TestCodebaseAnalyzer:
    @pytest.fixture
    def scenario_root(self, temp_workspace):
        root = temp_workspace / "root"
        (root / "node_modules").mkdir(parents=True)
        (root / "a.ts").write_text("x" + " " * 9)
        (root / "node_modules" / "b.ts").write_text("ignored")
        return root

    def test_initialization(self, token_counter):
        analyzer = CodebaseAnalyzer(token_counter=token_counter)
        assert analyzer.config == AnalyzerConfig()
        assert analyzer.token_counter is token_counter
        assert analyzer.truncator.max_tokens == 100_000

    def test_default_token_counter(self):
        analyzer = CodebaseAnalyzer(AnalyzerConfig(token_encoding="cl100k_base"))
        assert isinstance(analyzer.token_counter, TokenCounter)
        assert analyzer.token_counter.encoding_name == "cl100k_base"

    def test_end_to_end_scenario(self, scenario_root, token_counter):
        analyzer = CodebaseAnalyzer(AnalyzerConfig(directory=str(scenario_root)), token_counter=token_counter)

        result = asyncio.run(analyzer.analyze())

        assert result.files.total_count == 1
        assert result.files.processed_count == 1
        assert result.files.total_size == 10
        assert f"File: {scenario_root / 'a.ts'} (10 bytes)" in result.context
        assert "b.ts" not in result.context
        assert result.tree_view == "└── ☰ a.ts 10 bytes\n"
        assert result.token_count == len(result.context.split())
        assert token_counter.calls == [result.context]
        assert result.errors == ()

    def test_sample_repo(self, sample_repo, sample_config, token_counter):
        result = CodebaseAnalyzer(sample_config, token_counter=token_counter).analyze_sync()

        assert result.files.total_count == 5
        assert result.files.processed_count == 5
        assert "def helper():" in result.context
        assert "node_modules" not in result.context
        assert "Sample Repository" not in result.context
        assert len(result.tree_view.splitlines()) == 8  # 5 files plus src, src/utils and tests
        assert "📁 docs" not in result.tree_view

    def test_no_relevant_files(self, temp_workspace, token_counter, caplog):
        (temp_workspace / "notes.md").write_text("nothing to see")
        analyzer = CodebaseAnalyzer(AnalyzerConfig(directory=str(temp_workspace)), token_counter=token_counter)

        with caplog.at_level("ERROR"):
            with pytest.raises(NoRelevantFilesError, match="No relevant files found."):
                analyzer.analyze_sync()
        assert "Error generating summary" in caplog.text
        assert token_counter.calls == []

    def test_missing_directory_has_no_relevant_files(self, temp_workspace, token_counter):
        config = AnalyzerConfig(directory=str(temp_workspace / "missing"))
        with pytest.raises(NoRelevantFilesError):
            CodebaseAnalyzer(config, token_counter=token_counter).analyze_sync()

    def test_memory_limit(self, scenario_root, token_counter):
        analyzer = CodebaseAnalyzer(
            AnalyzerConfig(directory=str(scenario_root), memory_limit_mb=1),
            token_counter=token_counter,
            memory_probe=lambda: 2 * 1024 * 1024,
        )

        with pytest.raises(MemoryLimitExceededError, match="too large to process"):
            analyzer.analyze_sync()
        assert token_counter.calls == []

    def test_unknown_token_encoding_aborts(self, scenario_root, caplog):
        config = AnalyzerConfig(directory=str(scenario_root), token_encoding="no_such_encoding")
        analyzer = CodebaseAnalyzer(config)

        with patch("codebase_digest.core.tokenizer.tiktoken") as mock_tiktoken:
            mock_tiktoken.get_encoding.side_effect = ValueError("Unknown encoding no_such_encoding")
            with caplog.at_level("ERROR"):
                with pytest.raises(ValueError, match="Unknown encoding no_such_encoding"):
                    analyzer.analyze_sync()

        mock_tiktoken.get_encoding.assert_called_once_with("no_such_encoding")
        assert "Error generating summary: Unknown encoding no_such_encoding" in caplog.text

    def test_truncation(self, temp_workspace, token_counter):
        (temp_workspace / "words.py").write_text(" ".join(f"w{i}" for i in range(50)))
        config = AnalyzerConfig(directory=str(temp_workspace), max_tokens=10)

        result = CodebaseAnalyzer(config, token_counter=token_counter).analyze_sync()

        assert len(result.context.split()) == 10
        assert result.context.startswith("File: ")
        assert result.files.processed_count == 1

    def test_soft_errors_reported(self, temp_workspace, token_counter):
        (temp_workspace / "good.py").write_text("ok = True")
        (temp_workspace / "bad.py").write_text("bad = True")
        config = AnalyzerConfig(directory=str(temp_workspace))
        real_open = open

        def flaky_open(path, *args, **kwargs):
            if str(path).endswith("bad.py"):
                raise PermissionError("Permission denied")
            return real_open(path, *args, **kwargs)

        with patch("builtins.open", side_effect=flaky_open):
            result = CodebaseAnalyzer(config, token_counter=token_counter).analyze_sync()

        assert result.files.total_count == 2
        assert result.files.processed_count == 1
        assert result.has_errors()
        assert any("bad.py" in error for error in result.errors)

    def test_repeated_analyze_is_independent(self, scenario_root, token_counter):
        analyzer = CodebaseAnalyzer(AnalyzerConfig(directory=str(scenario_root)), token_counter=token_counter)

        first = analyzer.analyze_sync()
        second = analyzer.analyze_sync()

        assert first.files == second.files
        assert first.context == second.context

    def test_concurrent_analyze_calls(self, scenario_root, token_counter):
        analyzer = CodebaseAnalyzer(AnalyzerConfig(directory=str(scenario_root)), token_counter=token_counter)

        async def run_both():
            return await asyncio.gather(analyzer.analyze(), analyzer.analyze())

        first, second = asyncio.run(run_both())
        assert first.files.processed_count == second.files.processed_count == 1
        assert first.files.total_size == second.files.total_size == 10
