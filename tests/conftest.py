import pytest
import tempfile
import shutil
from pathlib import Path

from codebase_digest.core.models import AnalyzerConfig


class FakeTokenCounter:
    """Stands in for TokenCounter so tests never load a tiktoken encoding."""

    def __init__(self):
        self.calls = []

    def count(self, text: str) -> int:
        self.calls.append(text)
        return len(text.split())


@pytest.fixture
def temp_workspace():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def token_counter():
    return FakeTokenCounter()


@pytest.fixture
def sample_repo(temp_workspace):
    """Create a sample repository structure for testing."""
    repo_root = temp_workspace / "sample_repo"
    repo_root.mkdir()

    # Create directory structure
    (repo_root / "src").mkdir()
    (repo_root / "src" / "utils").mkdir()
    (repo_root / "tests").mkdir()
    (repo_root / "docs").mkdir()
    (repo_root / ".git").mkdir()
    (repo_root / "node_modules").mkdir()
    (repo_root / "empty").mkdir()

    # Create files
    (repo_root / "README.md").write_text("# Sample Repository\n\nTest repository for codebase-digest")
    (repo_root / "setup.py").write_text("from setuptools import setup\n\nsetup(name='sample')")
    (repo_root / "src" / "main.py").write_text("def main():\n    print('Hello, World!')")
    (repo_root / "src" / "app.module.ts").write_text("export class AppModule {}")
    (repo_root / "src" / "utils" / "helpers.py").write_text("def helper():\n    return 42")
    (repo_root / "tests" / "test_main.py").write_text("def test_main():\n    assert True")
    (repo_root / "docs" / "guide.md").write_text("# Guide")
    (repo_root / ".git" / "config.json").write_text('{"core": {}}')
    (repo_root / "node_modules" / "index.js").write_text("module.exports = {}")
    (repo_root / "Makefile").write_text("all:\n\techo hi")

    # Create binary file
    (repo_root / "image.png").write_bytes(b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR')

    return repo_root


@pytest.fixture
def sample_config(sample_repo):
    return AnalyzerConfig(directory=str(sample_repo))
